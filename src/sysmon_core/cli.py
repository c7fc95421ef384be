"""
Command-line interface for Sysmon Core.

Provides commands for resolving system facts, checking connectivity and
relaying reports to an API.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from sysmon_core import __version__
from sysmon_core.config import Config
from sysmon_core.core import SystemMonitor
from sysmon_core.relay import RelayError

console = Console()

# Rotating log file limits
LOG_MAX_BYTES = 5_000_000
LOG_BACKUP_COUNT = 1


def setup_logging(level: str, log_file: str | None = None) -> None:
    """Configure logging with rich handler, plus a rotating file if set."""
    handlers: list[logging.Handler] = [RichHandler(console=console, rich_tracebacks=True)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


def _spinner() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="sysmon-core")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "-V",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """
    Sysmon Core - Host diagnostics collection and relay.

    Resolve system facts, check connectivity and send reports to an API.
    """
    ctx.ensure_object(dict)

    ctx.obj["config"] = Config.load(config) if config else Config.load()

    log_level = "DEBUG" if verbose else ctx.obj["config"].log_level
    setup_logging(log_level, ctx.obj["config"].log_file)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "pretty"]),
    default="pretty",
    help="Output format",
)
@click.pass_context
def info(ctx: click.Context, format: str) -> None:
    """Show basic and platform-specific system information."""
    monitor = SystemMonitor(ctx.obj["config"])

    with _spinner() as progress:
        task = progress.add_task("Resolving system facts...", total=None)
        basic = monitor.get_basic_system_info()
        platform_info = monitor.get_platform_specific_info()
        progress.update(task, completed=True)

    if format == "json":
        import json

        console.print_json(json.dumps({**basic.to_dict(), **platform_info.to_dict()}))
        return

    table = Table(title="System Information", show_header=True)
    table.add_column("Fact", style="cyan")
    table.add_column("Value")
    for name, value in {**basic.to_dict(), **platform_info.to_dict()}.items():
        table.add_row(name, str(value))

    console.print()
    console.print(table)


@main.command()
@click.pass_context
def connectivity(ctx: click.Context) -> None:
    """Check internet connectivity."""
    config: Config = ctx.obj["config"]
    monitor = SystemMonitor(config)

    with _spinner() as progress:
        task = progress.add_task(
            f"Pinging {', '.join(config.connectivity_hosts)}...", total=None
        )
        connected = monitor.check_internet_connectivity()
        progress.update(task, completed=True)

    if connected:
        console.print("[green]✓ Internet is reachable[/]")
    else:
        console.print("[red]✗ No internet connectivity[/]")
        sys.exit(1)


@main.command()
@click.argument("endpoint")
@click.option("--data", "-d", help="Payload to send")
@click.option(
    "--file",
    "payload_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read payload from file",
)
@click.option("--token", "-t", help="Bearer token (defaults to configured api_token)")
@click.pass_context
def send(
    ctx: click.Context,
    endpoint: str,
    data: str | None,
    payload_file: Path | None,
    token: str | None,
) -> None:
    """Send a payload to ENDPOINT and print the response body."""
    config: Config = ctx.obj["config"]

    if data is None and payload_file is None:
        raise click.UsageError("Provide a payload with --data or --file")
    payload = data if data is not None else payload_file.read_text()

    monitor = SystemMonitor(config)
    try:
        body = monitor.send_to_api(endpoint, payload, token or config.api_token)
    except RelayError as e:
        console.print(f"[red]✗ Send failed: {e}[/]")
        sys.exit(1)

    console.print("[green]✓ Sent successfully[/]")
    console.print(body, markup=False, highlight=False)


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write report to file instead of stdout",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "pretty"]),
    default="pretty",
    help="Output format",
)
@click.option(
    "--upload/--no-upload",
    default=False,
    help="Send the report to the configured API",
)
@click.pass_context
def report(ctx: click.Context, output: Path | None, format: str, upload: bool) -> None:
    """
    Collect a full system report.

    By default the report is displayed; use --upload to send it to the
    configured API endpoint.
    """
    config: Config = ctx.obj["config"]
    monitor = SystemMonitor(config)

    console.print()
    console.print(
        Panel.fit(
            f"[bold blue]Sysmon Core v{__version__}[/]\nCollecting system information...",
            border_style="blue",
        )
    )
    console.print()

    with _spinner() as progress:
        task = progress.add_task("Running resolvers...", total=None)
        system_report = monitor.collect_system_data()
        progress.update(task, completed=True)

    _display_report(system_report)

    if upload:
        if not config.api_endpoint:
            console.print("[yellow]Warning: No API endpoint configured. Skipping upload.[/]")
        else:
            with _spinner() as progress:
                task = progress.add_task(f"Sending to {config.api_endpoint}...", total=None)
                try:
                    response = monitor.send_to_api(
                        config.api_endpoint, system_report.to_json(), config.api_token
                    )
                    progress.update(task, completed=True)
                    console.print("[green]✓ Upload successful[/]")
                    if ctx.obj["verbose"]:
                        console.print(f"  Response: {response}", markup=False)
                except RelayError as e:
                    progress.update(task, completed=True)
                    console.print(f"[red]✗ Upload failed: {e}[/]")

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(system_report.to_json(indent=2))
        console.print(f"\n[dim]Report saved to: {output}[/]")
    elif format == "json":
        console.print()
        console.print_json(system_report.to_json())


def _display_report(system_report) -> None:
    """Display the collected facts as a table."""
    table = Table(title="System Report", show_header=True)
    table.add_column("Fact", style="cyan")
    table.add_column("Value")

    for name, value in system_report.to_dict().items():
        table.add_row(name, str(value))

    console.print(table)


@main.command("run")
@click.option("--force", is_flag=True, help="Send even if a report was sent today")
@click.pass_context
def run_daily(ctx: click.Context, force: bool) -> None:
    """
    Send today's report if it has not been sent yet.

    Convenience command for cron or task scheduler entries.
    """
    config: Config = ctx.obj["config"]

    if not config.api_endpoint:
        console.print("[red]Error: No API endpoint configured.[/]")
        console.print("Set SYSMON_API_ENDPOINT or configure in config file.")
        sys.exit(1)

    monitor = SystemMonitor(config)
    if monitor.send_daily_data(force=force):
        console.print("[green]✓ Daily report sent[/]")
    else:
        console.print("[dim]No report sent (already sent today, disabled, or failed)[/]")


@main.command()
@click.option(
    "--interval",
    "-i",
    type=int,
    help="Seconds between checks (defaults to configured check_interval)",
)
@click.pass_context
def watch(ctx: click.Context, interval: int | None) -> None:
    """Run the daily scheduler in the foreground until interrupted."""
    from sysmon_core.scheduler import DailyScheduler

    config: Config = ctx.obj["config"]
    scheduler = DailyScheduler(SystemMonitor(config), interval or config.check_interval)

    console.print(f"[bold]Watching[/] (check every {scheduler.interval}s, Ctrl+C to stop)")
    try:
        scheduler.run_forever()
    except KeyboardInterrupt:
        scheduler.stop()
        console.print("[yellow]Stopped[/]")


@main.command("list")
def list_available() -> None:
    """List all available resolvers."""
    table = Table(title="Available Resolvers", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    from sysmon_core.resolvers import RESOLVERS

    for name, cls in RESOLVERS.items():
        table.add_row(name, cls.description)

    console.print()
    console.print(table)


@main.command("version", short_help="Display version information")
def version() -> None:
    """Display version information for Sysmon Core."""
    from sysmon_core.platforms import current_commands

    console.print()
    console.print(
        Panel.fit(
            f"[bold blue]Sysmon Core[/]\nVersion: [cyan]{__version__}[/]",
            border_style="blue",
            title="Version Information",
        )
    )
    console.print()

    table = Table(show_header=False, box=None)
    table.add_column("Component", style="dim", width=20)
    table.add_column("Version", style="cyan")

    table.add_row("Sysmon Core", __version__)
    table.add_row("Python", sys.version.split()[0])
    table.add_row("Command table", current_commands().name)

    console.print(table)
    console.print()


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show current configuration, send state and connectivity."""
    from sysmon_core import state

    config: Config = ctx.obj["config"]

    console.print()
    console.print(
        Panel.fit(
            "[bold]Sysmon Core Status[/]",
            border_style="blue",
        )
    )

    last_sent = state.get_last_sent(config.state_dir)

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("API Endpoint", config.api_endpoint or "[dim]Not configured[/]")
    table.add_row("API Enabled", "Yes" if config.api_enabled else "No")
    table.add_row("API Token", "Configured" if config.api_token else "[dim]Not set[/]")
    table.add_row("Probe Hosts", ", ".join(config.connectivity_hosts))
    table.add_row("Last Sent", last_sent.isoformat() if last_sent else "[dim]Never[/]")
    table.add_row("Log Level", config.log_level)

    console.print(table)

    console.print()
    with _spinner() as progress:
        task = progress.add_task("Testing connectivity...", total=None)
        connected = SystemMonitor(config).check_internet_connectivity()
        progress.update(task, completed=True)

    if connected:
        console.print("[green]✓ Internet is reachable[/]")
    else:
        console.print("[red]✗ No internet connectivity[/]")


@main.command()
@click.argument("output_path", type=click.Path(path_type=Path))
def init_config(output_path: Path) -> None:
    """
    Generate a sample configuration file.

    Creates a YAML configuration file with all available options
    and helpful comments.
    """
    sample_config = """# Sysmon Core Configuration

# API relay
api:
  # URL that receives the daily system report
  endpoint: https://your-server.example.com/api/v1/system-info

  # Bearer token (set via SYSMON_API_TOKEN env var for security)
  token: null

  # Request timeout in seconds
  timeout: 30

  # Enable/disable the daily send
  enabled: true

# Connectivity probe
connectivity:
  # Hosts pinged in order; one reply means the internet is reachable
  hosts:
    - 8.8.8.8
    - 1.1.1.1
    - 208.67.222.222

  # Ping all hosts at once instead of one after another
  parallel: false

# Daily send scheduling
schedule:
  # Directory for the last-sent timestamp (null = default location)
  state_dir: null

  # Seconds between scheduler checks
  check_interval: 3600

# Logging
log:
  # Log level: DEBUG, INFO, WARNING, ERROR
  level: INFO

  # Rotating log file path (null = console only)
  file: null
"""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(sample_config)
    console.print(f"[green]✓ Configuration file created: {output_path}[/]")
    console.print()
    console.print("Next steps:")
    console.print("  1. Edit the configuration file with your API endpoint")
    console.print("  2. Set your token: [cyan]export SYSMON_API_TOKEN=your-token[/]")
    console.print("  3. Send a report: [cyan]sysmon run[/]")


if __name__ == "__main__":
    main()
