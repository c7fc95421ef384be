"""
Fallback resolver engine and the base class all resolvers inherit from.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable

from sysmon_core.normalize import Extractor, plain
from sysmon_core.runner import ExecutionError, ProcessRunner

if TYPE_CHECKING:
    from sysmon_core.platforms import CommandTable

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

# Characters of stderr kept in log lines
STDERR_EXCERPT = 200


@dataclass(frozen=True)
class Strategy:
    """One named attempt at producing a raw value."""

    name: str
    program: str
    args: tuple[str, ...] = ()
    extract: Extractor = field(default=plain, compare=False)

    @property
    def command_line(self) -> str:
        return " ".join([self.program, *self.args])


def resolve_chain(
    runner: ProcessRunner,
    strategies: Iterable[Strategy],
    is_valid: Callable[[str], bool],
    default: str | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """
    Try each strategy in order and return the first valid value.

    Spawn failures and non-zero exits are logged and skipped. Strategies
    after the first valid one are never run.

    Args:
        runner: Process runner used for every strategy.
        strategies: Ordered strategies, most authoritative first.
        is_valid: Predicate applied to the extracted value.
        default: Value returned when every strategy fails. If None,
                 exhaustion raises ResolutionError instead.
        logger: Logger for attempt diagnostics.

    Returns:
        The first valid extracted value, or the default.

    Raises:
        ResolutionError: If the chain is exhausted and no default is given.
    """
    log = logger or logging.getLogger(__name__)
    attempted = 0

    for strategy in strategies:
        attempted += 1
        log.debug(f"Trying strategy {strategy.name}: {strategy.command_line}")

        try:
            result = runner.run(strategy.program, strategy.args)
        except ExecutionError as e:
            log.debug(f"Strategy {strategy.name} could not run: {e}")
            continue

        if not result.success:
            log.debug(
                f"Strategy {strategy.name} failed with exit status {result.returncode}: "
                f"{result.stderr.strip()[:STDERR_EXCERPT]!r}"
            )
            continue

        value = strategy.extract(result.stdout)
        if is_valid(value):
            log.debug(f"Strategy {strategy.name} produced {value!r}")
            return value

        log.debug(f"Strategy {strategy.name} returned an invalid value: {value!r}")

    if default is None:
        raise ResolutionError(f"All {attempted} strategies failed")

    log.warning(f"All {attempted} strategies failed, using {default!r}")
    return default


def is_non_empty(value: str) -> bool:
    """Accept any value that is non-empty after trimming."""
    return bool(value.strip())


class BaseResolver(ABC):
    """
    Abstract base class for all fact resolvers.

    Subclasses implement `resolve` using the command table of the current
    platform, so the same resolver logic runs on every OS.
    """

    name: str = "base"
    description: str = "Base resolver"

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        commands: CommandTable | None = None,
        logger: logging.Logger | None = None,
    ):
        if commands is None:
            from sysmon_core.platforms import current_commands

            commands = current_commands()
        self.logger = logger or logging.getLogger(f"{__name__}.{self.name}")
        self.runner = runner or ProcessRunner(self.logger)
        self.commands = commands

    @abstractmethod
    def resolve(self) -> Any:
        """
        Resolve and return the fact.

        Returns:
            The resolved value or the resolver's sentinel.
        """
        pass

    def resolve_chain(
        self,
        strategies: Iterable[Strategy],
        is_valid: Callable[[str], bool] = is_non_empty,
        default: str | None = None,
    ) -> str:
        """Run `resolve_chain` with this resolver's runner and logger."""
        return resolve_chain(self.runner, strategies, is_valid, default, self.logger)


class ResolutionError(Exception):
    """Raised when a chain without a default is exhausted."""

    pass
