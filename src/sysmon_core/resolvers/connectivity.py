"""
Internet connectivity prober.

Pings a short list of well-known public resolvers. One reply from any of
them counts as "internet reachable".
"""

from __future__ import annotations

from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import Sequence

from sysmon_core.resolvers.base import BaseResolver
from sysmon_core.runner import ExecutionError

DEFAULT_HOSTS = (
    "8.8.8.8",  # Google DNS
    "1.1.1.1",  # Cloudflare DNS
    "208.67.222.222",  # OpenDNS
)


class ConnectivityProber(BaseResolver):
    """Checks internet reachability with single-packet pings."""

    name = "connectivity"
    description = "Internet reachability via ping to public DNS resolvers"

    def __init__(
        self,
        runner=None,
        commands=None,
        logger=None,
        hosts: Sequence[str] = DEFAULT_HOSTS,
        parallel: bool = False,
    ):
        super().__init__(runner, commands, logger)
        self.hosts = tuple(hosts)
        self.parallel = parallel

    def resolve(self) -> bool:
        return self.probe(self.hosts)

    def probe(self, hosts: Sequence[str]) -> bool:
        """
        Return True as soon as any host replies.

        Hosts are tried in order unless `parallel` is set, in which case
        all are pinged at once and the first reply wins.
        """
        if not hosts:
            self.logger.warning("No hosts to probe for connectivity")
            return False

        self.logger.debug(f"Probing connectivity against {len(hosts)} hosts")
        if self.parallel:
            reachable = self._probe_parallel(hosts)
        else:
            reachable = any(self.ping(host) for host in hosts)

        if not reachable:
            self.logger.warning(f"No internet connectivity detected, all {len(hosts)} hosts failed")
        return reachable

    def ping(self, host: str) -> bool:
        """Ping a single host once."""
        strategy = self.commands.ping(host)
        try:
            result = self.runner.run(strategy.program, strategy.args)
        except ExecutionError as e:
            self.logger.debug(f"Could not run ping for {host}: {e}")
            return False

        if result.success:
            self.logger.info(f"Connected to {host}")
            return True

        self.logger.debug(f"Ping to {host} failed (exit status {result.returncode})")
        if result.stderr:
            self.logger.debug(f"Ping stderr: {result.stderr.strip()}")
        return False

    def _probe_parallel(self, hosts: Sequence[str]) -> bool:
        pool = ThreadPoolExecutor(max_workers=len(hosts), thread_name_prefix="ping")
        try:
            pending = {pool.submit(self.ping, host) for host in hosts}
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                if any(future.result() for future in done):
                    return True
            return False
        finally:
            # Outstanding pings finish on their own; don't wait for them
            pool.shutdown(wait=False, cancel_futures=True)
