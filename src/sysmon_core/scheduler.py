"""
Background scheduler for the daily report.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sysmon_core.core import SystemMonitor

logger = logging.getLogger(__name__)


class DailyScheduler:
    """
    Periodically triggers `SystemMonitor.send_daily_data`.

    The first check runs as soon as the scheduler starts. Later checks run
    every `interval` seconds; the monitor itself skips days already sent.
    """

    def __init__(self, monitor: SystemMonitor, interval: float = 3600):
        self.monitor = monitor
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the scheduler thread. Duplicate starts are ignored."""
        if self.running:
            logger.warning("Scheduler already running, ignoring duplicate start")
            return

        logger.info(f"Starting daily scheduler (check every {self.interval:g}s)")
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="sysmon-scheduler", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Signal the scheduler to stop and wait for the thread to exit."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Scheduler stopped")

    def run_forever(self) -> None:
        """Run checks in the calling thread until `stop` is called."""
        self._stop.clear()
        self._run()

    def _run(self) -> None:
        while not self._stop.is_set():
            logger.debug("Running scheduled check")
            self.check()
            self._stop.wait(self.interval)

    def check(self) -> bool:
        """
        Run one check; returns True if a report was sent.

        Days already sent are skipped before any host is probed. Connectivity
        is probed once, inside the send.
        """
        return self.monitor.send_daily_data()
