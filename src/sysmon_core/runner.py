"""
Process runner for Sysmon Core.

Every resolver shells out through this module. Children never get a console
window or an interactive stdin.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Hides the console window of children spawned from a GUI process on Windows.
CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0x08000000)


@dataclass(frozen=True)
class CommandResult:
    """Captured output of one process invocation."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """
    Runs external commands and captures their output.

    A non-zero exit status is a normal result. Only a process that could not
    be started at all (or that exceeded an explicit timeout) raises
    ExecutionError.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def run(
        self,
        program: str,
        args: list[str] | tuple[str, ...] = (),
        timeout: float | None = None,
    ) -> CommandResult:
        """
        Run a command and return its output.

        Args:
            program: Executable name or path.
            args: Ordered argument list.
            timeout: Optional timeout in seconds. None waits for the process.

        Returns:
            CommandResult with exit status, stdout and stderr.

        Raises:
            ExecutionError: If the program cannot be spawned or times out.
        """
        cmd = [program, *args]
        kwargs = {}
        if sys.platform == "win32":
            kwargs["creationflags"] = CREATE_NO_WINDOW

        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
                **kwargs,
            )
        except FileNotFoundError as e:
            self.logger.debug(f"Command not found: {program}")
            raise ExecutionError(f"Command not found: {program}") from e
        except PermissionError as e:
            self.logger.debug(f"Permission denied running {program}")
            raise ExecutionError(f"Permission denied: {program}") from e
        except subprocess.TimeoutExpired as e:
            self.logger.warning(f"Command timed out: {' '.join(cmd)}")
            raise ExecutionError(f"Command timed out after {timeout}s: {program}") from e
        except OSError as e:
            raise ExecutionError(f"Could not run {program}: {e}") from e

        return CommandResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )


class ExecutionError(Exception):
    """Raised when a command cannot be spawned."""

    pass
