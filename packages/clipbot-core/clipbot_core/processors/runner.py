"""Bounded execution of external command-line tools."""

import logging
import os
import shutil
import signal
import subprocess
import tempfile
from dataclasses import dataclass
from typing import IO, Optional

from clipbot_core.errors import ToolMissing

logger = logging.getLogger(__name__)

DEFAULT_MAX_OUTPUT_BYTES = 50 * 1024 * 1024


@dataclass
class ToolResult:
    """Exit status and captured output of one tool invocation."""

    cmd: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ToolTimeout(Exception):
    """A tool ran past its wall-clock bound and was killed."""

    def __init__(self, cmd: list[str], timeout: float, stderr: str = ""):
        super().__init__(f"{cmd[0]} timed out after {timeout:g}s")
        self.cmd = cmd
        self.timeout = timeout
        self.stderr = stderr


class ToolRunner:
    """
    Run external tools with a timeout and a cap on captured output.

    stdout and stderr are spooled to anonymous temporary files rather than
    pipes, so a chatty tool cannot exhaust memory; only the first
    ``max_output_bytes`` of each stream are read back. Media never flows
    through these streams: every tool writes its product to a file path.
    """

    def __init__(self, max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES):
        self.max_output_bytes = max_output_bytes

    def which(self, tool: str) -> Optional[str]:
        """Resolve a tool on PATH."""
        return shutil.which(tool)

    def is_available(self, tool: str) -> bool:
        """Check if a tool is installed."""
        return self.which(tool) is not None

    def run(self, cmd: list[str], timeout: float) -> ToolResult:
        """
        Run a command and wait for it.

        Raises:
            ToolMissing: the executable does not exist
            ToolTimeout: the command exceeded ``timeout`` seconds
        """
        logger.debug("tool.run", extra={"cmd": cmd, "timeout": timeout})
        with tempfile.TemporaryFile() as out, tempfile.TemporaryFile() as err:
            try:
                proc = subprocess.Popen(
                    cmd,
                    stdin=subprocess.DEVNULL,
                    stdout=out,
                    stderr=err,
                    start_new_session=True,
                )
            except FileNotFoundError as e:
                raise ToolMissing(cmd[0], details=str(e)) from e

            try:
                returncode = proc.wait(timeout=timeout)
            except subprocess.TimeoutExpired as e:
                self._kill_group(proc)
                logger.warning("tool.killed", extra={"cmd": cmd, "timeout": timeout})
                raise ToolTimeout(cmd, timeout, self._read(err)) from e
            except BaseException:
                self._kill_group(proc)
                raise

            # Helpers the tool left running in the background die with it
            self._kill_group(proc)
            return ToolResult(
                cmd=cmd,
                returncode=returncode,
                stdout=self._read(out),
                stderr=self._read(err),
            )

    def _kill_group(self, proc: subprocess.Popen) -> None:
        """Kill the tool and every process it spawned, then reap it."""
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            pass
        proc.wait()

    def _read(self, stream: IO[bytes]) -> str:
        stream.seek(0)
        return stream.read(self.max_output_bytes).decode("utf-8", errors="replace")
