"""Shared fixtures: a fake tool runner that writes canned files."""

import json
import threading
from pathlib import Path
from typing import Callable, Optional

import pytest

from clipbot_core import ExportConfig, ExportPipeline
from clipbot_core.errors import ToolMissing
from clipbot_core.processors.runner import ToolResult, ToolRunner, ToolTimeout

Handler = Callable[[list[str], float], ToolResult]


def output_path(cmd: list[str]) -> Path:
    """Where a yt-dlp (``-o``) or ffmpeg (last argument) command writes."""
    if "-o" in cmd:
        return Path(cmd[cmd.index("-o") + 1])
    return Path(cmd[-1])


def write_file(path: Path, size: int) -> None:
    """Create a (sparse) file of exactly ``size`` bytes."""
    with open(path, "wb") as f:
        if size:
            f.seek(size - 1)
            f.write(b"\x01")


def writes(size: int = 2048, returncode: int = 0, stderr: str = "") -> Handler:
    """Tool writes ``size`` bytes to its output path and exits with ``returncode``."""

    def handler(cmd, timeout):
        write_file(output_path(cmd), size)
        return ToolResult(cmd=cmd, returncode=returncode, stderr=stderr)

    return handler


def exits(returncode: int, stderr: str = "") -> Handler:
    """Tool exits without writing anything."""

    def handler(cmd, timeout):
        return ToolResult(cmd=cmd, returncode=returncode, stderr=stderr)

    return handler


def hangs(partial_size: int = 512) -> Handler:
    """Tool writes a partial file, then runs past its timeout."""

    def handler(cmd, timeout):
        if partial_size:
            write_file(output_path(cmd), partial_size)
        raise ToolTimeout(cmd, timeout, stderr="still working")

    return handler


def probes(source: tuple[int, int] = (1920, 1080), vertical: tuple[int, int] = (1080, 1920)) -> Handler:
    """ffprobe reporting ``vertical`` for encoded exports and ``source`` otherwise."""

    def handler(cmd, timeout):
        width, height = vertical if "-vertical" in cmd[-1] else source
        stdout = json.dumps({
            "streams": [{
                "width": width,
                "height": height,
                "codec_name": "h264",
                "r_frame_rate": "30/1",
                "duration": "15.0",
            }],
            "format": {"duration": "15.0"},
        })
        return ToolResult(cmd=cmd, returncode=0, stdout=stdout)

    return handler


class FakeRunner(ToolRunner):
    """ToolRunner that never spawns a process."""

    def __init__(self, missing: Optional[set[str]] = None):
        super().__init__()
        self.missing = set(missing or ())
        self.calls: list[list[str]] = []
        self._lock = threading.Lock()
        self.handlers: dict[str, Handler] = {
            "yt-dlp": writes(4096),
            "ffmpeg": writes(2048),
            "ffprobe": probes(),
        }
        self.step_handlers: dict[str, Handler] = {}

    def on(self, tool: str, handler: Handler) -> "FakeRunner":
        self.handlers[tool] = handler
        return self

    def on_step(self, marker: str, handler: Handler) -> "FakeRunner":
        """Override the handler for commands containing ``marker`` in any argument."""
        self.step_handlers[marker] = handler
        return self

    def which(self, tool: str) -> Optional[str]:
        return None if tool in self.missing else f"/usr/bin/{tool}"

    def run(self, cmd: list[str], timeout: float) -> ToolResult:
        with self._lock:
            self.calls.append(list(cmd))
        if cmd[0] in self.missing:
            raise ToolMissing(cmd[0])
        for marker, handler in self.step_handlers.items():
            if any(marker in arg for arg in cmd):
                return handler(cmd, timeout)
        return self.handlers[cmd[0]](cmd, timeout)

    def calls_to(self, tool: str) -> list[list[str]]:
        return [cmd for cmd in self.calls if cmd[0] == tool]


@pytest.fixture
def scratch_dir(tmp_path):
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def config(tmp_path, scratch_dir):
    return ExportConfig(scratch_dir=scratch_dir, media_dir=tmp_path / "media")


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def pipeline(config, runner):
    return ExportPipeline(config, runner=runner)
