"""Tests for the bounded tool runner (spawns the current interpreter)."""

import sys
import time

import pytest

from clipbot_core.errors import ToolMissing
from clipbot_core.processors.runner import ToolRunner, ToolTimeout


def test_run_captures_output():
    """Test exit status and output are captured."""
    result = ToolRunner().run(
        [sys.executable, "-c", "import sys; print('out'); sys.stderr.write('err'); sys.exit(3)"],
        timeout=30,
    )
    assert result.returncode == 3
    assert not result.ok
    assert result.stdout.strip() == "out"
    assert result.stderr == "err"


def test_output_is_capped():
    """Test captured output never exceeds the cap."""
    result = ToolRunner(max_output_bytes=10).run(
        [sys.executable, "-c", "print('x' * 100000)"],
        timeout=30,
    )
    assert result.ok
    assert result.stdout == "x" * 10


def test_missing_tool():
    """Test a missing executable raises ToolMissing."""
    with pytest.raises(ToolMissing) as excinfo:
        ToolRunner().run(["clipbot-no-such-tool", "--version"], timeout=5)
    assert excinfo.value.tool == "clipbot-no-such-tool"
    assert not ToolRunner().is_available("clipbot-no-such-tool")


def test_timeout():
    """Test a slow tool raises ToolTimeout."""
    with pytest.raises(ToolTimeout) as excinfo:
        ToolRunner().run([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5)
    assert excinfo.value.timeout == 0.5


def test_timeout_kills_spawned_processes(tmp_path):
    """Test a timeout also kills the processes the tool started."""
    marker = tmp_path / "late.part"
    helper = f"import time; time.sleep(1); open({str(marker)!r}, 'w').write('data')"
    script = (
        "import subprocess, sys, time; "
        f"subprocess.Popen([sys.executable, '-c', {helper!r}]); "
        "time.sleep(10)"
    )

    with pytest.raises(ToolTimeout):
        ToolRunner().run([sys.executable, "-c", script], timeout=0.5)

    time.sleep(1.5)
    assert not marker.exists()
