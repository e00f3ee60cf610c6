"""Tests for the transcode variants."""

import pytest

from clipbot_core import ExportRequest
from clipbot_core.errors import EmptyOutput, TranscodeFailed
from clipbot_core.pipeline.base import StageResult, WorkUnit
from clipbot_core.pipeline.stages.transcode import LoopStage, RemuxStage, StillStage, VerticalStage
from clipbot_core.processors.renderer import VideoRenderer

from conftest import FakeRunner, exits, hangs, probes, write_file, writes


@pytest.fixture
def unit(scratch_dir):
    with WorkUnit(scratch_dir) as unit:
        yield unit


@pytest.fixture
def fetched(unit):
    path = unit.path(".mp4", label="source")
    write_file(path, 4096)
    return StageResult.inspect(path)


def make_request(kind="clip", **options):
    request = ExportRequest(source_url="https://youtube.com/watch?v=X", kind=kind, duration=5, **options)
    request.validate()
    return request


def test_remux(unit, fetched):
    """Test remux copies streams into a fast-start MP4."""
    runner = FakeRunner()
    result = RemuxStage(VideoRenderer(runner=runner)).execute(make_request(), unit, fetched)

    cmd = runner.calls_to("ffmpeg")[0]
    assert cmd[cmd.index("-c") + 1] == "copy"
    assert "+faststart" in cmd
    assert cmd[cmd.index("-i") + 1] == str(fetched.path)
    assert result.path.name == f"clip-{unit.id}.mp4"
    assert result.success


def test_ffmpeg_exit_status_is_trusted(unit, fetched):
    """Test a non-zero ffmpeg exit fails even if a file was written."""
    runner = FakeRunner().on("ffmpeg", writes(2048, returncode=1, stderr="Invalid data"))
    with pytest.raises(TranscodeFailed) as excinfo:
        RemuxStage(VideoRenderer(runner=runner)).execute(make_request(), unit, fetched)
    assert excinfo.value.details == "Invalid data"


def test_empty_transcode_output(unit, fetched):
    """Test a zero-byte output is EmptyOutput."""
    runner = FakeRunner().on("ffmpeg", writes(0))
    with pytest.raises(EmptyOutput):
        RemuxStage(VideoRenderer(runner=runner)).execute(make_request(), unit, fetched)


def test_transcode_timeout(unit, fetched):
    """Test a transcode timeout fails the stage."""
    runner = FakeRunner().on("ffmpeg", hangs())
    with pytest.raises(TranscodeFailed) as excinfo:
        RemuxStage(VideoRenderer(runner=runner), timeout=60).execute(make_request(), unit, fetched)
    assert "timed out" in excinfo.value.message


def test_loop_runs_palette_before_application(unit, fetched):
    """Test both GIF passes run in order with the same filter."""
    runner = FakeRunner()
    result = LoopStage(VideoRenderer(runner=runner)).execute(make_request("gif"), unit, fetched)

    generate, apply = runner.calls_to("ffmpeg")
    assert generate[generate.index("-vf") + 1] == "fps=10,scale=480:-1:flags=lanczos,palettegen"
    assert generate[-1] == str(unit.scratch_dir / f"clip-{unit.id}-palette.png")
    graph = apply[apply.index("-filter_complex") + 1]
    assert graph == "fps=10,scale=480:-1:flags=lanczos[x];[x][1:v]paletteuse"
    assert str(unit.scratch_dir / f"clip-{unit.id}-palette.png") in apply
    assert result.path.name == f"clip-{unit.id}.gif"
    assert result.metadata == {"fps": 10, "width": 480}


def test_loop_request_overrides(unit, fetched):
    """Test request fps and width reach both passes."""
    runner = FakeRunner()
    LoopStage(VideoRenderer(runner=runner)).execute(make_request("gif", fps=15, width=320), unit, fetched)
    for cmd in runner.calls_to("ffmpeg"):
        assert any(arg.startswith("fps=15,scale=320:-1") for arg in cmd)


def test_palette_failure_prevents_output(unit, fetched):
    """Test a failed palette pass stops before any GIF is written."""
    runner = FakeRunner().on_step("palettegen", exits(1, stderr="palettegen failed"))
    with pytest.raises(TranscodeFailed):
        LoopStage(VideoRenderer(runner=runner)).execute(make_request("gif"), unit, fetched)

    assert len(runner.calls_to("ffmpeg")) == 1
    assert not (unit.scratch_dir / f"clip-{unit.id}.gif").exists()


@pytest.mark.parametrize(
    "source, expected_filter",
    [
        ((1000, 1000), "scale=1920:1920,crop=1080:1920:420:0"),
        ((1920, 1080), "scale=3414:1920,crop=1080:1920:1167:0"),
        ((1080, 1920), "scale=1080:1920,crop=1080:1920:0:0"),
        ((720, 1600), "scale=1080:2400,crop=1080:1920:0:240"),
    ],
)
def test_vertical_geometry(unit, fetched, source, expected_filter):
    """Test scale-then-crop geometry fills 1080x1920 for any aspect ratio."""
    runner = FakeRunner().on("ffprobe", probes(source=source))
    result = VerticalStage(VideoRenderer(runner=runner)).execute(
        make_request("platform-export"), unit, fetched
    )

    cmd = runner.calls_to("ffmpeg")[0]
    assert cmd[cmd.index("-vf") + 1] == f"{expected_filter},setsar=1,fps=30"
    assert cmd[cmd.index("-c:v") + 1] == "libx264"
    assert cmd[cmd.index("-preset") + 1] == "medium"
    assert cmd[cmd.index("-crf") + 1] == "23"
    assert "+faststart" in cmd
    assert result.path.name == f"clip-{unit.id}-vertical.mp4"
    assert result.metadata["resolution"] == "1080x1920"


def test_vertical_rejects_wrong_resolution(unit, fetched):
    """Test an encode that is not 1080x1920 fails."""
    runner = FakeRunner().on("ffprobe", probes(vertical=(1080, 1080)))
    with pytest.raises(TranscodeFailed) as excinfo:
        VerticalStage(VideoRenderer(runner=runner)).execute(make_request("platform-export"), unit, fetched)
    assert "1080x1080" in excinfo.value.message


def test_vertical_without_ffprobe(unit, fetched):
    """Test the cover-scale filter is used when the source cannot be probed."""
    runner = FakeRunner(missing={"ffprobe"})
    result = VerticalStage(VideoRenderer(runner=runner)).execute(
        make_request("platform-export"), unit, fetched
    )

    vf = runner.calls_to("ffmpeg")[0]
    vf = vf[vf.index("-vf") + 1]
    assert vf.startswith("scale=1080:1920:force_original_aspect_ratio=increase,crop=1080:1920")
    assert result.success


def test_still_frame(unit, fetched):
    """Test a single scaled JPEG frame."""
    runner = FakeRunner()
    result = StillStage(VideoRenderer(runner=runner)).execute(make_request("frame", width=640), unit, fetched)

    cmd = runner.calls_to("ffmpeg")[0]
    assert cmd[cmd.index("-frames:v") + 1] == "1"
    assert cmd[cmd.index("-vf") + 1] == "scale=640:-1"
    assert result.path.name == f"clip-{unit.id}.jpg"
