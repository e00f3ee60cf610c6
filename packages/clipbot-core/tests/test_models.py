"""Tests for clipbot-core models and errors."""

import base64

import pytest

from clipbot_core import Artifact, ArtifactKind, ExportRequest, ExportResult, ExportStatus
from clipbot_core.errors import FetchFailed, InvalidRequest, ToolMissing
from clipbot_core.models.config import (
    Delivery,
    ExportConfig,
    KindProfile,
    Platform,
    PlatformProfile,
)


def test_request_defaults():
    """Test request defaults and section expression."""
    request = ExportRequest(source_url="https://youtube.com/watch?v=X", start_time=10, duration=15)
    request.validate()
    assert request.kind == ArtifactKind.CLIP
    assert request.end_time == 25
    assert request.section == "*10-25"


def test_request_fractional_section():
    """Test fractional offsets keep their precision."""
    request = ExportRequest(source_url="u", start_time=1.5, duration=2.25)
    assert request.section == "*1.5-3.75"


def test_request_kind_coerced_from_string():
    """Test kind and platform accept their string values."""
    request = ExportRequest(source_url="u", kind="platform-export", platform="youtube")
    request.validate()
    assert request.kind == ArtifactKind.PLATFORM_EXPORT
    assert request.platform == Platform.YOUTUBE


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"source_url": ""}, "sourceUrl is required"),
        ({"source_url": "   "}, "sourceUrl is required"),
        ({"start_time": -1}, "startTime must be >= 0"),
        ({"start_time": float("nan")}, "startTime must be >= 0"),
        ({"start_time": float("inf")}, "startTime must be >= 0"),
        ({"duration": 0}, "duration must be > 0"),
        ({"duration": -5}, "duration must be > 0"),
        ({"duration": float("nan")}, "duration must be > 0"),
        ({"duration": float("inf")}, "duration must be > 0"),
        ({"fps": 0}, "fps must be > 0"),
        ({"width": -10}, "width must be > 0"),
        ({"platform": "myspace"}, "Unknown platform"),
        ({"kind": "hologram"}, "Unknown artifact kind"),
    ],
)
def test_request_validation(overrides, message):
    """Test invalid requests are rejected before any work."""
    fields = {"source_url": "https://youtube.com/watch?v=X", **overrides}
    with pytest.raises(InvalidRequest) as excinfo:
        ExportRequest(**fields).validate()
    assert message in excinfo.value.message


def test_request_duration_defaults_per_kind():
    """Test kind profiles fill the duration."""
    profiles = KindProfile.get_default_profiles()
    expected = {
        ArtifactKind.CLIP: 15,
        ArtifactKind.VIDEO: 30,
        ArtifactKind.GIF: 5,
        ArtifactKind.PLATFORM_EXPORT: 15,
        ArtifactKind.FRAME: 1,
    }
    for kind, duration in expected.items():
        request = ExportRequest(source_url="u", kind=kind).with_defaults(profiles[kind])
        assert request.duration == duration

    explicit = ExportRequest(source_url="u", duration=7).with_defaults(profiles[ArtifactKind.CLIP])
    assert explicit.duration == 7


def test_kind_profiles():
    """Test delivery and timeouts per kind."""
    profiles = KindProfile.get_default_profiles()
    assert profiles[ArtifactKind.CLIP].delivery == Delivery.INLINE
    assert profiles[ArtifactKind.VIDEO].delivery == Delivery.PERSISTED
    assert profiles[ArtifactKind.PLATFORM_EXPORT].delivery == Delivery.PERSISTED
    assert profiles[ArtifactKind.GIF].mime_type == "image/gif"
    assert profiles[ArtifactKind.FRAME].mime_type == "image/jpeg"
    assert profiles[ArtifactKind.CLIP].fetch_timeout == 60
    assert profiles[ArtifactKind.VIDEO].fetch_timeout == 120


def test_platform_profiles():
    """Test hashtags and description layout."""
    profiles = PlatformProfile.get_default_profiles()
    tiktok = profiles[Platform.TIKTOK]
    assert tiktok.name == "TikTok"
    assert "#fyp" in tiktok.hashtags
    assert tiktok.description.endswith("\n\n" + tiktok.hashtags)
    assert profiles[Platform.YOUTUBE].hashtags.startswith("#Shorts")


def test_config_defaults():
    """Test export config defaults."""
    config = ExportConfig()
    assert config.vertical.resolution == "1080x1920"
    assert config.vertical.fps == 30
    assert config.max_tool_output_bytes == 50 * 1024 * 1024
    assert config.platform_profile(None).platform == Platform.TIKTOK
    assert config.media_url("abc-video.mp4") == "/media/abc-video.mp4"


def test_artifact_is_inline_or_persisted():
    """Test an artifact needs exactly one of data or url."""
    with pytest.raises(ValueError, match="exactly one of data or url"):
        Artifact(kind=ArtifactKind.CLIP, artifact_id="a", mime_type="video/mp4", size=1)
    with pytest.raises(ValueError, match="exactly one of data or url"):
        Artifact(
            kind=ArtifactKind.CLIP, artifact_id="a", mime_type="video/mp4", size=1,
            data=b"x", url="/media/a",
        )


def test_inline_artifact_response():
    """Test inline responses carry base64 data under the kind's key."""
    artifact = Artifact(
        kind=ArtifactKind.GIF,
        artifact_id="abc",
        mime_type="image/gif",
        size=3,
        data=b"GIF",
        metadata={"fps": 10, "width": 480},
    )
    response = artifact.to_response()
    assert response["success"] is True
    assert response["gifId"] == "abc"
    assert base64.b64decode(response["gifData"]) == b"GIF"
    assert response["size"] == 3
    assert response["fps"] == 10
    assert "downloadUrl" not in response


def test_persisted_artifact_response():
    """Test persisted responses carry a URL and a human size."""
    artifact = Artifact(
        kind=ArtifactKind.VIDEO,
        artifact_id="abc",
        mime_type="video/mp4",
        size=40 * 1024 * 1024,
        url="/media/abc-video.mp4",
    )
    response = artifact.to_response()
    assert response["clipId"] == "abc"
    assert response["downloadUrl"] == "/media/abc-video.mp4"
    assert response["size"] == "40.00 MB"
    assert response["sizeBytes"] == 40 * 1024 * 1024
    assert "videoData" not in response


def test_result_state_machine():
    """Test terminal states cannot be left."""
    result = ExportResult(request=ExportRequest(source_url="u"))
    assert result.status == ExportStatus.VALIDATING
    result.update_status(ExportStatus.TOOL_CHECK)
    result.fail(FetchFailed("boom", details="stderr text"))

    assert result.status == ExportStatus.FAILED
    assert result.finished_at is not None
    assert result.category == "FetchFailed"
    with pytest.raises(RuntimeError):
        result.update_status(ExportStatus.FETCHING)

    assert result.to_response() == {
        "success": False,
        "error": "boom",
        "category": "FetchFailed",
        "details": "stderr text",
    }


def test_tool_missing_message():
    """Test the missing-tool message names the tool."""
    error = ToolMissing("yt-dlp")
    assert error.tool == "yt-dlp"
    assert error.message == "yt-dlp is not installed on the server"
    assert error.to_dict()["category"] == "ToolMissing"
