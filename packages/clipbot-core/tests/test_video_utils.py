"""Tests for video and URL helpers."""

import json

import pytest

from clipbot_core.utils.video import (
    cover_geometry,
    detect_source_platform,
    extract_video_id,
    get_thumbnail_url,
    parse_probe_output,
)


@pytest.mark.parametrize(
    "url, video_id",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://youtube.com/watch?feature=share&v=dQw4w9WgXcQ&t=42", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ?t=10", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/shorts/abc_DEF-123", "abc_DEF-123"),
        ("https://www.youtube.com/live/jfKfPfyJRdk", "jfKfPfyJRdk"),
        ("https://vimeo.com/12345", None),
        ("", None),
    ],
)
def test_extract_video_id(url, video_id):
    """Test video ids from the common YouTube URL shapes."""
    assert extract_video_id(url) == video_id


def test_thumbnail_url():
    """Test quality names map to YouTube's file names."""
    assert get_thumbnail_url("abc") == "https://img.youtube.com/vi/abc/hqdefault.jpg"
    assert get_thumbnail_url("abc", "maxres").endswith("/maxresdefault.jpg")
    assert get_thumbnail_url("abc", "medium").endswith("/mqdefault.jpg")
    assert get_thumbnail_url("abc", "default").endswith("/default.jpg")


def test_detect_source_platform():
    """Test platform detection."""
    assert detect_source_platform("https://www.youtube.com/watch?v=X") == "youtube"
    assert detect_source_platform("https://youtu.be/X") == "youtube"
    assert detect_source_platform("https://www.Twitch.tv/shroud") == "twitch"
    assert detect_source_platform("https://kick.com/someone") is None


def test_parse_probe_output():
    """Test ffprobe JSON parsing."""
    raw = json.dumps({
        "streams": [{"width": 1920, "height": 1080, "codec_name": "h264", "r_frame_rate": "30000/1001"}],
        "format": {"duration": "12.5"},
    })
    info = parse_probe_output(raw)
    assert info.resolution == "1920x1080"
    assert info.duration == 12.5
    assert info.fps == pytest.approx(29.97, rel=1e-3)
    assert not info.is_vertical

    assert parse_probe_output("not json") is None
    assert parse_probe_output(json.dumps({"streams": []})) is None


@pytest.mark.parametrize(
    "source",
    [(1000, 1000), (1920, 1080), (1280, 720), (1080, 1920), (720, 1600), (640, 480), (3840, 1600), (853, 480)],
)
def test_cover_geometry_fills_canvas(source):
    """Test the scaled frame covers 1080x1920 and the crop stays inside it."""
    scaled_w, scaled_h, x, y = cover_geometry(*source, 1080, 1920)

    assert scaled_w >= 1080 and scaled_h >= 1920
    assert scaled_w % 2 == 0 and scaled_h % 2 == 0
    assert 0 <= x and x + 1080 <= scaled_w
    assert 0 <= y and y + 1920 <= scaled_h
    # One side meets the canvas; the other is cropped evenly.
    assert scaled_w == 1080 or scaled_h == 1920
    assert abs((scaled_w - 1080 - x) - x) <= 1
    assert abs((scaled_h - 1920 - y) - y) <= 1


def test_cover_geometry_rejects_bad_source():
    """Test zero-sized sources are rejected."""
    with pytest.raises(ValueError):
        cover_geometry(0, 1080, 1080, 1920)
