"""Video utilities."""

import json
import math
import re
from dataclasses import dataclass
from typing import Optional

_YOUTUBE_ID = re.compile(r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|shorts/|live/)|youtu\.be/)([\w-]+)")

THUMBNAIL_QUALITIES = {
    "maxres": "maxresdefault",
    "high": "hqdefault",
    "medium": "mqdefault",
    "default": "default",
}


@dataclass
class VideoInfo:
    """Information about a local video file."""

    width: int
    height: int
    duration: float = 0.0
    fps: float = 0.0
    codec: str = ""

    @property
    def aspect_ratio(self) -> float:
        """Calculate aspect ratio."""
        return self.width / self.height if self.height > 0 else 1.0

    @property
    def is_vertical(self) -> bool:
        """Check if video is taller than wide."""
        return self.aspect_ratio < 1.0

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"


def parse_probe_output(raw: str) -> Optional[VideoInfo]:
    """
    Parse ``ffprobe -of json`` output for the first video stream.

    Returns None when the output is not usable.
    """
    try:
        data = json.loads(raw)
        stream = data.get("streams", [{}])[0]
        format_data = data.get("format", {})

        # Parse framerate (e.g., "30000/1001")
        fps_str = stream.get("r_frame_rate", "0/1")
        if "/" in fps_str:
            num, den = fps_str.split("/")
            fps = float(num) / float(den) if float(den) else 0.0
        else:
            fps = float(fps_str)

        return VideoInfo(
            width=int(stream["width"]),
            height=int(stream["height"]),
            duration=float(stream.get("duration") or format_data.get("duration") or 0),
            fps=fps,
            codec=stream.get("codec_name", ""),
        )
    except (json.JSONDecodeError, ValueError, KeyError, IndexError, TypeError):
        return None


def _even_ceil(value: float) -> int:
    """Round up to the next even integer (yuv420p needs even sides)."""
    n = math.ceil(value - 1e-9)
    return n + (n % 2)


def cover_geometry(
    src_width: int,
    src_height: int,
    target_width: int,
    target_height: int,
) -> tuple[int, int, int, int]:
    """
    Scale-then-crop geometry to fill a target canvas.

    The source is scaled uniformly until both sides cover the target (the
    shorter relative side meets the target exactly), then a centered window
    of exactly ``target_width x target_height`` is cropped out.

    Returns:
        (scaled_width, scaled_height, crop_x, crop_y)
    """
    if src_width <= 0 or src_height <= 0:
        raise ValueError(f"Invalid source dimensions {src_width}x{src_height}")

    factor = max(target_width / src_width, target_height / src_height)
    scaled_w = max(_even_ceil(src_width * factor), target_width)
    scaled_h = max(_even_ceil(src_height * factor), target_height)

    crop_x = (scaled_w - target_width) // 2
    crop_y = (scaled_h - target_height) // 2
    return scaled_w, scaled_h, crop_x, crop_y


def extract_video_id(url: str) -> Optional[str]:
    """Extract the YouTube video ID from a watch, shorts, live or youtu.be URL."""
    match = _YOUTUBE_ID.search(url or "")
    return match.group(1) if match else None


def get_thumbnail_url(video_id: str, quality: str = "high") -> str:
    """
    Get a YouTube thumbnail URL.

    Args:
        video_id: YouTube video ID
        quality: maxres, high, medium or default
    """
    name = THUMBNAIL_QUALITIES.get(quality, THUMBNAIL_QUALITIES["high"])
    return f"https://img.youtube.com/vi/{video_id}/{name}.jpg"


def detect_source_platform(url: str) -> Optional[str]:
    """Return ``youtube``, ``twitch`` or None for an unsupported URL."""
    url = (url or "").lower()
    if "youtube.com" in url or "youtu.be" in url:
        return "youtube"
    if "twitch.tv" in url:
        return "twitch"
    return None
