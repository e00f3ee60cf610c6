"""Utility functions for clipbot."""

from clipbot_core.utils.video import (
    VideoInfo,
    cover_geometry,
    detect_source_platform,
    extract_video_id,
    get_thumbnail_url,
)

__all__ = [
    "VideoInfo",
    "cover_geometry",
    "detect_source_platform",
    "extract_video_id",
    "get_thumbnail_url",
]
