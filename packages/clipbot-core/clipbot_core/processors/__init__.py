"""Wrappers around external tools and storage."""

from clipbot_core.processors.downloader import VideoDownloader
from clipbot_core.processors.renderer import VideoRenderer
from clipbot_core.processors.runner import ToolResult, ToolRunner, ToolTimeout
from clipbot_core.processors.storage import ArtifactStorage

__all__ = [
    "VideoDownloader",
    "VideoRenderer",
    "ToolResult",
    "ToolRunner",
    "ToolTimeout",
    "ArtifactStorage",
]
