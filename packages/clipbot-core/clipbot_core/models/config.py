"""Configuration models for the clipbot export pipeline."""

import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class ArtifactKind(str, Enum):
    """Kinds of deliverable the pipeline can produce."""

    CLIP = "clip"
    VIDEO = "video"
    GIF = "gif"
    PLATFORM_EXPORT = "platform-export"
    FRAME = "frame"


class Delivery(str, Enum):
    """How a finished artifact reaches the caller."""

    INLINE = "inline"  # base64 in the response body
    PERSISTED = "persisted"  # copied to durable storage, URL returned


class Platform(str, Enum):
    """Short-form platforms supported by the vertical export."""

    TIKTOK = "tiktok"
    YOUTUBE = "youtube"


@dataclass
class KindProfile:
    """Per-kind defaults and wiring."""

    kind: ArtifactKind
    default_duration: float
    fetch_timeout: float
    transcode_timeout: float
    delivery: Delivery
    mime_type: str
    extension: str

    @classmethod
    def get_default_profiles(cls) -> dict[ArtifactKind, "KindProfile"]:
        """Get the built-in profile for every artifact kind."""
        return {
            ArtifactKind.CLIP: cls(
                kind=ArtifactKind.CLIP,
                default_duration=15,
                fetch_timeout=60,
                transcode_timeout=60,
                delivery=Delivery.INLINE,
                mime_type="video/mp4",
                extension=".mp4",
            ),
            ArtifactKind.VIDEO: cls(
                kind=ArtifactKind.VIDEO,
                default_duration=30,
                fetch_timeout=120,
                transcode_timeout=120,
                delivery=Delivery.PERSISTED,
                mime_type="video/mp4",
                extension=".mp4",
            ),
            ArtifactKind.GIF: cls(
                kind=ArtifactKind.GIF,
                default_duration=5,
                fetch_timeout=60,
                transcode_timeout=30,  # per palette pass
                delivery=Delivery.INLINE,
                mime_type="image/gif",
                extension=".gif",
            ),
            ArtifactKind.PLATFORM_EXPORT: cls(
                kind=ArtifactKind.PLATFORM_EXPORT,
                default_duration=15,
                fetch_timeout=120,
                transcode_timeout=120,
                delivery=Delivery.PERSISTED,
                mime_type="video/mp4",
                extension=".mp4",
            ),
            ArtifactKind.FRAME: cls(
                kind=ArtifactKind.FRAME,
                default_duration=1,
                fetch_timeout=60,
                transcode_timeout=30,
                delivery=Delivery.INLINE,
                mime_type="image/jpeg",
                extension=".jpg",
            ),
        }


@dataclass
class PlatformProfile:
    """Caption metadata attached to a vertical export."""

    platform: Platform
    name: str
    hashtags: str
    title: str = "✨ Viral moment detected by ClipBot!"
    caption: str = "Caught this epic moment using AI-powered viral detection."

    @property
    def description(self) -> str:
        """Post description: caption line, blank line, hashtags."""
        return f"{self.caption}\n\n{self.hashtags}"

    @classmethod
    def get_default_profiles(cls) -> dict[Platform, "PlatformProfile"]:
        """Get the built-in platform profiles."""
        return {
            Platform.TIKTOK: cls(
                platform=Platform.TIKTOK,
                name="TikTok",
                hashtags="#fyp #viral #foryou #gaming #clips #ClipBot",
            ),
            Platform.YOUTUBE: cls(
                platform=Platform.YOUTUBE,
                name="YouTube Shorts",
                hashtags="#Shorts #viral #gaming #clips #ClipBot",
            ),
        }


@dataclass
class VerticalConfig:
    """Encoding settings for the 9:16 platform export."""

    width: int = 1080
    height: int = 1920
    fps: int = 30
    preset: str = "medium"
    crf: int = 23  # Quality (lower = better, larger file)
    audio_codec: str = "aac"
    audio_bitrate: str = "128k"

    @property
    def dimensions(self) -> tuple[int, int]:
        """Get output dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def resolution(self) -> str:
        """Resolution label, e.g. ``1080x1920``."""
        return f"{self.width}x{self.height}"


@dataclass
class LoopConfig:
    """Defaults for the palette-quantized animated loop."""

    fps: int = 10
    width: int = 480
    scale_flags: str = "lanczos"


@dataclass
class ExportConfig:
    """Main configuration for the export pipeline."""

    # Paths
    scratch_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    media_dir: Path = field(default_factory=lambda: Path("/data/media"))
    media_base_url: str = "/media"

    # External tools
    downloader_bin: str = "yt-dlp"
    ffmpeg_bin: str = "ffmpeg"
    ffprobe_bin: str = "ffprobe"
    source_format: str = "best[ext=mp4]/best"

    # Budgets
    work_unit_budget: float = 300.0  # seconds, whole request
    inline_max_bytes: int = 25 * 1024 * 1024
    max_tool_output_bytes: int = 50 * 1024 * 1024

    # Sub-configurations
    vertical: VerticalConfig = field(default_factory=VerticalConfig)
    loop: LoopConfig = field(default_factory=LoopConfig)
    kinds: dict[ArtifactKind, KindProfile] = field(
        default_factory=lambda: KindProfile.get_default_profiles()
    )
    platforms: dict[Platform, PlatformProfile] = field(
        default_factory=lambda: PlatformProfile.get_default_profiles()
    )

    def profile(self, kind: ArtifactKind) -> KindProfile:
        """Get the profile for an artifact kind."""
        return self.kinds[ArtifactKind(kind)]

    def platform_profile(self, platform: Optional[Platform]) -> PlatformProfile:
        """Get metadata for a platform, defaulting to TikTok."""
        return self.platforms[Platform(platform or Platform.TIKTOK)]

    def media_url(self, filename: str) -> str:
        """Public URL of a file in durable storage."""
        return f"{self.media_base_url.rstrip('/')}/{filename}"
