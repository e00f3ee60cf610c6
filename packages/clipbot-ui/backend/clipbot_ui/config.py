"""Service settings, read from the environment and ``.env``."""

import tempfile
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

from clipbot_core.ai.vibestream import DEFAULT_BASE_URL
from clipbot_core.models.config import ExportConfig


class Settings(BaseSettings):
    # Storage
    scratch_dir: str = tempfile.gettempdir()
    media_dir: str = "/data/media"
    media_base_url: str = "/media"

    # External tools
    downloader_bin: str = "yt-dlp"
    ffmpeg_bin: str = "ffmpeg"
    ffprobe_bin: str = "ffprobe"

    # Budgets
    work_unit_budget: float = 300.0  # seconds per request
    inline_max_mb: int = 25  # larger inline artifacts are persisted instead

    # Stream analysis service
    vibestream_url: str = DEFAULT_BASE_URL
    vibestream_timeout: float = 60.0

    # Twitch Helix credentials; demo mode when unset
    twitch_client_id: Optional[str] = None
    twitch_access_token: Optional[str] = None

    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    model_config = {"env_prefix": "CLIPBOT_", "env_file": ".env", "extra": "ignore"}

    def to_export_config(self) -> ExportConfig:
        """Build the pipeline configuration from these settings."""
        return ExportConfig(
            scratch_dir=Path(self.scratch_dir),
            media_dir=Path(self.media_dir),
            media_base_url=self.media_base_url,
            downloader_bin=self.downloader_bin,
            ffmpeg_bin=self.ffmpeg_bin,
            ffprobe_bin=self.ffprobe_bin,
            work_unit_budget=self.work_unit_budget,
            inline_max_bytes=self.inline_max_mb * 1024 * 1024,
        )
