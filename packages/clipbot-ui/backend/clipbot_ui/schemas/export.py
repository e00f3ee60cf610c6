"""Export request schemas."""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from clipbot_core import ArtifactKind, ExportRequest


class ExportBody(BaseModel):
    """Body shared by every export route."""

    source_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("sourceUrl", "youtubeUrl", "source_url"),
        description="Video to export from",
    )
    start_time: float = Field(
        0,
        validation_alias=AliasChoices("startTime", "start_time"),
        allow_inf_nan=False,
        description="Offset into the video in seconds",
    )
    duration: Optional[float] = Field(None, allow_inf_nan=False, description="Seconds; defaults per kind")
    fps: Optional[int] = Field(None, description="GIF frame rate")
    width: Optional[int] = Field(None, description="GIF or frame width in pixels")
    platform: Optional[str] = Field(None, description="Vertical export target: tiktok, youtube")

    def to_request(self, kind: ArtifactKind) -> ExportRequest:
        return ExportRequest(
            source_url=self.source_url or "",
            kind=kind,
            start_time=self.start_time,
            duration=self.duration,
            fps=self.fps,
            width=self.width,
            platform=self.platform,
        )
