"""Stream analysis schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class StreamCheckBody(BaseModel):
    """Check a stream once against a condition."""

    youtubeUrl: Optional[str] = Field(None, description="Live stream URL")
    condition: Optional[str] = Field(None, description="What to look for, in plain words")
    model: Optional[str] = Field(None, description="gemini-2.5-flash or gpt-4o-mini")


class StreamMonitorBody(StreamCheckBody):
    """Start continuous monitoring."""

    intervalSeconds: Optional[int] = Field(None, description="Seconds between checks")
