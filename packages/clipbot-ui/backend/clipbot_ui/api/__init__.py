"""API routes."""

from clipbot_ui.api.exports import router as exports_router
from clipbot_ui.api.media import router as media_router
from clipbot_ui.api.stream import router as stream_router

__all__ = ["exports_router", "media_router", "stream_router"]
