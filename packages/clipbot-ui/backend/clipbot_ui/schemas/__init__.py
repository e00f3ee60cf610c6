"""Pydantic request schemas."""

from clipbot_ui.schemas.export import ExportBody
from clipbot_ui.schemas.stream import StreamCheckBody, StreamMonitorBody

__all__ = ["ExportBody", "StreamCheckBody", "StreamMonitorBody"]
