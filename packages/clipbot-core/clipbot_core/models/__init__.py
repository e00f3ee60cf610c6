"""Data models for clipbot."""

from clipbot_core.models.config import (
    ArtifactKind,
    Delivery,
    ExportConfig,
    KindProfile,
    LoopConfig,
    Platform,
    PlatformProfile,
    VerticalConfig,
)
from clipbot_core.models.export import Artifact, ExportRequest, ExportResult, ExportStatus

__all__ = [
    "ArtifactKind",
    "Delivery",
    "ExportConfig",
    "KindProfile",
    "LoopConfig",
    "Platform",
    "PlatformProfile",
    "VerticalConfig",
    "Artifact",
    "ExportRequest",
    "ExportResult",
    "ExportStatus",
]
