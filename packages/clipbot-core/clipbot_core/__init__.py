"""
ClipBot Core

Pure Python library that turns a time window of an online video into a
finished media file. No CLI, no UI - just the export pipeline and the
clients it is fed by.
"""

from clipbot_core.errors import (
    EmptyOutput,
    ExportError,
    FetchFailed,
    FetchTimeout,
    InvalidRequest,
    StorageFailed,
    ToolMissing,
    TranscodeFailed,
)
from clipbot_core.models.config import ArtifactKind, Delivery, ExportConfig, Platform, PlatformProfile
from clipbot_core.models.export import Artifact, ExportRequest, ExportResult, ExportStatus
from clipbot_core.pipeline.base import PipelineStage, StageResult, WorkUnit
from clipbot_core.pipeline.export import ExportPipeline
from clipbot_core.processors.downloader import VideoDownloader
from clipbot_core.processors.renderer import VideoRenderer
from clipbot_core.processors.runner import ToolRunner
from clipbot_core.processors.storage import ArtifactStorage
from clipbot_core.ai.vibestream import AnalysisServiceError, VibeStreamClient
from clipbot_core.platforms.twitch import TwitchClient

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ExportError",
    "InvalidRequest",
    "ToolMissing",
    "FetchFailed",
    "FetchTimeout",
    "TranscodeFailed",
    "EmptyOutput",
    "StorageFailed",
    # Models
    "ArtifactKind",
    "Delivery",
    "ExportConfig",
    "Platform",
    "PlatformProfile",
    "Artifact",
    "ExportRequest",
    "ExportResult",
    "ExportStatus",
    # Pipeline
    "ExportPipeline",
    "PipelineStage",
    "StageResult",
    "WorkUnit",
    # Processors
    "ToolRunner",
    "VideoDownloader",
    "VideoRenderer",
    "ArtifactStorage",
    # Clients
    "VibeStreamClient",
    "AnalysisServiceError",
    "TwitchClient",
]
