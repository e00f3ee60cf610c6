"""Assemble pipeline stage."""

import logging
from typing import Any, Optional

from clipbot_core.errors import EmptyOutput, StorageFailed
from clipbot_core.models.config import (
    ArtifactKind,
    Delivery,
    KindProfile,
    Platform,
    PlatformProfile,
    VerticalConfig,
)
from clipbot_core.models.export import Artifact, ExportRequest, ExportStatus
from clipbot_core.pipeline.base import PipelineStage, StageResult, WorkUnit
from clipbot_core.processors.storage import ArtifactStorage

logger = logging.getLogger(__name__)


class AssembleStage(PipelineStage):
    """
    Package the final file into an Artifact.

    Input: StageResult of the transcode stage
    Output: Artifact

    Small deliverables are read into memory for base64 embedding; large ones
    are copied to durable storage and referenced by URL. An inline kind
    over ``inline_max_bytes`` is persisted instead. Scratch files are left
    for the work unit's finalizer.
    """

    name = "assemble"
    status = ExportStatus.ASSEMBLING

    def __init__(
        self,
        storage: ArtifactStorage,
        profile: KindProfile,
        inline_max_bytes: int,
        platform: Optional[PlatformProfile] = None,
        vertical: Optional[VerticalConfig] = None,
    ):
        self.storage = storage
        self.profile = profile
        self.inline_max_bytes = inline_max_bytes
        self.platform = platform
        self.vertical = vertical or VerticalConfig()

    def execute(self, request: ExportRequest, unit: WorkUnit, previous: StageResult = None) -> Artifact:
        final = StageResult.inspect(previous.path)
        if not final.success:
            raise EmptyOutput("Final output is missing or empty")

        metadata = self.describe(request, previous)
        if self.profile.delivery == Delivery.INLINE and final.size <= self.inline_max_bytes:
            try:
                data = final.path.read_bytes()
            except OSError as e:
                raise StorageFailed("Could not read the final output", details=str(e)) from e
            artifact = Artifact(
                kind=request.kind,
                artifact_id=unit.id,
                mime_type=self.profile.mime_type,
                size=final.size,
                data=data,
                metadata=metadata,
            )
        else:
            filename = self.durable_name(request.kind, unit)
            stored = self.storage.persist(final.path, filename)
            artifact = Artifact(
                kind=request.kind,
                artifact_id=unit.id,
                mime_type=self.profile.mime_type,
                size=final.size,
                url=self.storage.url_for(filename),
                path=stored,
                metadata=metadata,
            )

        logger.info(
            "assemble.done",
            extra={
                "work_unit": unit.id,
                "kind": request.kind.value,
                "delivery": artifact.delivery.value,
                "size": artifact.size,
            },
        )
        return artifact

    def durable_name(self, kind: ArtifactKind, unit: WorkUnit) -> str:
        """Storage filename, e.g. ``<id>-video.mp4``; never in the scratch namespace."""
        return f"{unit.id}-{kind.value}{self.profile.extension}"

    def describe(self, request: ExportRequest, result: StageResult) -> dict[str, Any]:
        """Kind-specific response metadata."""
        match request.kind:
            case ArtifactKind.CLIP:
                return {"duration": request.duration}
            case ArtifactKind.VIDEO:
                return {
                    "duration": request.duration,
                    "message": "Video clip generated successfully",
                }
            case ArtifactKind.GIF:
                return {
                    "fps": result.metadata.get("fps"),
                    "width": result.metadata.get("width"),
                }
            case ArtifactKind.PLATFORM_EXPORT:
                platform = self.platform or PlatformProfile.get_default_profiles()[Platform.TIKTOK]
                return {
                    "platform": platform.platform.value,
                    "platformName": platform.name,
                    "duration": request.duration,
                    "resolution": result.metadata.get("resolution", self.vertical.resolution),
                    "aspectRatio": "9:16 (vertical)",
                    "metadata": {
                        "title": platform.title,
                        "description": platform.description,
                        "hashtags": platform.hashtags,
                    },
                    "message": f"{platform.name}-ready vertical clip created!",
                }
            case _:
                return {}
