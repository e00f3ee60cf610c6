"""Domain models for export requests, artifacts and results."""

import base64
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from clipbot_core.errors import ExportError, InvalidRequest
from clipbot_core.models.config import ArtifactKind, Delivery, KindProfile, Platform


class ExportStatus(str, Enum):
    """Lifecycle of one export request."""

    VALIDATING = "validating"
    TOOL_CHECK = "tool_check"
    FETCHING = "fetching"
    TRANSCODING = "transcoding"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExportStatus.DONE, ExportStatus.FAILED)


def format_seconds(value: float) -> str:
    """Render seconds without a trailing ``.0`` (``10`` not ``10.0``)."""
    return f"{value:g}"


@dataclass
class ExportRequest:
    """One user-initiated export of a time window of a video."""

    source_url: str
    kind: ArtifactKind = ArtifactKind.CLIP
    start_time: float = 0.0
    duration: Optional[float] = None  # None = kind default

    # Loop / frame options
    fps: Optional[int] = None
    width: Optional[int] = None

    # Vertical export options
    platform: Optional[Platform] = None

    def validate(self) -> None:
        """Raise InvalidRequest if the request cannot be processed."""
        if not self.source_url or not self.source_url.strip():
            raise InvalidRequest("sourceUrl is required")
        try:
            self.kind = ArtifactKind(self.kind)
        except ValueError:
            raise InvalidRequest(f"Unknown artifact kind: {self.kind}") from None
        if self.start_time is None or not math.isfinite(self.start_time) or self.start_time < 0:
            raise InvalidRequest("startTime must be >= 0")
        if self.duration is not None and (not math.isfinite(self.duration) or self.duration <= 0):
            raise InvalidRequest("duration must be > 0")
        if self.fps is not None and self.fps <= 0:
            raise InvalidRequest("fps must be > 0")
        if self.width is not None and self.width <= 0:
            raise InvalidRequest("width must be > 0")
        if self.platform is not None:
            try:
                self.platform = Platform(self.platform)
            except ValueError:
                raise InvalidRequest(f"Unknown platform: {self.platform}") from None

    def with_defaults(self, profile: KindProfile) -> "ExportRequest":
        """Fill the duration from the kind profile when not given."""
        if self.duration is None:
            self.duration = profile.default_duration
        return self

    @property
    def end_time(self) -> float:
        return self.start_time + (self.duration or 0)

    @property
    def section(self) -> str:
        """Downloader section expression, e.g. ``*10-25``."""
        return f"*{format_seconds(self.start_time)}-{format_seconds(self.end_time)}"


@dataclass
class Artifact:
    """
    A finished deliverable.

    Exactly one of ``data`` (inline payload) or ``url`` (durable storage
    reference) is set.
    """

    kind: ArtifactKind
    artifact_id: str
    mime_type: str
    size: int
    data: Optional[bytes] = None
    url: Optional[str] = None
    path: Optional[Path] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    # Response key names per kind
    ID_KEYS = {
        ArtifactKind.GIF: "gifId",
        ArtifactKind.FRAME: "frameId",
    }
    DATA_KEYS = {
        ArtifactKind.CLIP: "clipData",
        ArtifactKind.VIDEO: "videoData",
        ArtifactKind.PLATFORM_EXPORT: "videoData",
        ArtifactKind.GIF: "gifData",
        ArtifactKind.FRAME: "frameData",
    }

    def __post_init__(self):
        if (self.data is None) == (self.url is None):
            raise ValueError("Artifact needs exactly one of data or url")

    @property
    def delivery(self) -> Delivery:
        return Delivery.INLINE if self.data is not None else Delivery.PERSISTED

    @property
    def size_mb(self) -> float:
        """File size in megabytes."""
        return self.size / (1024 * 1024)

    def encoded(self) -> str:
        """Base64 text of the inline payload."""
        return base64.b64encode(self.data).decode("ascii")

    def to_response(self) -> dict[str, Any]:
        """Serialize into the success response shape."""
        response: dict[str, Any] = {
            "success": True,
            self.ID_KEYS.get(self.kind, "clipId"): self.artifact_id,
            "mimeType": self.mime_type,
        }
        if self.delivery == Delivery.INLINE:
            response[self.DATA_KEYS[self.kind]] = self.encoded()
            response["size"] = self.size
        else:
            response["downloadUrl"] = self.url
            response["size"] = f"{self.size_mb:.2f} MB"
            response["sizeBytes"] = self.size
        response.update(self.metadata)
        return response


@dataclass
class ExportResult:
    """Outcome of one pipeline execution."""

    request: ExportRequest
    status: ExportStatus = ExportStatus.VALIDATING
    work_unit_id: Optional[str] = None
    artifact: Optional[Artifact] = None
    error: Optional[ExportError] = None
    history: list[ExportStatus] = field(default_factory=lambda: [ExportStatus.VALIDATING])
    started_at: datetime = field(default_factory=datetime.utcnow)
    finished_at: Optional[datetime] = None

    def update_status(self, status: ExportStatus) -> None:
        """Move to the next state; terminal states cannot be left."""
        if self.status.is_terminal:
            raise RuntimeError(f"Export already finished with status {self.status.value}")
        self.status = status
        self.history.append(status)
        if status.is_terminal:
            self.finished_at = datetime.utcnow()

    def fail(self, error: ExportError) -> "ExportResult":
        self.error = error
        self.update_status(ExportStatus.FAILED)
        return self

    def complete(self, artifact: Artifact) -> "ExportResult":
        self.artifact = artifact
        self.update_status(ExportStatus.DONE)
        return self

    @property
    def success(self) -> bool:
        return self.status == ExportStatus.DONE and self.artifact is not None

    @property
    def category(self) -> Optional[str]:
        return self.error.category if self.error else None

    def to_response(self) -> dict[str, Any]:
        """Uniform response: artifact fields on success, error fields on failure."""
        if self.success:
            return self.artifact.to_response()
        return self.error.to_dict()
