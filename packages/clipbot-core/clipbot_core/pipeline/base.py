"""Base pipeline abstractions: stages, stage results and work units."""

import logging
import secrets
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from clipbot_core.models.export import ExportRequest, ExportStatus
from clipbot_core.processors.runner import ToolResult

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "clip"


@dataclass
class StageResult:
    """
    Outcome of a fetch or transcode step.

    A step succeeded iff its output file exists and is non-empty; the tool's
    exit status is carried along for diagnostics only.
    """

    path: Path
    size: int
    exists: bool
    tool_result: Optional[ToolResult] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.exists and self.size > 0

    @property
    def is_empty(self) -> bool:
        """File was created but holds zero bytes."""
        return self.exists and self.size == 0

    @property
    def returncode(self) -> Optional[int]:
        return self.tool_result.returncode if self.tool_result else None

    @property
    def stderr(self) -> str:
        return self.tool_result.stderr if self.tool_result else ""

    @classmethod
    def inspect(cls, path: Path, tool_result: Optional[ToolResult] = None) -> "StageResult":
        """Look at what a tool left at ``path``."""
        try:
            size = path.stat().st_size if path.is_file() else 0
            exists = path.is_file()
        except OSError:
            size, exists = 0, False
        return cls(path=path, size=size, exists=exists, tool_result=tool_result)


class WorkUnit:
    """
    One pipeline execution's scratch scope.

    Owns a random, unguessable identifier, every temporary path handed out
    under it, and an elapsed-time budget. Use as a context manager: on exit,
    every owned path (plus any stray ``clip-<id>*`` file a tool left behind,
    such as partial downloads) is unlinked, whatever the outcome.
    """

    def __init__(self, scratch_dir: Path, budget: float = 300.0):
        self.id = secrets.token_hex(8)
        self.scratch_dir = Path(scratch_dir)
        self.budget = budget
        self.paths: list[Path] = []
        self.closed = False
        self._started = time.monotonic()

    def __enter__(self) -> "WorkUnit":
        self.scratch_dir.mkdir(parents=True, exist_ok=True)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    @property
    def stem(self) -> str:
        return f"{SCRATCH_PREFIX}-{self.id}"

    def path(self, suffix: str, label: Optional[str] = None) -> Path:
        """Allocate and register a scratch path, e.g. ``clip-<id>-palette.png``."""
        if self.closed:
            raise RuntimeError(f"Work unit {self.id} is already cleaned up")
        name = f"{self.stem}-{label}{suffix}" if label else f"{self.stem}{suffix}"
        path = self.scratch_dir / name
        self.paths.append(path)
        return path

    def elapsed(self) -> float:
        return time.monotonic() - self._started

    def remaining(self) -> float:
        return max(0.0, self.budget - self.elapsed())

    def timeout_for(self, stage_timeout: float) -> float:
        """Stage bound clipped to what is left of the budget."""
        return min(stage_timeout, self.remaining())

    def leftovers(self) -> list[Path]:
        """Files still on disk that belong to this unit."""
        found = {p for p in self.paths if p.exists()}
        if self.scratch_dir.is_dir():
            found.update(self.scratch_dir.glob(f"{self.stem}*"))
        return sorted(found)

    def cleanup(self) -> int:
        """Best-effort unlink of everything this unit owns. Never raises."""
        removed = 0
        for path in self.leftovers():
            try:
                path.unlink()
                removed += 1
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(
                    "workunit.cleanup_failed",
                    extra={"work_unit": self.id, "path": str(path), "error": str(e)},
                )
        self.closed = True
        logger.debug("workunit.cleaned", extra={"work_unit": self.id, "removed": removed})
        return removed


class PipelineStage(ABC):
    """
    Abstract base class for pipeline stages.

    A stage is a leaf: it gets the request, the work unit and the previous
    stage's output, and either returns its own output or raises an
    ExportError. It knows nothing about its caller.
    """

    name: str = "base_stage"
    status: ExportStatus = ExportStatus.VALIDATING

    @abstractmethod
    def execute(self, request: ExportRequest, unit: WorkUnit, previous: Any = None) -> Any:
        """
        Execute the stage logic.

        Args:
            request: The validated export request
            unit: Work unit owning every scratch path
            previous: Output of the preceding stage, if any

        Returns:
            Stage-specific result data
        """
        pass
