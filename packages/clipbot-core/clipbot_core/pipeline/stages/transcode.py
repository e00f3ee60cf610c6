"""Transcode pipeline stages, one per output variant."""

import logging
from pathlib import Path
from typing import Callable, Optional

from clipbot_core.errors import EmptyOutput, ToolMissing, TranscodeFailed
from clipbot_core.models.config import LoopConfig
from clipbot_core.models.export import ExportRequest, ExportStatus
from clipbot_core.pipeline.base import PipelineStage, StageResult, WorkUnit
from clipbot_core.processors.renderer import VideoRenderer
from clipbot_core.processors.runner import ToolResult, ToolTimeout
from clipbot_core.utils.video import VideoInfo

logger = logging.getLogger(__name__)


class TranscodeStage(PipelineStage):
    """
    Base for FFmpeg-backed variants.

    Input: StageResult of the fetch stage
    Output: StageResult of the final sub-step

    Sub-steps run strictly in order and the first failure aborts the rest.
    Unlike the downloader, FFmpeg's exit status is trusted: a non-zero exit
    fails the step even if a (partial) file was written.
    """

    name = "transcode"
    status = ExportStatus.TRANSCODING

    def __init__(self, renderer: VideoRenderer, timeout: float = 60):
        self.renderer = renderer
        self.timeout = timeout

    def run_step(
        self,
        step: str,
        unit: WorkUnit,
        output_path: Path,
        invoke: Callable[[float], ToolResult],
    ) -> StageResult:
        """Run one sub-step under the unit's budget and check its output."""
        timeout = unit.timeout_for(self.timeout)
        if timeout <= 0:
            raise TranscodeFailed(f"{step} timed out: work unit budget of {unit.budget:g}s used up")

        try:
            tool_result = invoke(timeout)
        except ToolTimeout as e:
            raise TranscodeFailed(f"{step} timed out after {timeout:g}s", details=e.stderr) from e

        result = StageResult.inspect(output_path, tool_result)
        if not tool_result.ok:
            raise TranscodeFailed(
                f"{step} failed (ffmpeg exit code {tool_result.returncode})",
                details=tool_result.stderr,
            )
        if result.is_empty:
            raise EmptyOutput(f"{step} produced an empty file", details=tool_result.stderr)
        if not result.exists:
            raise TranscodeFailed(f"{step} produced no output", details=tool_result.stderr)

        logger.debug(
            "transcode.step_done",
            extra={"work_unit": unit.id, "step": step, "size": result.size},
        )
        return result


class RemuxStage(TranscodeStage):
    """Pass-through for ``clip`` and ``video``: new container, same streams."""

    name = "remux"

    def execute(self, request: ExportRequest, unit: WorkUnit, previous: StageResult = None) -> StageResult:
        output_path = unit.path(".mp4")
        return self.run_step(
            "remux",
            unit,
            output_path,
            lambda timeout: self.renderer.remux(previous.path, output_path, timeout=timeout),
        )


class VerticalStage(TranscodeStage):
    """
    9:16 export for short-form platforms.

    Scales so the source covers the canvas, then center-crops to exactly the
    target size. Scaling first keeps the crop predictable for any source
    aspect ratio. The encoded output is probed and rejected unless it has
    the target resolution.
    """

    name = "vertical"

    def execute(self, request: ExportRequest, unit: WorkUnit, previous: StageResult = None) -> StageResult:
        source = self._probe(previous.path, unit)
        output_path = unit.path(".mp4", label="vertical")
        result = self.run_step(
            "vertical encode",
            unit,
            output_path,
            lambda timeout: self.renderer.render_vertical(
                previous.path, output_path, timeout=timeout, source=source
            ),
        )

        target = self.renderer.vertical
        produced = self._probe(output_path, unit)
        if produced and produced.dimensions != target.dimensions:
            raise TranscodeFailed(
                f"Vertical export is {produced.resolution}, expected {target.resolution}"
            )

        result.metadata.update({"resolution": target.resolution, "fps": target.fps})
        return result

    def _probe(self, path: Path, unit: WorkUnit) -> Optional[VideoInfo]:
        """Probe dimensions; a missing or slow ffprobe only loses precision."""
        try:
            return self.renderer.probe(path, timeout=max(1.0, unit.timeout_for(30)))
        except (ToolMissing, ToolTimeout) as e:
            logger.info("transcode.probe_unavailable", extra={"work_unit": unit.id, "error": str(e)})
            return None


class LoopStage(TranscodeStage):
    """
    Animated GIF in two passes.

    Pass 1 builds a palette from the entire fps/scale-filtered sequence;
    pass 2 re-applies the same filter and maps frames through it. The
    palette must be complete before any frame is quantized, so the passes
    cannot be merged and pass 2 never starts if pass 1 failed.
    """

    name = "loop"

    def __init__(self, renderer: VideoRenderer, timeout: float = 30, loop: Optional[LoopConfig] = None):
        super().__init__(renderer, timeout)
        self.loop = loop or renderer.loop

    def execute(self, request: ExportRequest, unit: WorkUnit, previous: StageResult = None) -> StageResult:
        fps = request.fps or self.loop.fps
        width = request.width or self.loop.width

        palette_path = unit.path(".png", label="palette")
        self.run_step(
            "palette generation",
            unit,
            palette_path,
            lambda timeout: self.renderer.generate_palette(
                previous.path, palette_path, fps=fps, width=width, timeout=timeout
            ),
        )

        output_path = unit.path(".gif")
        result = self.run_step(
            "palette application",
            unit,
            output_path,
            lambda timeout: self.renderer.apply_palette(
                previous.path, palette_path, output_path, fps=fps, width=width, timeout=timeout
            ),
        )
        result.metadata.update({"fps": fps, "width": width})
        return result


class StillStage(TranscodeStage):
    """Single JPEG frame from the start of the fetched window."""

    name = "still"

    def execute(self, request: ExportRequest, unit: WorkUnit, previous: StageResult = None) -> StageResult:
        output_path = unit.path(".jpg")
        return self.run_step(
            "frame extraction",
            unit,
            output_path,
            lambda timeout: self.renderer.extract_frame(
                previous.path, output_path, timeout=timeout, width=request.width
            ),
        )
