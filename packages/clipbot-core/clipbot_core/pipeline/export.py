"""Export pipeline orchestration."""

import logging
from typing import Callable, Optional

from clipbot_core.errors import ExportError, ToolMissing
from clipbot_core.models.config import ArtifactKind, ExportConfig, Platform
from clipbot_core.models.export import ExportRequest, ExportResult, ExportStatus
from clipbot_core.pipeline.base import PipelineStage, WorkUnit
from clipbot_core.pipeline.stages.assemble import AssembleStage
from clipbot_core.pipeline.stages.fetch import FetchStage
from clipbot_core.pipeline.stages.transcode import (
    LoopStage,
    RemuxStage,
    StillStage,
    TranscodeStage,
    VerticalStage,
)
from clipbot_core.processors.downloader import VideoDownloader
from clipbot_core.processors.renderer import VideoRenderer
from clipbot_core.processors.runner import ToolRunner
from clipbot_core.processors.storage import ArtifactStorage

logger = logging.getLogger(__name__)


class ExportPipeline:
    """
    Turn "a time window of a video" into a finished file.

    The only component that knows, per artifact kind, which stages run and
    which request fields feed them. Per request it moves through
    validating -> tool_check -> fetching -> transcoding -> assembling -> done,
    dropping to failed from any state. Nothing is retried.

    The pipeline holds no per-request state, so one instance can serve
    concurrent requests; each run gets its own WorkUnit.
    """

    def __init__(
        self,
        config: Optional[ExportConfig] = None,
        runner: Optional[ToolRunner] = None,
        downloader: Optional[VideoDownloader] = None,
        renderer: Optional[VideoRenderer] = None,
        storage: Optional[ArtifactStorage] = None,
    ):
        self.config = config or ExportConfig()
        self.runner = runner or ToolRunner(max_output_bytes=self.config.max_tool_output_bytes)
        self.downloader = downloader or VideoDownloader(
            runner=self.runner,
            binary=self.config.downloader_bin,
            format_selector=self.config.source_format,
        )
        self.renderer = renderer or VideoRenderer(
            runner=self.runner,
            ffmpeg=self.config.ffmpeg_bin,
            ffprobe=self.config.ffprobe_bin,
            vertical=self.config.vertical,
            loop=self.config.loop,
        )
        self.storage = storage or ArtifactStorage(self.config.media_dir, self.config.media_base_url)

    # -- wiring -------------------------------------------------------------

    @property
    def required_tools(self) -> list[str]:
        return [self.downloader.binary, self.renderer.ffmpeg]

    def check_tools(self) -> None:
        """Raise ToolMissing for the first required tool not on PATH."""
        for tool in self.required_tools:
            if not self.runner.is_available(tool):
                raise ToolMissing(tool)

    def tool_status(self) -> dict[str, bool]:
        """Availability of every external tool the pipeline may call."""
        tools = self.required_tools + [self.renderer.ffprobe]
        return {tool: self.runner.is_available(tool) for tool in tools}

    def transcode_stage(self, kind: ArtifactKind) -> TranscodeStage:
        """Pick the transcode variant for a kind."""
        timeout = self.config.profile(kind).transcode_timeout
        match kind:
            case ArtifactKind.CLIP | ArtifactKind.VIDEO:
                return RemuxStage(self.renderer, timeout=timeout)
            case ArtifactKind.PLATFORM_EXPORT:
                return VerticalStage(self.renderer, timeout=timeout)
            case ArtifactKind.GIF:
                return LoopStage(self.renderer, timeout=timeout, loop=self.config.loop)
            case ArtifactKind.FRAME:
                return StillStage(self.renderer, timeout=timeout)
        raise ValueError(f"No transcode stage for {kind}")

    def build_stages(self, request: ExportRequest) -> list[PipelineStage]:
        """Ordered stages for a validated request."""
        profile = self.config.profile(request.kind)
        platform = None
        if request.kind == ArtifactKind.PLATFORM_EXPORT:
            platform = self.config.platform_profile(request.platform or Platform.TIKTOK)

        return [
            FetchStage(self.downloader, timeout=profile.fetch_timeout),
            self.transcode_stage(request.kind),
            AssembleStage(
                self.storage,
                profile,
                inline_max_bytes=self.config.inline_max_bytes,
                platform=platform,
                vertical=self.config.vertical,
            ),
        ]

    # -- execution ----------------------------------------------------------

    def run(
        self,
        request: ExportRequest,
        progress_callback: Optional[Callable[[ExportStatus], None]] = None,
    ) -> ExportResult:
        """
        Execute one export.

        Every ExportError is turned into a failed result; anything else is a
        bug and propagates. Scratch files are removed on every exit path.

        Args:
            request: What to export
            progress_callback: Called with every state the export enters
        """
        result = ExportResult(request=request)

        def advance(status: ExportStatus) -> None:
            result.update_status(status)
            if progress_callback:
                progress_callback(status)

        try:
            request.validate()
            request.with_defaults(self.config.profile(request.kind))

            advance(ExportStatus.TOOL_CHECK)
            self.check_tools()

            with WorkUnit(self.config.scratch_dir, budget=self.config.work_unit_budget) as unit:
                result.work_unit_id = unit.id
                output = None
                for stage in self.build_stages(request):
                    advance(stage.status)
                    output = stage.execute(request, unit, output)

        except ExportError as e:
            logger.warning(
                "export.failed",
                extra={
                    "work_unit": result.work_unit_id,
                    "kind": str(getattr(request.kind, "value", request.kind)),
                    "stage": result.status.value,
                    "category": e.category,
                    "error": e.message,
                },
            )
            return self._finish(result.fail(e), progress_callback)

        logger.info(
            "export.done",
            extra={
                "work_unit": result.work_unit_id,
                "kind": request.kind.value,
                "size": output.size,
            },
        )
        return self._finish(result.complete(output), progress_callback)

    @staticmethod
    def _finish(
        result: ExportResult,
        progress_callback: Optional[Callable[[ExportStatus], None]],
    ) -> ExportResult:
        if progress_callback:
            progress_callback(result.status)
        return result

    def export(self, source_url: str, kind: ArtifactKind = ArtifactKind.CLIP, **options) -> ExportResult:
        """Shortcut: build the request from keyword options and run it."""
        return self.run(ExportRequest(source_url=source_url, kind=kind, **options))
