"""Fetch pipeline stage."""

import logging
from typing import Any

from clipbot_core.errors import EmptyOutput, FetchFailed, FetchTimeout
from clipbot_core.models.export import ExportRequest, ExportStatus
from clipbot_core.pipeline.base import PipelineStage, StageResult, WorkUnit
from clipbot_core.processors.downloader import VideoDownloader
from clipbot_core.processors.runner import ToolTimeout

logger = logging.getLogger(__name__)


class FetchStage(PipelineStage):
    """
    Download the requested time window to a scratch file.

    Input: request.source_url, request.section
    Output: StageResult for ``clip-<id>-source.mp4``

    yt-dlp reports a non-zero exit when its --max-downloads guard trips,
    even after writing the file. So exit status and output are judged
    together: the fetch fails only when the exit is non-zero *and* the
    output is missing or empty.
    """

    name = "fetch"
    status = ExportStatus.FETCHING

    def __init__(self, downloader: VideoDownloader, timeout: float = 60):
        self.downloader = downloader
        self.timeout = timeout

    def execute(self, request: ExportRequest, unit: WorkUnit, previous: Any = None) -> StageResult:
        output_path = unit.path(".mp4", label="source")
        timeout = unit.timeout_for(self.timeout)
        if timeout <= 0:
            raise FetchTimeout(f"No time left to download (budget {unit.budget:g}s)")

        try:
            tool_result = self.downloader.download_section(
                request.source_url,
                request.section,
                output_path,
                timeout=timeout,
            )
        except ToolTimeout as e:
            raise FetchTimeout(
                f"Download timed out after {timeout:g}s; try a shorter window",
                details=e.stderr,
            ) from e

        result = StageResult.inspect(output_path, tool_result)
        return self.judge(result)

    def judge(self, result: StageResult) -> StageResult:
        """Fuse exit status with the output check."""
        if result.success:
            if result.returncode:
                logger.info(
                    "fetch.nonzero_exit_with_output",
                    extra={"returncode": result.returncode, "size": result.size},
                )
            return result

        if result.returncode:
            raise FetchFailed(
                f"Download failed (yt-dlp exit code {result.returncode})",
                details=result.stderr,
            )
        if result.is_empty:
            raise EmptyOutput("Downloader produced an empty file", details=result.stderr)
        raise FetchFailed("Downloader reported success but wrote no file", details=result.stderr)
