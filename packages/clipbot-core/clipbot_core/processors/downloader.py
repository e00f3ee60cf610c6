"""Section downloader using yt-dlp."""

from pathlib import Path
from typing import Optional

from clipbot_core.processors.runner import ToolResult, ToolRunner

# yt-dlp exits with this code when --max-downloads is reached, even though
# the file it was asked for has been written.
MAX_DOWNLOADS_EXIT_CODE = 101


class VideoDownloader:
    """
    Download a time section of a video from YouTube and other platforms.

    Uses yt-dlp for broad platform support. This class only builds and runs
    the command; deciding whether the download worked is the fetch stage's
    job, because yt-dlp's exit status is not a reliable success signal.
    """

    def __init__(
        self,
        runner: Optional[ToolRunner] = None,
        binary: str = "yt-dlp",
        format_selector: str = "best[ext=mp4]/best",
    ):
        self.runner = runner or ToolRunner()
        self.binary = binary
        self.format_selector = format_selector

    def build_command(
        self,
        url: str,
        section: str,
        output_path: Path,
        merge_format: Optional[str] = "mp4",
    ) -> list[str]:
        """
        Build the yt-dlp command line for one section download.

        Args:
            url: Source video URL
            section: Section expression, e.g. ``*10-25``
            output_path: Exact output file path (no template fields)
            merge_format: Container to merge separate streams into
        """
        cmd = [
            self.binary,
            "-f", self.format_selector,
            "--download-sections", section,
            "-o", str(output_path),
            "--no-playlist",
            "--max-downloads", "1",
            "--quiet",
            "--no-warnings",
        ]
        if merge_format:
            cmd.extend(["--merge-output-format", merge_format])
        cmd.append(url)
        return cmd

    def download_section(
        self,
        url: str,
        section: str,
        output_path: Path,
        timeout: float,
    ) -> ToolResult:
        """
        Run the section download.

        Raises:
            ToolMissing: yt-dlp is not installed
            ToolTimeout: the download exceeded ``timeout`` seconds
        """
        return self.runner.run(self.build_command(url, section, output_path), timeout=timeout)

    def is_available(self) -> bool:
        """Check if yt-dlp is available."""
        return self.runner.is_available(self.binary)
