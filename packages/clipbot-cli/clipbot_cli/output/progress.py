"""Progress utilities."""

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from clipbot_core import ExportStatus

console = Console()

STATUS_TEXT = {
    ExportStatus.VALIDATING: "Validating request...",
    ExportStatus.TOOL_CHECK: "Checking yt-dlp and ffmpeg...",
    ExportStatus.FETCHING: "Downloading section...",
    ExportStatus.TRANSCODING: "Transcoding...",
    ExportStatus.ASSEMBLING: "Packaging artifact...",
    ExportStatus.DONE: "Done",
    ExportStatus.FAILED: "Failed",
}


class Spinner:
    """Simple spinner for indeterminate progress."""

    def __init__(self, text: str = "Loading...", console_obj=None):
        self.text = text
        self.console = console_obj or console
        self._progress = None
        self._task = None

    def __enter__(self):
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.__enter__()
        self._task = self._progress.add_task(self.text)
        return self

    def __exit__(self, *args):
        self._progress.__exit__(*args)

    def update(self, text: str):
        """Update spinner text."""
        if self._progress and self._task is not None:
            self._progress.update(self._task, description=text)

    def status(self, status: ExportStatus) -> None:
        """Show the export state the pipeline just entered."""
        self.update(STATUS_TEXT.get(status, status.value))
