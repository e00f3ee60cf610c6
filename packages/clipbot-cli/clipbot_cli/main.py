"""ClipBot CLI - Main entry point."""

import logging

import typer

from clipbot_core import ArtifactKind
from clipbot_core.ai.vibestream import DEFAULT_BASE_URL
from clipbot_cli import __version__
from clipbot_cli.commands import check_command, doctor_command, export_command, serve_command

app = typer.Typer(
    name="clipbot",
    help="ClipBot CLI - Turn moments of live streams into clips, GIFs and vertical exports",
    add_completion=True,
    no_args_is_help=True,
)


@app.callback(invoke_without_command=True)
def main(
    version: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
):
    """ClipBot CLI."""
    if version:
        typer.echo(f"clipbot v{__version__}")
        raise typer.Exit()
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@app.command()
def clip(
    url: str = typer.Argument(..., help="Video URL"),
    start: float = typer.Option(0, "-s", "--start", help="Start offset in seconds"),
    duration: float = typer.Option(None, "-d", "--duration", help="Seconds (default 15)"),
    output: str = typer.Option("./output", "-o", "--output", help="Output directory"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Cut a short MP4 clip."""
    export_command(ArtifactKind.CLIP, url, start, duration, output=output, json_output=json_output)


@app.command()
def video(
    url: str = typer.Argument(..., help="Video URL"),
    start: float = typer.Option(0, "-s", "--start", help="Start offset in seconds"),
    duration: float = typer.Option(None, "-d", "--duration", help="Seconds (default 30)"),
    output: str = typer.Option("./output", "-o", "--output", help="Output directory"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Cut a longer MP4 clip."""
    export_command(ArtifactKind.VIDEO, url, start, duration, output=output, json_output=json_output)


@app.command()
def gif(
    url: str = typer.Argument(..., help="Video URL"),
    start: float = typer.Option(0, "-s", "--start", help="Start offset in seconds"),
    duration: float = typer.Option(None, "-d", "--duration", help="Seconds (default 5)"),
    fps: int = typer.Option(None, "--fps", help="Frame rate (default 10)"),
    width: int = typer.Option(None, "-w", "--width", help="Width in pixels (default 480)"),
    output: str = typer.Option("./output", "-o", "--output", help="Output directory"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Make a palette-optimized GIF."""
    export_command(
        ArtifactKind.GIF, url, start, duration, fps=fps, width=width,
        output=output, json_output=json_output,
    )


@app.command("export")
def export_vertical(
    url: str = typer.Argument(..., help="Video URL"),
    start: float = typer.Option(0, "-s", "--start", help="Start offset in seconds"),
    duration: float = typer.Option(None, "-d", "--duration", help="Seconds (default 15)"),
    platform: str = typer.Option("tiktok", "-p", "--platform", help="Platform: tiktok, youtube"),
    output: str = typer.Option("./output", "-o", "--output", help="Output directory"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Export a 1080x1920 vertical clip for TikTok or YouTube Shorts."""
    export_command(
        ArtifactKind.PLATFORM_EXPORT, url, start, duration, platform=platform,
        output=output, json_output=json_output,
    )


@app.command()
def frame(
    url: str = typer.Argument(..., help="Video URL"),
    start: float = typer.Option(0, "-s", "--start", help="Offset in seconds"),
    width: int = typer.Option(None, "-w", "--width", help="Scale to this width"),
    output: str = typer.Option("./output", "-o", "--output", help="Output directory"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Grab a single JPEG frame."""
    export_command(ArtifactKind.FRAME, url, start, width=width, output=output, json_output=json_output)


@app.command()
def check(
    url: str = typer.Argument(..., help="Live stream URL"),
    condition: str = typer.Argument(..., help="What to look for"),
    model: str = typer.Option("gemini-2.5-flash", "-m", "--model", help="gemini-2.5-flash or gpt-4o-mini"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--base-url", envvar="CLIPBOT_VIBESTREAM_URL", help="Analysis service URL"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Check a stream once against a condition."""
    check_command(url, condition, model, base_url, json_output)


@app.command()
def doctor(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Check that yt-dlp and ffmpeg are installed."""
    doctor_command(json_output)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the HTTP API."""
    serve_command(host, port, reload)


def main_entry():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main_entry()
