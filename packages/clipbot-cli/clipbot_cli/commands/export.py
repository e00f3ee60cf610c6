"""Export commands: clip, video, gif, export and frame."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from clipbot_core import Artifact, ArtifactKind, ExportConfig, ExportPipeline, ExportRequest
from clipbot_cli.output.progress import Spinner
from clipbot_cli.output.table import print_artifact

console = Console()


def build_pipeline(output_dir: Path) -> ExportPipeline:
    """Pipeline whose durable storage is the output directory."""
    return ExportPipeline(ExportConfig(media_dir=output_dir, media_base_url=str(output_dir)))


def save_artifact(artifact: Artifact, output_dir: Path, extension: str) -> Path:
    """
    Write an artifact into the output directory.

    Inline payloads are decoded to a file; persisted artifacts already
    live in the output directory.
    """
    if artifact.path is not None:
        return artifact.path

    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / f"{artifact.artifact_id}-{artifact.kind.value}{extension}"
    target.write_bytes(artifact.data)
    return target


def export_command(
    kind: ArtifactKind,
    url: str,
    start: float = 0.0,
    duration: Optional[float] = None,
    fps: Optional[int] = None,
    width: Optional[int] = None,
    platform: Optional[str] = None,
    output: str = "./output",
    json_output: bool = False,
) -> None:
    """
    Run one export locally and save the result.

    Example:
        clipbot gif "https://youtube.com/watch?v=VIDEO_ID" --start 42 --duration 4
    """
    output_dir = Path(output)
    pipeline = build_pipeline(output_dir)
    request = ExportRequest(
        source_url=url,
        kind=kind,
        start_time=start,
        duration=duration,
        fps=fps,
        width=width,
        platform=platform,
    )

    if json_output:
        result = pipeline.run(request)
    else:
        with Spinner(f"Exporting {kind.value} from {url[:40]}...", console_obj=console) as spinner:
            result = pipeline.run(request, progress_callback=spinner.status)

    if not result.success:
        if json_output:
            typer.echo(json.dumps(result.to_response(), indent=2))
        else:
            console.print(f"[red]✗[/red] {result.error.category}: {result.error.message}")
            if result.error.details:
                console.print(f"[dim]{result.error.details.strip()[-2000:]}[/dim]")
        raise typer.Exit(1)

    artifact = result.artifact
    saved = save_artifact(artifact, output_dir, pipeline.config.profile(kind).extension)

    if json_output:
        response = result.to_response()
        response.pop(Artifact.DATA_KEYS[artifact.kind], None)
        response["path"] = str(saved)
        typer.echo(json.dumps(response, indent=2))
    else:
        print_artifact(artifact, str(saved))
