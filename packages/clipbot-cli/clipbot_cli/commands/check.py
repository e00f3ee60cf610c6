"""Stream check command."""

import json

import typer
from rich.console import Console

from clipbot_core import AnalysisServiceError, VibeStreamClient
from clipbot_core.ai.vibestream import AnalysisModel

console = Console()


def build_client(base_url: str) -> VibeStreamClient:
    return VibeStreamClient(base_url=base_url)


def check_command(
    url: str,
    condition: str,
    model: str = AnalysisModel.GEMINI_FLASH.value,
    base_url: str = "",
    json_output: bool = False,
) -> None:
    """
    Ask the analysis service once whether a condition holds in a stream.

    Example:
        clipbot check "https://youtube.com/watch?v=LIVE_ID" "someone scores a goal"
    """
    try:
        analysis_model = AnalysisModel(model)
    except ValueError:
        typer.echo(f"Error: unknown model {model}", err=True)
        raise typer.Exit(1)

    client = build_client(base_url)
    try:
        result = client.check_once(url, condition, model=analysis_model, include_frame=False)
    except AnalysisServiceError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        client.close()

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.triggered:
        console.print(f"[bold green]TRIGGERED[/bold green] ({result.model})")
    else:
        console.print(f"[yellow]Not triggered[/yellow] ({result.model})")
    console.print(result.explanation)
