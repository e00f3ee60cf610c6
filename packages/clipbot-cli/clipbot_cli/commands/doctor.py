"""Environment check command."""

import json

import typer

from clipbot_core import ExportPipeline
from clipbot_cli.output.table import print_tools


def build_pipeline() -> ExportPipeline:
    return ExportPipeline()


def doctor_command(json_output: bool = False) -> None:
    """Report whether the external tools are installed."""
    pipeline = build_pipeline()
    status = pipeline.tool_status()
    required = pipeline.required_tools

    if json_output:
        typer.echo(json.dumps(status, indent=2))
    else:
        print_tools(status, required)

    if not all(status[tool] for tool in required):
        raise typer.Exit(1)
