"""Table output formatting."""

from typing import Any, List

from rich.console import Console
from rich.table import Table as RichTable

console = Console()


def print_table(headers: List[str], rows: List[List[str]], title: str = None) -> None:
    """
    Print data as a formatted table.

    Args:
        headers: Column headers
        rows: Table rows
        title: Optional table title
    """
    table = RichTable(title=title)
    for header in headers:
        table.add_column(header)

    for row in rows:
        table.add_row(*row)

    console.print(table)


def print_artifact(artifact: Any, saved_to: str) -> None:
    """Print a finished artifact as a two-column table."""
    rows = [
        ["ID", artifact.artifact_id],
        ["Kind", artifact.kind.value],
        ["MIME type", artifact.mime_type],
        ["Size", f"{artifact.size_mb:.2f} MB"],
    ]
    for key, value in artifact.metadata.items():
        if isinstance(value, dict):
            continue
        rows.append([key, str(value)])
    rows.append(["Saved to", saved_to])

    print_table(["Field", "Value"], rows, title="Export complete")


def print_tools(status: dict[str, bool], required: List[str]) -> None:
    """Print external tool availability."""
    rows = []
    for tool, available in status.items():
        mark = "✅" if available else "❌"
        rows.append([tool, f"{mark} {'found' if available else 'missing'}", "yes" if tool in required else "no"])

    print_table(["Tool", "Status", "Required"], rows, title="External tools")
