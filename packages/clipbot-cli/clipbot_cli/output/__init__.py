"""Output formatting utilities."""

from clipbot_cli.output.progress import Spinner
from clipbot_cli.output.table import print_artifact, print_table, print_tools

__all__ = ["Spinner", "print_artifact", "print_table", "print_tools"]
