"""CLI commands."""

from clipbot_cli.commands.check import check_command
from clipbot_cli.commands.doctor import doctor_command
from clipbot_cli.commands.export import export_command
from clipbot_cli.commands.serve import serve_command

__all__ = [
    "check_command",
    "doctor_command",
    "export_command",
    "serve_command",
]
