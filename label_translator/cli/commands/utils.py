"""
Shared helpers for CLI commands.
"""
import typer


def confirm_action(message: str, default: bool = False) -> bool:
    """Ask the user for confirmation."""
    return typer.confirm(message, default=default)
