"""
Main CLI application using Typer.

Entry point: python -m label_translator.cli
CLI Name: label-translator
"""
import typer

from label_translator import __version__ as app_version

app = typer.Typer(
    name="label-translator",
    help="Label Translator - apply translated metadata labels in bulk",
    no_args_is_help=True,
)

@app.command()
def version():
    """Show CLI version information."""
    typer.echo(f"Label Translator version {app_version}")

# Register commands
from label_translator.cli.commands import import_cmd
app.command(name="import")(import_cmd.import_translations)
