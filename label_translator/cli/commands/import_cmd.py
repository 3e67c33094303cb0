"""
Import command applying a translated operations document.
"""
from __future__ import annotations

import signal
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TextColumn, TimeRemainingColumn
from rich.table import Table

from label_translator.cli.commands.utils import confirm_action
from label_translator.cli.logging import setup_cli_logging
from label_translator.core.config import MAX_BATCH_SIZE, settings
from label_translator.core.exceptions import OperationFileError
from label_translator.core.http_client import close_http_client
from label_translator.models.enums import LogType
from label_translator.schemas.progress import LogEntry, ProgressSnapshot, TranslationResult
from label_translator.services.import_service import TranslationImportService
from label_translator.services.metadata_service import HttpMetadataService
from label_translator.utils.operations_file import load_operations_file

console = Console()

EXIT_FAILURES = 1
EXIT_INVALID_INPUT = 2
EXIT_CANCELLED = 130

_LEVEL_STYLES = {
    LogType.INFO: "cyan",
    LogType.WARNING: "yellow",
    LogType.ERROR: "red",
}


@contextmanager
def _cancel_on_interrupt(cancel_event: threading.Event):
    """Turn Ctrl+C into a cancellation request checked between batches."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handler(signum, frame):
        if cancel_event.is_set():
            raise KeyboardInterrupt
        cancel_event.set()
        console.print("[yellow]Cancelling after the current batch (Ctrl+C again to abort)...[/yellow]")

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _write_error_log(error_log: Path, sheet_name: Optional[str], entry: LogEntry) -> None:
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    with error_log.open("a", encoding="utf-8") as handle:
        handle.write(f"{timestamp} | {entry.level.value.upper()} | SHEET: {sheet_name or '-'} | {entry.message}\n")


def _summary_table(results: List[TranslationResult], snapshots: dict) -> Table:
    table = Table(title="Import Summary")
    table.add_column("Sheet", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Succeeded", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Status")
    for result in results:
        snapshot: ProgressSnapshot = snapshots[result.sheet_name]
        status = "[green]OK[/green]" if result.success else f"[red]{result.message}[/red]"
        table.add_row(
            result.sheet_name,
            str(snapshot.total_items),
            str(snapshot.success_count),
            str(snapshot.failure_count),
            status,
        )
    return table


def import_translations(
    path: Path = typer.Argument(..., help="Operations document (JSON) produced from the translation workbook"),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", "-b", help="Operations per bulk request"),
    service_url: Optional[str] = typer.Option(None, "--service-url", help="Metadata service base URL"),
    sheets: Optional[List[str]] = typer.Option(None, "--sheet", "-s", help="Only import the named sheet (repeatable)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate the document without contacting the service"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
    error_log: Optional[Path] = typer.Option(None, "--error-log", "-e", help="Append failures to this file"),
):
    """
    Apply translated labels to the metadata service.

    This command:
    - Loads and validates the operations document
    - Submits each sheet in bulk requests that continue past failed labels
    - Reports every failed label and a summary per sheet
    - Exits with code 1 when at least one label failed
    """
    if batch_size is not None and not 1 <= batch_size <= MAX_BATCH_SIZE:
        raise typer.BadParameter(f"Batch size must be between 1 and {MAX_BATCH_SIZE}.")
    if service_url is not None and not service_url.startswith(("http://", "https://")):
        raise typer.BadParameter("Service URL must start with http:// or https://")

    logger = setup_cli_logging("import", verbose=verbose)
    logger.info(f"Options: batch_size={batch_size}, sheets={sheets}, dry_run={dry_run}")

    try:
        document = load_operations_file(path)
    except OperationFileError as e:
        logger.error(str(e))
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=EXIT_INVALID_INPUT)

    sheet_operations = document.as_mapping()
    if sheets:
        unknown = [name for name in sheets if name not in sheet_operations]
        if unknown:
            console.print(f"[red]Unknown sheet(s): {escape(', '.join(unknown))}[/red]")
            raise typer.Exit(code=EXIT_INVALID_INPUT)
        sheet_operations = {name: ops for name, ops in sheet_operations.items() if name in sheets}

    effective_batch_size = batch_size or settings.batch_size
    total_operations = sum(len(ops) for ops in sheet_operations.values())

    header = Table(title="Translation Import")
    header.add_column("Metric", style="cyan")
    header.add_column("Value", style="white")
    header.add_row("Operations file", str(path))
    header.add_row("Sheets", str(len(sheet_operations)))
    header.add_row("Operations", str(total_operations))
    header.add_row("Batch size", str(effective_batch_size))
    header.add_row("Mode", "DRY RUN" if dry_run else "LIVE")
    console.print(header)

    if dry_run:
        logger.info(f"Dry run complete - would apply {total_operations} operations")
        console.print(f"\n[green]✓ Dry run complete. {total_operations} operations would be applied.[/green]")
        raise typer.Exit(code=0)

    if total_operations == 0:
        console.print("[green]Nothing to import.[/green]")
        raise typer.Exit(code=0)

    if not force:
        if not confirm_action(
            "\n⚠ This will update labels on the metadata service. Ensure you have a backup of the customizations. Continue?",
            default=False,
        ):
            logger.info("Import cancelled by user")
            console.print("[yellow]Import cancelled[/yellow]")
            raise typer.Exit(code=0)

    service = TranslationImportService(
        HttpMetadataService(base_url=service_url),
        batch_size=effective_batch_size,
    )
    cancel_event = threading.Event()

    try:
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            TimeRemainingColumn(),
            console=console,
        ) as progress_bar:
            task = progress_bar.add_task("Importing...", total=total_operations)
            current_sheet = {"name": None, "base": 0}

            def on_progress(snapshot: ProgressSnapshot) -> None:
                if snapshot.sheet_name != current_sheet["name"]:
                    current_sheet["name"] = snapshot.sheet_name
                    current_sheet["base"] = progress_bar.tasks[0].completed
                progress_bar.update(
                    task,
                    description=f"Importing {snapshot.sheet_name}...",
                    completed=current_sheet["base"] + snapshot.processed_count,
                )

            def on_log(entry: LogEntry) -> None:
                style = _LEVEL_STYLES.get(entry.level, "white")
                progress_bar.console.print(f"[{style}]{escape(entry.message)}[/{style}]", highlight=False)
                if entry.level == LogType.ERROR:
                    logger.debug(entry.message)
                if error_log is not None and entry.level != LogType.INFO:
                    _write_error_log(error_log, current_sheet["name"], entry)

            with _cancel_on_interrupt(cancel_event):
                summary = service.import_sheets(
                    sheet_operations,
                    on_log=on_log,
                    on_progress=on_progress,
                    should_cancel=cancel_event.is_set,
                )
    finally:
        close_http_client()

    console.print(_summary_table(summary.results, summary.sheets))
    logger.info(
        f"Import complete: {summary.success_count} succeeded, "
        f"{summary.failure_count} failed, cancelled={summary.cancelled}"
    )

    if summary.cancelled:
        console.print("[yellow]Import cancelled before all operations were applied.[/yellow]")
        raise typer.Exit(code=EXIT_CANCELLED)
    if summary.has_failures:
        console.print(f"[red]✗ {summary.failure_count} of {summary.total_items} labels failed.[/red]")
        raise typer.Exit(code=EXIT_FAILURES)

    console.print(f"[green]✓ {summary.success_count} labels updated.[/green]")
