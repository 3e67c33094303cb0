"""
Import service applying translated labels sheet by sheet.

Each sheet of the translation workbook is imported as its own run, with its
own accumulator and progress snapshot.
"""
from typing import Callable, Iterable, Mapping, Optional

from label_translator.core.logging_config import LogCategory, log_info
from label_translator.models.enums import LogType
from label_translator.models.operations import OperationBase
from label_translator.schemas.progress import (
    ImportSummary,
    LogEntry,
    ProgressSnapshot,
    TranslationResult,
)
from label_translator.services.batch_accumulator import BatchAccumulator
from label_translator.services.batch_executor import (
    BatchExecutor,
    CancelCheck,
    LogCallback,
    ProgressCallback,
)
from label_translator.services.metadata_service import HttpMetadataService, MetadataService

ResultCallback = Callable[[TranslationResult], None]


def _build_result(progress: ProgressSnapshot) -> TranslationResult:
    message = (
        f"{progress.success_count} of {progress.total_items} labels updated, "
        f"{progress.failure_count} failed"
    )
    if progress.cancelled:
        message = f"Cancelled: {message}"
    return TranslationResult(
        sheet_name=progress.sheet_name or "",
        success=progress.failure_count == 0 and not progress.cancelled,
        message=message,
    )


class TranslationImportService:
    """Service for importing translated labels."""

    def __init__(
        self,
        service: Optional[MetadataService] = None,
        *,
        batch_size: Optional[int] = None,
        executor: Optional[BatchExecutor] = None,
    ):
        """
        Initialize import service.

        Args:
            service: Metadata service (defaults to the HTTP adapter)
            batch_size: Operations per bulk request (defaults to BATCH_SIZE setting)
            executor: Executor to use instead of one built around ``service``
        """
        self.service = service or HttpMetadataService()
        self.batch_size = batch_size
        self.executor = executor or BatchExecutor(self.service)

    def import_sheet(
        self,
        sheet_name: str,
        operations: Iterable[OperationBase],
        *,
        on_log: Optional[LogCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> ProgressSnapshot:
        """
        Apply the operations of one sheet.

        Returns:
            Final snapshot of the run
        """
        accumulator = BatchAccumulator(self.batch_size)
        accumulator.extend(operations)
        queue = accumulator.flush()

        progress = ProgressSnapshot(sheet_name=sheet_name)
        log_info(
            f"Importing sheet {sheet_name}",
            category=LogCategory.IMPORT,
            batches=len(queue),
            batch_size=accumulator.batch_size,
        )
        self.executor.run(
            queue,
            progress,
            on_log=on_log,
            on_progress=on_progress,
            should_cancel=should_cancel,
        )
        log_info(
            f"Sheet {sheet_name} imported",
            category=LogCategory.IMPORT,
            total=progress.total_items,
            succeeded=progress.success_count,
            failed=progress.failure_count,
            cancelled=progress.cancelled,
        )
        return progress

    def import_sheets(
        self,
        sheets: Mapping[str, Iterable[OperationBase]],
        *,
        on_log: Optional[LogCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
        on_result: Optional[ResultCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> ImportSummary:
        """
        Apply several sheets in order.

        Sheets without operations are skipped with an INFO entry. Cancellation
        stops the current sheet between batches and skips the sheets after it.

        Returns:
            ImportSummary with the final snapshot and result of each sheet
        """
        summary = ImportSummary()

        for sheet_name, operations in sheets.items():
            if should_cancel is not None and should_cancel():
                summary.cancelled = True
                break

            operations = list(operations)
            if not operations:
                if on_log is not None:
                    on_log(LogEntry(level=LogType.INFO, message=f"Sheet {sheet_name}: nothing to import"))
                summary.sheets[sheet_name] = ProgressSnapshot(sheet_name=sheet_name)
                result = TranslationResult(sheet_name=sheet_name, success=True, message="Nothing to import")
            else:
                progress = self.import_sheet(
                    sheet_name,
                    operations,
                    on_log=on_log,
                    on_progress=on_progress,
                    should_cancel=should_cancel,
                )
                summary.sheets[sheet_name] = progress
                result = _build_result(progress)

            summary.results.append(result)
            if on_result is not None:
                on_result(result)

            if summary.sheets[sheet_name].cancelled:
                summary.cancelled = True
                break

        log_info(
            "Import finished",
            category=LogCategory.IMPORT,
            sheets=len(summary.sheets),
            succeeded=summary.success_count,
            failed=summary.failure_count,
            cancelled=summary.cancelled,
        )
        return summary
