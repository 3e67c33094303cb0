"""
Sequential execution of queued batches against the metadata service.

Every failure is recovered at the batch level: a fault counts and logs the one
operation it belongs to, a transport failure counts and logs every operation
of its batch. The run only ends when the queue is drained or cancelled.
"""
from collections import deque
from typing import Callable, Deque, Optional

from label_translator.core.config import settings
from label_translator.core.logging_config import LogCategory, log_debug, log_info, log_warning
from label_translator.models.enums import LogType
from label_translator.schemas.bulk import BulkResponse
from label_translator.schemas.progress import LogEntry, ProgressSnapshot
from label_translator.services.batch_accumulator import Batch
from label_translator.services.metadata_service import MetadataService
from label_translator.utils.error_messages import format_operation_error

LogCallback = Callable[[LogEntry], None]
ProgressCallback = Callable[[ProgressSnapshot], None]
CancelCheck = Callable[[], bool]


def _ignore(_):
    return None


def _describe_exception(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class BatchExecutor:
    """Drains a queue of batches one bulk request at a time."""

    def __init__(
        self,
        service: MetadataService,
        *,
        return_responses: Optional[bool] = None,
    ):
        self.service = service
        self.return_responses = (
            settings.return_responses if return_responses is None else return_responses
        )

    def run(
        self,
        queue: Deque[Batch],
        progress: ProgressSnapshot,
        on_log: Optional[LogCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> ProgressSnapshot:
        """
        Submit every batch of ``queue`` in FIFO order.

        ``on_progress`` fires twice per batch: once after ``total_items`` has
        grown by the batch size, once after the counters account for the
        batch. ``should_cancel`` is checked before each batch; a cancelled run
        leaves the remaining batches in ``queue``.

        Args:
            queue: Pending batches, consumed from the left
            progress: Snapshot updated in place
            on_log: Receives one ERROR entry per failed operation
            on_progress: Receives ``progress`` after each step
            should_cancel: Returns True to stop before the next batch

        Returns:
            The updated ``progress``
        """
        on_log = on_log or _ignore
        on_progress = on_progress or _ignore
        if not isinstance(queue, deque):
            queue = deque(queue)

        batch_number = 0
        while queue:
            if should_cancel is not None and should_cancel():
                progress.cancelled = True
                log_info(
                    "Import run cancelled",
                    category=LogCategory.BATCH,
                    sheet=progress.sheet_name,
                    remaining_batches=len(queue),
                )
                break

            batch = queue.popleft()
            batch_number += 1
            if not batch:
                log_debug("Skipping empty batch", category=LogCategory.BATCH, batch=batch_number)
                continue

            self._run_batch(batch, batch_number, progress, on_log, on_progress)

        return progress

    def _run_batch(
        self,
        batch: Batch,
        batch_number: int,
        progress: ProgressSnapshot,
        on_log: LogCallback,
        on_progress: ProgressCallback,
    ) -> None:
        size = len(batch)
        progress.total_items += size
        on_progress(progress)

        try:
            response = self.service.execute_multiple(
                batch,
                continue_on_error=True,
                return_responses=self.return_responses,
            )
        except Exception as e:  # any failure of the call itself fails the whole batch
            detail = _describe_exception(e)
            log_warning(
                "Bulk request failed",
                category=LogCategory.BATCH,
                sheet=progress.sheet_name,
                batch=batch_number,
                size=size,
                error=detail,
            )
            progress.failure_count += size
            for operation in batch:
                on_log(LogEntry(level=LogType.ERROR, message=format_operation_error(operation, detail)))
        else:
            faulted = self._report_faults(batch, response, on_log)
            progress.failure_count += faulted
            progress.success_count += size - faulted
            log_debug(
                "Bulk request completed",
                category=LogCategory.BATCH,
                sheet=progress.sheet_name,
                batch=batch_number,
                size=size,
                faulted=faulted,
            )

        on_progress(progress)

    @staticmethod
    def _report_faults(batch: Batch, response: BulkResponse, on_log: LogCallback) -> int:
        """
        Log one entry per faulted operation and return how many faulted.

        Faults pointing outside the batch, or at an operation that already
        faulted, cannot be attributed and are logged as warnings only.
        """
        faulted_indexes = set()
        for item in response.faults:
            index = item.request_index
            detail = item.fault.message
            if index < 0 or index >= len(batch) or index in faulted_indexes:
                on_log(LogEntry(level=LogType.WARNING, message=detail))
                continue
            faulted_indexes.add(index)
            on_log(LogEntry(level=LogType.ERROR, message=format_operation_error(batch[index], detail)))

        if response.is_faulted and not faulted_indexes:
            log_warning(
                "Bulk response flagged as faulted without attributable faults",
                category=LogCategory.BATCH,
                size=len(batch),
            )
        return len(faulted_indexes)
