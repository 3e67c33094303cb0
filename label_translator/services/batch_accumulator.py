"""
Grouping of label update operations into bounded batches.
"""
from collections import deque
from typing import Deque, Iterable, List, Optional, Tuple

from label_translator.core.config import settings
from label_translator.core.exceptions import AccumulatorClosedError
from label_translator.models.operations import OperationBase

Batch = Tuple[OperationBase, ...]


class BatchAccumulator:
    """
    Buffers operations and emits full batches into a FIFO queue.

    Batches keep the push order of their operations, and the queue keeps the
    order of its batches, so draining the queue replays the original sequence.
    """

    def __init__(self, batch_size: Optional[int] = None):
        """
        Initialize the accumulator.

        Args:
            batch_size: Maximum operations per batch (defaults to BATCH_SIZE setting)

        Raises:
            ValueError: If batch_size is not positive
        """
        size = settings.batch_size if batch_size is None else batch_size
        if size < 1:
            raise ValueError(f"Batch size must be a positive integer, got {size}")
        self.batch_size = size
        self._queue: Deque[Batch] = deque()
        self._current: List[OperationBase] = []
        self._closed = False

    def add(self, operation: OperationBase) -> None:
        """Append an operation, enqueueing the current batch once it is full."""
        if self._closed:
            raise AccumulatorClosedError("Cannot add operations after flush(); call reset() first")
        self._current.append(operation)
        if len(self._current) >= self.batch_size:
            self._queue.append(tuple(self._current))
            self._current = []

    def extend(self, operations: Iterable[OperationBase]) -> None:
        """Add operations in order."""
        for operation in operations:
            self.add(operation)

    def flush(self) -> Deque[Batch]:
        """
        Enqueue the partial batch, if any, and hand over the pending queue.

        An empty in-progress batch is never enqueued. The accumulator is closed
        afterwards.
        """
        if self._current:
            self._queue.append(tuple(self._current))
            self._current = []
        self._closed = True
        queue, self._queue = self._queue, deque()
        return queue

    def reset(self) -> None:
        """Drop everything buffered and reopen the accumulator."""
        self._queue = deque()
        self._current = []
        self._closed = False

    @property
    def pending_count(self) -> int:
        """Operations buffered and not yet handed over."""
        return sum(len(batch) for batch in self._queue) + len(self._current)

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        """Number of complete batches queued."""
        return len(self._queue)
