"""
Progress and result schemas reported by import runs.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from label_translator.models.enums import LogType


class LogEntry(BaseModel):
    """One line for the caller's log pane."""
    level: LogType = Field(LogType.INFO, description="Severity of the entry")
    message: str = Field(..., description="Human readable message")


class ProgressSnapshot(BaseModel):
    """
    Running counters of one import run.

    The executor updates a single instance in place after every batch and hands
    the same object to the progress callback.
    """
    sheet_name: Optional[str] = Field(None, description="Sheet the run belongs to")
    total_items: int = Field(0, ge=0, description="Operations scheduled so far")
    success_count: int = Field(0, ge=0, description="Operations applied")
    failure_count: int = Field(0, ge=0, description="Operations rejected or not delivered")
    cancelled: bool = Field(False, description="Run stopped before the queue was drained")

    @property
    def processed_count(self) -> int:
        return self.success_count + self.failure_count


class TranslationResult(BaseModel):
    """Outcome of importing one sheet."""
    sheet_name: str = Field(..., description="Sheet name")
    success: bool = Field(..., description="True when every operation of the sheet was applied")
    message: str = Field("", description="Summary line")


class ImportSummary(BaseModel):
    """
    Summary of a multi-sheet import.
    """
    sheets: Dict[str, ProgressSnapshot] = Field(default_factory=dict, description="Final snapshot per sheet")
    results: List[TranslationResult] = Field(default_factory=list, description="Outcome per sheet")
    cancelled: bool = Field(False, description="Import stopped before every sheet was processed")

    @property
    def total_items(self) -> int:
        return sum(snapshot.total_items for snapshot in self.sheets.values())

    @property
    def success_count(self) -> int:
        return sum(snapshot.success_count for snapshot in self.sheets.values())

    @property
    def failure_count(self) -> int:
        return sum(snapshot.failure_count for snapshot in self.sheets.values())

    @property
    def has_failures(self) -> bool:
        return self.failure_count > 0
