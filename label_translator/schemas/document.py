"""
Serialized form of the operations produced by the workbook parser.
"""
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from label_translator.models.operations import Operation


class TranslationSheet(BaseModel):
    """Operations of one workbook sheet, in application order."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    operations: List[Operation] = Field(default_factory=list)


class TranslationDocument(BaseModel):
    """
    Operations document consumed by the import command.

    Example:
        {"version": "1.0", "sheets": [{"name": "Attributes", "operations": [...]}]}
    """
    model_config = ConfigDict(populate_by_name=True)

    version: str = Field("1.0")
    sheets: List[TranslationSheet] = Field(default_factory=list)

    @field_validator("sheets")
    @classmethod
    def validate_unique_sheet_names(cls, v: List[TranslationSheet]) -> List[TranslationSheet]:
        seen = set()
        for sheet in v:
            if sheet.name in seen:
                raise ValueError(f"Duplicate sheet name: {sheet.name}")
            seen.add(sheet.name)
        return v

    @property
    def operation_count(self) -> int:
        return sum(len(sheet.operations) for sheet in self.sheets)

    def as_mapping(self) -> Dict[str, list]:
        """Sheet name to operations, in document order."""
        return {sheet.name: list(sheet.operations) for sheet in self.sheets}
