# Import all models for easy access
from .enums import LogType, OperationKind
from .operations import (
    LocalizedLabel,
    Operation,
    OperationBase,
    OperationList,
    UpdateAttributeDefinition,
    UpdateLocalizedLabelSet,
    UpdateOptionSetLabel,
    UpdateOptionValueLabel,
    UpdateRecordField,
    UpdateRelationshipLabel,
)

__all__ = [
    "LogType",
    "OperationKind",
    "LocalizedLabel",
    "Operation",
    "OperationBase",
    "OperationList",
    "UpdateRecordField",
    "UpdateAttributeDefinition",
    "UpdateRelationshipLabel",
    "UpdateOptionSetLabel",
    "UpdateOptionValueLabel",
    "UpdateLocalizedLabelSet",
]
