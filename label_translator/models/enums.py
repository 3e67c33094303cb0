"""
Enums and constants for the application.
"""
from enum import Enum


class LogType(str, Enum):
    """Severity of a log entry produced by an import run."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class OperationKind(str, Enum):
    """Discriminator values of the label update operations."""
    UPDATE_RECORD_FIELD = "update_record_field"
    UPDATE_ATTRIBUTE_DEFINITION = "update_attribute_definition"
    UPDATE_RELATIONSHIP_LABEL = "update_relationship_label"
    UPDATE_OPTION_SET_LABEL = "update_option_set_label"
    UPDATE_OPTION_VALUE_LABEL = "update_option_value_label"
    UPDATE_LOCALIZED_LABEL_SET = "update_localized_label_set"

