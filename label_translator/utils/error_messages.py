"""
Failure messages for label update operations.
"""
from typing import Any, Callable, Dict

from label_translator.models.enums import OperationKind

_TEMPLATES: Dict[str, Callable[[Any, str], str]] = {
    OperationKind.UPDATE_RECORD_FIELD.value: lambda op, detail: (
        f"Error while updating record {op.logical_name} ({op.record_id}): {detail}"
    ),
    OperationKind.UPDATE_ATTRIBUTE_DEFINITION.value: lambda op, detail: (
        f"Error while updating attribute {op.attribute_logical_name}: {detail}"
    ),
    OperationKind.UPDATE_RELATIONSHIP_LABEL.value: lambda op, detail: (
        f"Error while updating relationship {op.schema_name}: {detail}"
    ),
    OperationKind.UPDATE_OPTION_SET_LABEL.value: lambda op, detail: (
        f"Error while updating optionset {op.name}: {detail}"
    ),
    OperationKind.UPDATE_OPTION_VALUE_LABEL.value: lambda op, detail: (
        f"Error while updating global optionset ({op.option_set_name}) value ({op.value}) label: {detail}"
        if op.option_set_name
        else f"Error while updating option ({op.value}) label for attribute "
        f"{op.attribute_logical_name} ({op.entity_logical_name}): {detail}"
    ),
    OperationKind.UPDATE_LOCALIZED_LABEL_SET.value: lambda op, detail: (
        f"Error while updating {op.attribute_name} of record {op.entity_logical_name} ({op.record_id}): {detail}"
    ),
}


def format_operation_error(operation: Any, detail: str) -> str:
    """
    Describe a failed operation for the import log.

    Args:
        operation: The operation that failed
        detail: Fault message from the service, or the transport error text

    Returns:
        Variant specific message, or ``detail`` alone for unknown operations
    """
    template = _TEMPLATES.get(getattr(operation, "kind", None))
    if template is None:
        return detail
    return template(operation, detail)
