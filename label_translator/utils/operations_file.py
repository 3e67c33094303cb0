"""
Loading of operations documents.
"""
import json
from pathlib import Path

from pydantic import ValidationError

from label_translator.core.exceptions import OperationFileError
from label_translator.core.logging_config import log_error, log_info
from label_translator.schemas.document import TranslationDocument

# Operations documents larger than this are rejected before parsing
MAX_FILE_SIZE_MB = 200


def load_operations_file(path: Path) -> TranslationDocument:
    """
    Read and validate an operations document.

    Args:
        path: JSON file written by the workbook parser

    Returns:
        Validated TranslationDocument

    Raises:
        OperationFileError: If the file is missing, too large, not JSON, or invalid
    """
    path = Path(path)
    if not path.is_file():
        raise OperationFileError(f"Operations file not found: {path}")

    size_mb = path.stat().st_size / (1024 * 1024)
    if size_mb > MAX_FILE_SIZE_MB:
        raise OperationFileError(
            f"Operations file is {size_mb:.1f}MB, larger than the {MAX_FILE_SIZE_MB}MB limit"
        )

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        log_error(e, path=str(path))
        raise OperationFileError(f"Cannot read operations file {path}: {e}") from e

    try:
        document = TranslationDocument.model_validate(data)
    except ValidationError as e:
        raise OperationFileError(
            f"Invalid operations file {path}: {e.error_count()} validation error(s)\n{e}"
        ) from e

    log_info(
        "Operations file loaded",
        path=str(path),
        sheets=len(document.sheets),
        operations=document.operation_count,
    )
    return document
