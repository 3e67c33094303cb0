"""
Custom application exceptions.
"""

class TranslatorAppException(Exception):
    """Base exception for the label translator."""
    pass


class TransportError(TranslatorAppException):
    """Raised when a bulk request could not be completed as a whole."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AccumulatorClosedError(TranslatorAppException):
    """Raised when an operation is added to a flushed accumulator."""
    pass


class OperationFileError(TranslatorAppException):
    """Raised when an operations file cannot be read or validated."""
    pass
