"""Exceptions raised by the revenue extraction pipeline."""


class ExtractionError(Exception):
    """Raised when the extraction run cannot complete."""

    pass


class OutputWriteError(ExtractionError):
    """Raised when the reconciled artifact cannot be persisted."""

    pass
