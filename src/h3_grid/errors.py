"""Error taxonomy for grid operations."""


class H3Error(ValueError):
    """
    Base class for all grid errors.

    Extends ValueError so callers validating input can catch either.

    :param message: Human-readable error message.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DomainError(H3Error):
    """Argument was outside of its acceptable numeric range."""


class CellInvalidError(H3Error):
    """Cell index or base cell failed the structural validity check."""


class PentagonError(H3Error):
    """Pentagon distortion was encountered which the algorithm could not handle."""


class FailedError(H3Error):
    """The operation failed but a more specific error is not available."""
