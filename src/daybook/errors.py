"""Error taxonomy for the journal engine."""


class DaybookError(Exception):
    """Base class for all journal engine errors."""

    pass


class ValidationError(DaybookError):
    """Raised when input is malformed. Detected before any I/O."""

    pass


class NotFoundError(DaybookError):
    """Raised when an operation targets an id that does not exist."""

    pass


class ConflictError(DaybookError):
    """Raised when a uniqueness invariant would be violated."""

    pass


class DataAccessError(DaybookError):
    """
    Raised when the storage engine fails for unrelated reasons.

    Always carries the underlying cause.
    """

    def __init__(self, message: str, cause: BaseException):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.__cause__ = cause
