"""Exception types raised by the db-lab adapter.

Failures of caller-supplied SQL are never raised; they come back as a failed
``QueryOutcome``. The exceptions here cover everything else.
"""


class DbLabError(Exception):
    """Base class for db-lab errors."""


class InvalidInputError(DbLabError, ValueError):
    """A required identifier was blank."""


class UnsupportedOperationError(DbLabError, NotImplementedError):
    """The requested operation has no implementation yet."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        message = f"{operation} is not supported"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
