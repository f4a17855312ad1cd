from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"


class CoreError(Exception):
    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(CoreError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(CoreError):
    kind = ErrorKind.CONFLICT


class ValidationError(CoreError):
    kind = ErrorKind.VALIDATION
