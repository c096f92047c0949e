"""Cache error types"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure the cache contract can report"""

    INVALID_KEY = "invalid_key"
    OPERATION_FAILED = "operation_failed"


class CacheError(Exception):
    """Base class for all cache errors

    Args:
        message: Human-readable error description
        kind: Error kind tag
        cause: Underlying error, if any
    """

    kind: ErrorKind = ErrorKind.OPERATION_FAILED

    def __init__(
        self,
        message: str,
        kind: ErrorKind | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.cause = cause


class InvalidKeyError(CacheError, ValueError):
    """Raised when a caller-supplied key cannot be rendered as a string"""

    kind = ErrorKind.INVALID_KEY

    def __init__(self, message: str, key_type: type, cause: BaseException | None = None):
        super().__init__(message, cause=cause)
        self.key_type = key_type


class CacheOperationError(CacheError):
    """Raised when the backing store fails during a cache operation"""

    kind = ErrorKind.OPERATION_FAILED

    def __init__(
        self, message: str, key: str | None = None, cause: BaseException | None = None
    ):
        super().__init__(message, cause=cause)
        self.key = key
