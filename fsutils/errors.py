"""
Error kinds raised by fsutils operations.

Every failure is one of a closed set of kinds. The classes subclass the
matching builtin OSError types, so `except FileNotFoundError` keeps working
for callers that never import fsutils.
"""

import os
from enum import Enum
from typing import Optional, Sequence, Tuple


class ErrorKind(Enum):
    """The kinds of failure an operation can report."""
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_EXISTS = "already_exists"
    IO = "io"


class FsError(OSError):
    """
    Base class for all fsutils failures.

    Attributes:
        kind: The ErrorKind of this failure
        operation: Name of the operation that failed
        paths: Paths involved, as strings
        cause: The underlying exception, if any
    """

    kind = ErrorKind.IO

    def __init__(
        self,
        operation: str,
        paths: Sequence = (),
        reason: Optional[str] = None,
        cause: Optional[BaseException] = None
    ):
        self.operation = operation
        self.paths: Tuple[str, ...] = tuple(os.fspath(p) for p in paths)
        self.cause = cause
        self.reason = reason or _describe(cause) or self.kind.value.replace("_", " ")
        super().__init__(f"{operation} {', '.join(self.paths)}: {self.reason}")
        self.errno = getattr(cause, "errno", None)


class NotFoundError(FsError, FileNotFoundError):
    """A referenced path does not exist."""
    kind = ErrorKind.NOT_FOUND


class PermissionDeniedError(FsError, PermissionError):
    """The OS denied the requested access."""
    kind = ErrorKind.PERMISSION_DENIED


class AlreadyExistsError(FsError, FileExistsError):
    """The target of a creation operation already exists."""
    kind = ErrorKind.ALREADY_EXISTS


_BY_OS_ERROR = (
    (FileNotFoundError, NotFoundError),
    (PermissionError, PermissionDeniedError),
    (FileExistsError, AlreadyExistsError),
)


def _describe(exc: Optional[BaseException]) -> Optional[str]:
    if exc is None:
        return None
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc) or type(exc).__name__


def translate(operation: str, paths: Sequence, exc: BaseException) -> FsError:
    """
    Map a low-level exception to its fsutils error class.

    Args:
        operation: Name of the failing operation
        paths: Paths involved
        exc: The OSError (or UnicodeDecodeError) raised by the OS call

    Returns:
        An FsError instance; the caller raises it
    """
    if isinstance(exc, FsError):
        return exc
    for os_type, error_cls in _BY_OS_ERROR:
        if isinstance(exc, os_type):
            return error_cls(operation, paths, cause=exc)
    return FsError(operation, paths, cause=exc)
