"""
Result values for callers that prefer not to handle exceptions.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import ErrorKind, FsError


@dataclass
class OpResult:
    """Outcome of an operation run through `attempt`."""
    success: bool
    value: Optional[Any] = None
    error: Optional[FsError] = None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """The error kind, or None on success."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> Any:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value


def attempt(func: Callable[..., Any], *args, **kwargs) -> OpResult:
    """
    Run an fsutils operation and capture its outcome.

    Only FsError is captured; anything else propagates.

    Example:
        >>> result = attempt(fsutils.remove, "missing.txt")
        >>> result.kind
        <ErrorKind.NOT_FOUND: 'not_found'>
    """
    try:
        return OpResult(success=True, value=func(*args, **kwargs))
    except FsError as e:
        return OpResult(success=False, error=e)
