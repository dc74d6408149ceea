"""Error hierarchy for mdsurface.

No conversion operation raises on any text input: malformed markdown
degrades to literal text.  The errors below only signal misuse of the
surface API, such as placing the caret at an offset a node cannot hold.

Every error class inherits from :class:`MdSurfaceError` and carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can raise."""

    INVALID_CARET_POSITION = "INVALID_CARET_POSITION"
    NODE_NOT_IN_SURFACE = "NODE_NOT_IN_SURFACE"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class MdSurfaceError(Exception):
    """Base exception for all mdsurface errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Surface errors
# ---------------------------------------------------------------------------

class CaretPositionError(MdSurfaceError):
    """A caret was placed at an offset the target node cannot hold.

    Context keys: ``offset``, ``length``, ``node``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CARET_POSITION,
            message=message,
            context=context,
            cause=cause,
        )


class DetachedNodeError(MdSurfaceError):
    """An edit targeted a node that is not part of the editable surface.

    Context keys: ``node``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NODE_NOT_IN_SURFACE,
            message=message,
            context=context,
            cause=cause,
        )
