"""
Memory Exceptions

Exceptions related to buffer allocation. Growing the line buffer or the
token buffer can fail; that failure is fatal to the interpreter.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class MemoryException(Exception):
    """
    Base exception for all memory-related errors.

    Attributes:
        message: Human-readable error description
        size: Allocation size associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        size: Optional[int] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.size = size
        self.error_code = error_code or 3000
        self.context = context or {}
        if size is not None:
            self.context["size"] = size

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.size is not None:
            base = f"{base} (size={self.size})"
        return base


class OutOfMemoryError(MemoryException):
    """
    A buffer could not be grown.

    Raised by the line reader and the tokenizer when extending their
    storage fails. The main loop turns it into a terminate-after-error
    status; helpers never exit the process themselves.

    Example:
        >>> raise OutOfMemoryError("allocation error", requested=2048, buffer="line")
    """

    def __init__(
        self,
        message: str = "allocation error",
        requested: Optional[int] = None,
        buffer: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if requested is not None:
            ctx["requested"] = requested
        if buffer:
            ctx["buffer"] = buffer
        super().__init__(
            message=message,
            error_code=3004,
            context=ctx
        )
        self.requested = requested
        self.buffer = buffer
