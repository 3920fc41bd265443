"""Build errors for Bramble.

The rendering core never raises: malformed front matter, markup and
placeholders all degrade to literal output. Errors only come from the file
system side of a build and always name the file involved.
"""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


def format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if isinstance(exc, UnicodeDecodeError):
        return f"File is not valid UTF-8: {error_msg}"
    if isinstance(exc, PermissionError):
        return f"Permission denied: {error_msg}"
    if isinstance(exc, FileNotFoundError):
        return f"File not found: {error_msg}"

    return f"{error_type}: {error_msg}"
