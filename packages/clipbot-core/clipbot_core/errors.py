"""Export pipeline error taxonomy."""

from typing import Optional


class ExportError(Exception):
    """
    Base class for every failure the export pipeline reports.

    Each subclass carries a stable ``category`` that callers can match on,
    plus a human-readable message and optional raw diagnostic details
    (usually the external tool's stderr).
    """

    category: str = "ExportError"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or ""

    def to_dict(self) -> dict:
        """Serialize into the failure response shape."""
        return {
            "success": False,
            "error": self.message,
            "category": self.category,
            "details": self.details,
        }


class InvalidRequest(ExportError):
    """Request failed validation before any work started."""

    category = "InvalidRequest"


class ToolMissing(ExportError):
    """A required external binary is not installed or not runnable."""

    category = "ToolMissing"

    def __init__(self, tool: str, details: Optional[str] = None):
        super().__init__(f"{tool} is not installed on the server", details)
        self.tool = tool


class FetchFailed(ExportError):
    """Downloader exited non-zero and left no usable output."""

    category = "FetchFailed"


class FetchTimeout(ExportError):
    """Downloader exceeded its wall-clock budget."""

    category = "FetchTimeout"


class TranscodeFailed(ExportError):
    """Media processor failed at some sub-step."""

    category = "TranscodeFailed"


class EmptyOutput(ExportError):
    """A stage produced a file with zero bytes."""

    category = "EmptyOutput"


class StorageFailed(ExportError):
    """Final file could not be read or written to durable storage."""

    category = "StorageFailed"
