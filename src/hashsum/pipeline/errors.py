"""Pipeline errors."""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for pipeline orchestration failures."""


class FatalPipelineError(PipelineError):
    """Raised when the process or pipe infrastructure fails and the run must stop.

    Args:
        message: Description of the operation that failed.
        cause: Operating system error reported for the failure, if any.
    """

    def __init__(self, message: str, cause: OSError | None = None) -> None:
        self.message = message
        self.cause = cause
        detail = message
        if cause is not None and cause.strerror:
            detail = f"{message}\n{cause.strerror}"
        super().__init__(detail)


class ListingFailedError(PipelineError):
    """Raised when the listing stage exits with a non-zero status."""

    def __init__(self, directory: str, returncode: int | None) -> None:
        self.directory = directory
        self.returncode = returncode
        super().__init__(f"Listing {directory!r} failed with exit status {returncode}")
