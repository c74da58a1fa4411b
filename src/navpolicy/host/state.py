"""Loading-state tracking for the embedded browser surface.

This is the loading-error path: HTTP and network failures reported by the
browser itself.  A policy ``Block`` is not a loading error and never
passes through here.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from navpolicy.core.config import ErrorMessages
from navpolicy.core.defaults import NO_INTERNET_ERROR_CODES


class LoadingState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class NavigationError(BaseModel, frozen=True):
    """A load failure reported by the embedded browser."""

    code: int = Field(description="Platform error code or HTTP status.")
    description: str = Field(default="", description="Human-readable failure text.")
    domain: str | None = Field(default=None, description="Platform error domain, if any.")


class LoadStateTracker:
    """Mutable view of the current page load, driven by browser callbacks."""

    def __init__(self) -> None:
        self.state: LoadingState = LoadingState.IDLE
        self.error: NavigationError | None = None
        self.progress: float = 0.0

    def load_started(self) -> None:
        self.state = LoadingState.LOADING
        self.error = None
        self.progress = 0.0

    def load_progressed(self, value: float) -> None:
        self.progress = min(max(float(value), 0.0), 1.0)

    def load_finished(self) -> None:
        self.state = LoadingState.SUCCESS
        self.progress = 1.0

    def load_failed(self, error: NavigationError) -> None:
        self.state = LoadingState.ERROR
        self.error = error
        self.progress = 0.0

    def http_failed(self, status_code: int) -> None:
        self.load_failed(
            NavigationError(code=status_code, description=f"HTTP Error: {status_code}")
        )

    def reset_error(self) -> None:
        """Clear the error before a retry."""
        self.error = None
        self.state = LoadingState.IDLE

    @property
    def is_loading(self) -> bool:
        return self.state == LoadingState.LOADING


def select_error_message(error: NavigationError, messages: ErrorMessages) -> str:
    """Pick the user-facing message for a load failure.

    Connectivity codes map to ``no_internet``, anything mentioning SSL to
    ``ssl_error``, and everything else to ``load_error``.
    """
    if error.code in NO_INTERNET_ERROR_CODES:
        return messages.no_internet
    if "ssl" in error.description.lower():
        return messages.ssl_error
    return messages.load_error
