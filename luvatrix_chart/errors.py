from __future__ import annotations


class BackendError(RuntimeError):
    """Raised by a canvas backend when a margin or title step cannot be applied."""


class LayoutError(RuntimeError):
    """The single failure surfaced by ``ChartBuilder.build``."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
