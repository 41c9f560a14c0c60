"""Errors raised by platform adapters."""

from __future__ import annotations

from typing import Any


class PlatformError(Exception):
    """
    A call to the managed platform failed.

    Carries the upstream message and details verbatim so they can be
    surfaced to API callers unchanged.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Any = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def __repr__(self) -> str:
        return f"PlatformError({self.message!r}, code={self.code!r})"
