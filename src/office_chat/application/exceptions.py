from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "", *, reason: str | None = None) -> None:
        self.detail = detail
        self.reason = reason
        super().__init__(detail)


class ValidationError(AppError):
    """Rejected input. ``reason`` is a stable, machine-readable code."""


class AuthenticationError(AppError):
    """The bearer token is valid but names no known staff member."""
