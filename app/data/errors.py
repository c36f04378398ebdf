from __future__ import annotations

from typing import Any, Optional


class EsoLogsError(RuntimeError):
    """Base class for failures the data service turns into baseline fallbacks."""


class AuthenticationError(EsoLogsError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(EsoLogsError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(EsoLogsError):
    def __init__(self, message: str, errors: Optional[list[Any]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class TransformError(EsoLogsError):
    pass


class UnknownSelectorError(LookupError):
    """Raised for an update label missing from the date-range table (caller bug, never a fallback)."""

    def __init__(self, selector: str):
        super().__init__(f"Unknown update selector: {selector!r}")
        self.selector = selector
