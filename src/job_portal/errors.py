from typing import Any, Dict, Optional


class PortalError(Exception):
    """Base for every failure a page turns into a notification."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(PortalError):
    """The request never produced a usable answer (connection, timeout, non-JSON body)."""


class BackendError(PortalError):
    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}


class ValidationError(PortalError):
    """Raised before any network call when local input is rejected."""

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.fields = fields or {}
