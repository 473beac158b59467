"""Typed errors raised by the stores and the session gate.

Every error carries a ``kind`` discriminant, the HTTP status it maps to and
an optional field-level ``errors`` mapping. ``main.py`` registers a single
handler that renders them, so no store failure reaches the client as an
unhandled fault.
"""

from typing import Dict, Optional


class GuestbookError(Exception):
    kind: str = "error"
    status_code: int = 400

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(GuestbookError):
    """Uniqueness, length or required-field violation."""

    kind = "validation"


class AuthError(GuestbookError):
    """Login failure. Unknown email and wrong password look the same."""

    kind = "auth"

    def __init__(self, message: str = "Not found"):
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"notFound": True}


class ForbiddenError(GuestbookError):
    kind = "forbidden"
    status_code = 403

    def __init__(self, message: str = "You need to login to access this page"):
        super().__init__(message)


class NotFoundError(GuestbookError):
    kind = "not_found"
