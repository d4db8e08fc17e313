"""
fleet_ledger/Core/errors.py
===========================
Service Error Hierarchy

Every failure the core can report maps to one of these classes. Routes do not
build HTTP errors themselves; the exception handlers registered in main.py
translate a LedgerError into its status code and JSON body.

    LedgerError
    ├── ValidationError   400  message + field errors, nothing mutated
    ├── NotFoundError     404  trip / driver / vehicle absent
    ├── ForbiddenError    403  role rule violated
    ├── ConflictError     400  duplicate unique field
    └── UnexpectedError   500  store or transport failure
"""

from typing import Any, Dict, List, Optional


class LedgerError(Exception):
    """Base class for errors surfaced to the API caller."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(LedgerError):
    """Malformed or missing input, reported with field-level detail."""

    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, [{"field": field, "message": message}])

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class NotFoundError(LedgerError):
    status_code = 404


class ForbiddenError(LedgerError):
    status_code = 403


class ConflictError(LedgerError):
    """Duplicate value on a unique field (e.g. driver email)."""

    status_code = 400


class UnexpectedError(LedgerError):
    """Store or transport failure. Never retried."""

    status_code = 500

    def to_dict(self) -> Dict[str, Any]:
        return {"message": "Server error", "error": self.message}
