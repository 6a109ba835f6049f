from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, NoReturn, Optional

VALIDATION_ERROR = "validation_error"
INVALID_QUANTITY = "invalid_quantity"
INVALID_JSON = "invalid_json"
NOT_FOUND = "not_found"
CONFLICT = "conflict"
INTERNAL_ERROR = "internal_error"


@dataclass
class ApiError(Exception):
    """Raise to return a consistent JSON error response."""

    status_code: int
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self, request_id: str | None = None) -> Dict[str, Any]:
        return error_payload(self.code, self.message, self.details, request_id)


def error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None, request_id: str | None = None) -> Dict[str, Any]:
    """The one error shape every handler returns."""
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "request_id": request_id,
        }
    }


def abort_json(status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> NoReturn:
    raise ApiError(status_code=status_code, code=code, message=message, details=details)


def abort_not_found(message: str) -> NoReturn:
    abort_json(404, NOT_FOUND, message)


def abort_conflict(message: str, **details: Any) -> NoReturn:
    abort_json(409, CONFLICT, message, details or None)


def abort_validation(fields: Mapping[str, str], message: str = "Please correct the highlighted fields.", **extra: Any) -> NoReturn:
    """400 with per-field messages under `details.fields`."""
    abort_json(400, VALIDATION_ERROR, message, {"fields": dict(fields), **extra})
