from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type, TypeVar

from flask import request
from pydantic import BaseModel, ValidationError

from labubu_store.app.common.errors import INVALID_JSON, VALIDATION_ERROR, abort_json

M = TypeVar("M", bound=BaseModel)


def get_json() -> Dict[str, Any]:
    if not request.is_json:
        abort_json(400, INVALID_JSON, "Request must be application/json")
    data = request.get_json(silent=True)
    if data is None or not isinstance(data, dict):
        abort_json(400, INVALID_JSON, "Malformed JSON body")
    return data


def require_fields(data: Dict[str, Any], fields: Iterable[str]) -> None:
    missing = [f for f in fields if f not in data]
    if missing:
        abort_json(400, VALIDATION_ERROR, "Missing required fields", {"missing": missing})


def get_int(data: Mapping[str, Any], key: str, default: Optional[int] = None) -> int:
    """Read an integer field, rejecting bools and non-numeric strings."""
    raw = data.get(key, default)
    if raw is None:
        abort_json(400, VALIDATION_ERROR, "Missing required fields", {"missing": [key]})
    if isinstance(raw, bool):
        abort_json(400, VALIDATION_ERROR, f"{key} must be an integer")
    try:
        return int(raw)
    except (TypeError, ValueError):
        abort_json(400, VALIDATION_ERROR, f"{key} must be an integer")


def get_bool(data: Mapping[str, Any], key: str) -> bool:
    """Read a JSON boolean; strings such as "false" are rejected."""
    if key not in data:
        abort_json(400, VALIDATION_ERROR, "Missing required fields", {"missing": [key]})
    raw = data[key]
    if not isinstance(raw, bool):
        abort_json(400, VALIDATION_ERROR, f"{key} must be a boolean")
    return raw


def field_errors(exc: ValidationError, messages: Mapping[str, str], form_field: str = "form") -> Dict[str, str]:
    """Collapse pydantic errors into one message per field.

    `messages` maps a field name to the text shown next to that field; fields
    without an entry fall back to pydantic's own message. Form-level errors
    (from model validators) carry no field and are filed under `form_field`.
    """
    errors: Dict[str, str] = {}
    for err in exc.errors():
        if err["loc"]:
            field = str(err["loc"][0])
            errors.setdefault(field, messages.get(field, err["msg"]))
        else:
            errors.setdefault(form_field, err["msg"])
    return errors


def validate_form(
    model: Type[M],
    values: Mapping[str, Any],
    messages: Mapping[str, str],
    form_field: str = "form",
) -> Tuple[Optional[M], Dict[str, str]]:
    try:
        return model.model_validate(dict(values)), {}
    except ValidationError as exc:
        return None, field_errors(exc, messages, form_field)
