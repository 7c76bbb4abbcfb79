"""Request body helpers shared by the JSON blueprints.

Bodies may arrive as JSON or as a form post. Anything malformed aborts with a
400 that the error-pages blueprint renders as JSON.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, TypeVar

from flask import abort, request

E = TypeVar("E", bound=enum.Enum)


def request_payload() -> dict[str, Any]:
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            abort(400, description="Request body must be a JSON object.")
        return data
    return request.form.to_dict()


def optional_str(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        abort(400, description=f"'{key}' must be a string.")
    return value


def require_str(data: dict[str, Any], key: str) -> str:
    value = (optional_str(data, key) or "").strip()
    if not value:
        abort(400, description=f"'{key}' is required.")
    return value


def str_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    # Form posts send a comma separated string.
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        abort(400, description=f"'{key}' must be a list of strings.")
    return value


def enum_value(data: dict[str, Any], key: str, enum_cls: type[E], default: E) -> E:
    raw = data.get(key)
    if raw is None or raw == "":
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        abort(400, description=f"'{key}' must be one of: {allowed}.")


def bool_value(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"1", "true", "yes", "on", "0", "false", "no", "off"}:
        return value.strip().lower() in {"1", "true", "yes", "on"}
    abort(400, description=f"'{key}' must be a boolean.")
