"""Coercion of raw YAML values to a bound field's declared type."""

from __future__ import annotations

from typing import Any

from .registry import ConfigField


def _coerce_bool(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    return value


def _coerce_int(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return value
    return value


def _coerce_float(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return value
    return value


def _coerce_str(value: Any) -> Any:
    # YAML turns unquoted "yes"/"1.0" into bool/float; a str field wants the text back.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce_list(value: Any) -> Any:
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, str):
        trimmed = value.strip()
        if trimmed:
            return [item.strip() for item in trimmed.split(",") if item.strip()]
    return value


def coerce(raw: Any, field_meta: ConfigField) -> Any:
    """Coerce raw value to the field's type where possible, else return it unchanged."""
    if raw is None:
        return None
    target = field_meta.value_type
    if target is bool:
        return _coerce_bool(raw)
    if target is int:
        return _coerce_int(raw)
    if target is float:
        return _coerce_float(raw)
    if target is str:
        return _coerce_str(raw)
    if target is list:
        return _coerce_list(raw)
    if target is tuple:
        coerced = _coerce_list(raw)
        return tuple(coerced) if isinstance(coerced, list) else coerced
    return raw
