"""
Convert libsass values into plain data.

Conversion is total: anything without a plain counterpart becomes
``UNDEFINED`` instead of raising. Number units are discarded.
"""

from __future__ import annotations

import json
from typing import Any

import sass

from sassvars.core.ir.values import UNDEFINED, PlainValue, Undefined


def convert_value(value: Any) -> PlainValue | Undefined:
    """Convert one libsass value (as passed to custom functions) to plain data."""
    if isinstance(value, bool):
        return value

    if isinstance(value, sass.SassColor):
        return _convert_color(value)

    if isinstance(value, sass.SassList):
        return [convert_value(item) for item in value.items]

    if isinstance(value, sass.SassMap):
        return _convert_map(value)

    if isinstance(value, sass.SassNumber):
        return _plain_number(value.value)

    if value is None:
        return None

    if isinstance(value, str):
        return value

    return UNDEFINED


def _convert_color(color: sass.SassColor) -> str:
    r, g, b = (_format_number(channel) for channel in (color.r, color.g, color.b))
    if color.a == 1:
        return f"rgb({r}, {g}, {b})"
    return f"rgba({r}, {g}, {b}, {_format_number(color.a)})"


def _convert_map(mapping: sass.SassMap) -> dict[Any, Any]:
    result: dict[Any, Any] = {}
    for key, item in mapping.items():
        result[_map_key(convert_value(key))] = convert_value(item)
    return result


def _map_key(key: Any) -> Any:
    # Lists and maps are legal Sass map keys but unhashable here
    if isinstance(key, (list, dict)):
        return json.dumps(key, default=repr)
    return key


def _plain_number(number: float) -> int | float:
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def _format_number(number: float) -> str:
    return str(_plain_number(number))
