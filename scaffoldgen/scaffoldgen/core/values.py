"""Parameter values and their canonical text form."""

from __future__ import annotations

import json
from typing import Any, Union

from typing_extensions import TypeAliasType

# Closed set of shapes a parameter or structured default can take.
Value = TypeAliasType(
    "Value",
    Union[bool, int, float, str, list["Value"], dict[str, "Value"]],
)


def _format_float(value: float) -> str:
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def stringify(value: Any) -> str:
    """Convert a parameter value to its canonical string form.

    This is the form validation patterns are matched against and the form
    template expressions are written out in.

    Args:
        value: Scalar or structured value

    Returns:
        ``true``/``false`` for booleans, an empty string for ``None``,
        compact JSON for lists and mappings, plain text otherwise.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)
