import re
from typing import Any

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def missing_fields(**fields: Any) -> list[str]:
    """Names of the given fields whose values are falsy.

    Zero counts as missing, so a workout with ``duration=0`` is rejected the
    same way as one without a duration.
    """
    return [name for name, value in fields.items() if not value]


def parse_leading_int(value: Any) -> int:
    """Integer prefix of ``value``: ``"45min"`` -> 45, ``30.9`` -> 30."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT_RE.match(str(value))
    if match is None:
        raise ValueError(f"not an integer: {value!r}")
    return int(match.group(1))
