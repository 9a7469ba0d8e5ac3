"""JSON value variant used for every stored preference.

Values are restricted to the closed JSON variant (null, bool, number,
string, list, string-keyed mapping) so that encoding and structural
comparison are total over everything the store accepts.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import JsonValue, TypeAdapter, ValidationError

from env_prefs.core.exceptions import PreferenceEncodeError

__all__ = ["JsonValue", "to_json_value", "encode", "decode"]

_adapter: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


def to_json_value(value: Any, key: str = "<value>") -> JsonValue:
    """Validate that ``value`` belongs to the JSON variant.

    Args:
        value: Arbitrary Python value.
        key: Storage key, used in the error message only.

    Returns:
        The validated value.

    Raises:
        PreferenceEncodeError: If the value is not JSON representable.
    """
    try:
        return _adapter.validate_python(value, strict=True)
    except ValidationError as e:
        raise PreferenceEncodeError(key, f"{e.error_count()} validation error(s)") from e
    except RecursionError as e:
        raise PreferenceEncodeError(key, "cyclic structure") from e


def encode(value: Any, key: str = "<value>") -> str:
    """Serialize a value to its stored string form."""
    validated = to_json_value(value, key)
    try:
        return json.dumps(validated, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise PreferenceEncodeError(key, str(e)) from e


def decode(raw: str) -> JsonValue:
    """Parse a stored string. Raises ValueError on malformed input."""
    return json.loads(raw)
