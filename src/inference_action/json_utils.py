"""JSON parsing helpers."""

from __future__ import annotations

import json
from typing import Any, TypeAlias, Union

JsonValue: TypeAlias = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]


def _reject_constant(name: str) -> Any:
    raise json.JSONDecodeError(f"Invalid constant {name}", name, 0)


def parse_json(text: str) -> JsonValue:
    """
    Parse JSON text strictly: the whole input must be one JSON document, and the
    NaN/Infinity extensions are rejected. Raises json.JSONDecodeError otherwise,
    empty input included.
    """
    return json.loads(text, parse_constant=_reject_constant)


def dump_pretty(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def json_pointer(path: Any) -> str:
    """Render a jsonschema error path (deque of keys/indexes) as a JSON pointer."""
    parts = [str(part).replace("~", "~0").replace("/", "~1") for part in path]
    if not parts:
        return ""
    return "/" + "/".join(parts)
