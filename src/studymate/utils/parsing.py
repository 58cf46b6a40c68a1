"""Parsing helpers for values typed by users (CLI options, query strings)."""

import json
from typing import Any


def parse_value(raw: str) -> Any:
    """JSON-decode a value, keeping plain text as a string.

    Examples:
        "3" -> 3, "true" -> True, "null" -> None, "Math" -> "Math"
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw
