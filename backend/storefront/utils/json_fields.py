import json
from typing import Any, Optional


def parse_json_field(value: Any) -> Optional[Any]:
    """
    Lenient JSON column reader.

    Rows written by older importers hold JSON as text, newer ones as native
    JSON. Blank or malformed text reads as None.
    """
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", "replace")
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return json.loads(value)
        except ValueError:
            return None
    return None


def parse_json_object(value: Any) -> dict:
    parsed = parse_json_field(value)
    return parsed if isinstance(parsed, dict) else {}
