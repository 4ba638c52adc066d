"""Result normalization for structured JSON output."""

import json


def normalize_json(raw: str) -> str:
    """
    Pretty-print a JSON string for display.

    Parses the input and re-serializes it with the parser's key order and a
    2-space indent. Anything that does not parse is returned unchanged, so
    the function never raises and always yields a displayable string.

    Args:
        raw: Raw text returned by the Structure operation.

    Returns:
        Indented JSON text, or raw unchanged.
    """
    if not isinstance(raw, str):
        return "" if raw is None else str(raw)

    try:
        parsed = json.loads(raw)
        return json.dumps(parsed, indent=2, ensure_ascii=False)
    except (ValueError, RecursionError):
        return raw
