import json
import re
from typing import Any, Optional, Dict

FENCE_OPEN_PATTERN = re.compile(r"```json", re.IGNORECASE)
FENCED_JSON_PATTERN = re.compile(r"```json\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x1f]")


def locate_json_span(text: Optional[str]) -> Optional[str]:
    """
    Find the text of the JSON object embedded in a model reply.

    A ```json fenced block wins. Otherwise the first balanced top-level
    {...} span is returned; braces inside string literals are ignored.
    Returns None when neither is present.
    """
    if not text:
        return None

    fence_open = FENCE_OPEN_PATTERN.search(text)
    if fence_open:
        # Scan from the fence so backticks inside JSON strings do not end the block.
        start = text.find("{", fence_open.end())
        if start != -1:
            span = _balanced_object_at(text, start)
            if span is not None:
                return span
        fenced = FENCED_JSON_PATTERN.search(text)
        if fenced:
            return fenced.group(1)

    start = text.find("{")
    while start != -1:
        span = _balanced_object_at(text, start)
        if span is not None:
            return span
        start = text.find("{", start + 1)
    return None


def _balanced_object_at(text: str, start: int) -> Optional[str]:
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def decode_json_object(candidate: str) -> Dict[str, Any]:
    """
    Decode a located span into a dict.

    Raises ValueError (json.JSONDecodeError included) when the span is not
    valid JSON or does not hold an object.
    """
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        cleaned = CONTROL_CHARS_PATTERN.sub("", candidate)
        parsed = json.loads(cleaned)

    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed
