"""Extract a JSON object from an LLM answer."""

import json
import re
from typing import Any, Optional

_FENCED = re.compile(r"```(?:json)?\s*(\{.*\})\s*```", re.DOTALL)


def extract_json_object(text: str) -> Optional[dict[str, Any]]:
    """Return the JSON object in ``text``, fenced or raw, or None."""
    if not text:
        return None

    candidates = []
    fenced = _FENCED.search(text)
    if fenced:
        candidates.append(fenced.group(1))

    # Outermost braces, so nested objects survive
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None
