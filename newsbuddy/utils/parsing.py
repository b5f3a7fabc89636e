"""Reading JSON out of free-form model output."""

import json
import re
from typing import Optional

# (pattern, group holding the JSON), tried in order
_CANDIDATES = [
    (re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```"), 1),
    (re.compile(r"\{[\s\S]*\}"), 0),
    (re.compile(r"\[[\s\S]*\]"), 0),
]


def extract_json(text: Optional[str]) -> Optional[dict | list]:
    """
    Parse the JSON object or list in a model reply.

    The reply may be bare JSON, a fenced code block, or JSON surrounded by
    prose. Returns None when nothing parses.
    """
    if not text:
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    for pattern, group in _CANDIDATES:
        match = pattern.search(text)
        if match is None:
            continue
        try:
            return json.loads(match.group(group))
        except json.JSONDecodeError:
            continue
    return None
