"""
Text Preprocessor - Isolates the JSON array inside a generator response.
"""
import re

from ..errors import JSONNotFoundError


_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences, tagged 'json' or not."""
    return _FENCE_RE.sub("", text.strip())


def extract_json_candidate(text: str) -> str:
    """
    Return the substring from the first '[' to the last ']' inclusive.

    Raises:
        JSONNotFoundError: if either bracket is missing.
    """
    cleaned = strip_code_fences(text)
    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start == -1 or end == -1 or end < start:
        raise JSONNotFoundError()
    return cleaned[start:end + 1]
