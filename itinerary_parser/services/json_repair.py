"""
JSON Repair Engine - Recovers truncated JSON arrays from generator output.

The scanner is a three-state machine (NORMAL, IN_STRING, ESCAPED) so that
brackets inside string literals and escaped quotes never disturb the
bracket counts.
"""
import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from ..errors import RepairFailure

logger = logging.getLogger(__name__)


class ScanState(str, Enum):
    """Lexical state of the bracket scanner."""
    NORMAL = "normal"
    IN_STRING = "in_string"
    ESCAPED = "escaped"


_CLOSER = {"{": "}", "[": "]"}


@dataclass
class BracketScan:
    """Result of scanning a JSON fragment for unbalanced brackets."""
    open_braces: int = 0
    open_brackets: int = 0
    stack: list[str] = field(default_factory=list)
    state: ScanState = ScanState.NORMAL
    # Offsets just past each '}' that closed an element of the top-level array
    element_ends: list[int] = field(default_factory=list)

    @property
    def balanced(self) -> bool:
        return self.open_braces == 0 and self.open_brackets == 0

    @property
    def missing_closers(self) -> str:
        """Closers for every still-open opener, innermost first."""
        return "".join(_CLOSER[opener] for opener in reversed(self.stack))


def scan_brackets(text: str) -> BracketScan:
    """Count unmatched braces/brackets outside string literals."""
    scan = BracketScan()

    for index, char in enumerate(text):
        if scan.state is ScanState.ESCAPED:
            scan.state = ScanState.IN_STRING
            continue

        if scan.state is ScanState.IN_STRING:
            if char == "\\":
                scan.state = ScanState.ESCAPED
            elif char == '"':
                scan.state = ScanState.NORMAL
            continue

        if char == '"':
            scan.state = ScanState.IN_STRING
        elif char == "{":
            scan.open_braces += 1
            scan.stack.append(char)
        elif char == "[":
            scan.open_brackets += 1
            scan.stack.append(char)
        elif char == "}":
            scan.open_braces -= 1
            if scan.stack and scan.stack[-1] == "{":
                scan.stack.pop()
                if scan.stack == ["["]:
                    scan.element_ends.append(index + 1)
        elif char == "]":
            scan.open_brackets -= 1
            if scan.stack and scan.stack[-1] == "[":
                scan.stack.pop()

    return scan


# Boundary heuristics take the candidate text and return the offset to cut
# at, or None when they cannot find a boundary.
BoundaryHeuristic = Callable[[str], Optional[int]]

_BRACE_LINE = re.compile(r"^\s*\}\s*,?\s*$")
_BRACKET_LINE = re.compile(r"^\s*\]\s*,?\s*$")


def line_boundary(text: str) -> Optional[int]:
    """
    Find the end of the last complete day in pretty-printed JSON.

    Looks for the last closing-brace-only line, then the nearest
    activities-array close above it, then the day object's close below
    that. Depends on one-token-per-line formatting.
    """
    lines = text.splitlines(keepends=True)
    offsets = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line)

    brace_lines = [i for i, line in enumerate(lines) if _BRACE_LINE.match(line)]
    if not brace_lines:
        return None

    array_close = next(
        (i for i in range(brace_lines[-1] - 1, -1, -1) if _BRACKET_LINE.match(lines[i])),
        None,
    )
    if array_close is None:
        return None

    day_close = next(
        (i for i in range(array_close + 1, len(lines)) if _BRACE_LINE.match(lines[i])),
        None,
    )
    if day_close is None:
        return None

    return offsets[day_close] + lines[day_close].index("}") + 1


def structural_boundary(text: str) -> Optional[int]:
    """Find the end of the last complete element of the top-level array."""
    ends = scan_brackets(text).element_ends
    return ends[-1] if ends else None


DEFAULT_BOUNDARIES: tuple[BoundaryHeuristic, ...] = (line_boundary, structural_boundary)


def close_open_brackets(text: str) -> str:
    """Append the closers needed to balance a truncated fragment."""
    fixed = text.rstrip()
    if fixed.endswith(","):
        fixed = fixed[:-1].rstrip()
    return fixed + scan_brackets(fixed).missing_closers


def repair_json_array(
    candidate: str,
    boundaries: Sequence[BoundaryHeuristic] = DEFAULT_BOUNDARIES,
) -> tuple[Any, bool]:
    """
    Parse a JSON candidate, repairing truncation when needed.

    Args:
        candidate: Text starting at the itinerary's opening '['
        boundaries: Heuristics tried, in order, to trim a dangling object

    Returns:
        Tuple of (parsed value, whether repair was needed)

    Raises:
        RepairFailure: if no attempt produces valid JSON
    """
    try:
        return json.loads(candidate), False
    except (ValueError, RecursionError) as parse_error:
        error = parse_error
        logger.info(f"Strict JSON parse failed, attempting repair: {parse_error}")

    text = candidate.rstrip()
    attempts = []
    if not text.endswith("]"):
        for boundary in boundaries:
            cut = boundary(text)
            if cut is not None:
                attempts.append(text[:cut])
    # Closing whatever is still open is the last resort
    attempts.append(text)

    for attempt in attempts:
        fixed = close_open_brackets(attempt)
        try:
            parsed = json.loads(fixed)
        except (ValueError, RecursionError):
            continue
        logger.debug(f"Repaired JSON by trimming {len(text) - len(attempt)} chars")
        return parsed, True

    raise RepairFailure(f"JSON parsing failed even after attempted fix: {error}")
