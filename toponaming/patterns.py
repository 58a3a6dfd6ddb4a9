"""Interface naming pattern parser.

A pattern is a comma-separated list of clauses, each holding exactly one
numeric placeholder:

    eth{n}                      eth1, eth2, eth3, ...
    ge-0/0/{n:0}                ge-0/0/0, ge-0/0/1, ...
    e0/{n:1-3},e1/{n:0-3}       e0/1..e0/3, then e1/0..e1/3, ...

``{n}`` starts at 1, ``{n:S}`` starts at S and ``{n:S-E}`` covers the closed
range S..E. Patterns that cannot be parsed fall back to ``eth{n}``; parsing
never raises.

Public API:
    parse_pattern(text)          – pattern text → PatternSpec
    split_pattern_clauses(text)  – comma split that ignores commas inside {}
"""
from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_PATTERN_TEXT = "eth{n}"
DEFAULT_START = 1

# {n}, {n:S} or {n:S-E}
_PLACEHOLDER_RE = re.compile(r"\{n(?::([0-9]+)(?:-([0-9]+))?)?\}")


@dataclass(frozen=True)
class Segment:
    """One clause of a pattern: ``prefix`` + number + ``suffix``."""

    prefix: str
    suffix: str
    start: int = DEFAULT_START
    end: Optional[int] = None  # None = unbounded
    matcher: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        regex = f"{re.escape(self.prefix)}([0-9]+){re.escape(self.suffix)}"
        object.__setattr__(self, "matcher", re.compile(regex))

    @property
    def length(self) -> Optional[int]:
        """Number of values in the segment, None when unbounded."""
        if self.end is None:
            return None
        return self.end - self.start + 1

    @property
    def bounded(self) -> bool:
        return self.end is not None

    def render(self, value: int) -> str:
        return f"{self.prefix}{value}{self.suffix}"

    def extract(self, name: str) -> Optional[int]:
        """Return the numeric middle of ``name`` if the literals match."""
        m = self.matcher.fullmatch(name)
        if not m:
            return None
        return int(m.group(1))


@dataclass(frozen=True)
class PatternSpec:
    """Compiled naming pattern.

    ``original`` is kept for diagnostics only; two specs with the same
    segments compare equal regardless of the text they came from.
    """

    original: str = field(compare=False)
    segments: tuple[Segment, ...]
    fallback: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("PatternSpec requires at least one segment")

    @property
    def reachable_segments(self) -> tuple[Segment, ...]:
        """Segments up to and including the first unbounded one.

        An unbounded segment consumes every remaining offset, so clauses
        after it can never be produced.
        """
        for index, segment in enumerate(self.segments):
            if not segment.bounded:
                return self.segments[: index + 1]
        return self.segments


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def split_pattern_clauses(text: str) -> list[str]:
    """Split a pattern list on top-level commas.

    Commas inside braces are part of a placeholder, not a separator.
    Empty clauses are dropped and the rest are whitespace-trimmed.
    """
    clauses: list[str] = []
    current: list[str] = []
    depth = 0

    for char in text:
        if char == "{":
            depth += 1
        elif char == "}":
            depth = max(0, depth - 1)

        if char == "," and depth == 0:
            clause = "".join(current).strip()
            if clause:
                clauses.append(clause)
            current = []
            continue

        current.append(char)

    clause = "".join(current).strip()
    if clause:
        clauses.append(clause)
    return clauses


def _parse_clause(clause: str) -> Optional[Segment]:
    tokens = list(_PLACEHOLDER_RE.finditer(clause))
    if len(tokens) != 1:
        return None

    token = tokens[0]
    start_str, end_str = token.group(1), token.group(2)
    start = int(start_str) if start_str is not None else DEFAULT_START
    end = int(end_str) if end_str is not None else None
    if end is not None and end < start:
        end = start

    return Segment(
        prefix=clause[: token.start()],
        suffix=clause[token.end():],
        start=start,
        end=end,
    )


def _default_spec(original: str) -> PatternSpec:
    segments = tuple(
        _parse_clause(clause) for clause in split_pattern_clauses(DEFAULT_PATTERN_TEXT)
    )
    return PatternSpec(original=original, segments=segments, fallback=True)


@functools.lru_cache(maxsize=256)
def _compile(text: str) -> PatternSpec:
    segments: list[Segment] = []
    for clause in split_pattern_clauses(text):
        segment = _parse_clause(clause)
        if segment is None:
            logger.debug(f"Dropping interface pattern clause without placeholder: {clause!r}")
            continue
        segments.append(segment)

    if not segments:
        logger.debug(f"Interface pattern {text!r} has no usable clause, using {DEFAULT_PATTERN_TEXT}")
        return _default_spec(text)

    return PatternSpec(original=text, segments=tuple(segments))


def parse_pattern(text: str | None = None) -> PatternSpec:
    """Compile pattern text into a PatternSpec.

    Args:
        text: Pattern text such as ``"eth{n}"`` or ``"e0/{n:1-3},e1/{n:0-3}"``.
            May be None, empty or malformed.

    Returns:
        The compiled pattern, or the ``eth{n}`` default when nothing usable
        was found.
    """
    if not text or not text.strip():
        return _default_spec(text or "")
    return _compile(text)
