"""Conversion between interface offsets and rendered interface names.

An offset is the zero-based position of a name within a pattern: offset 0 is
always the first name the pattern produces, independent of the number it
renders. Bounded segments are stacked in clause order; the last reachable
segment keeps counting past its declared range so generation never stops.

Public API:
    name_for_offset(spec, offset)  – offset → name (total for offset >= 0)
    offset_for_name(spec, name)    – name → offset, None if not produced by spec
"""
from __future__ import annotations

from typing import Optional

from toponaming.patterns import PatternSpec


def name_for_offset(spec: PatternSpec, offset: int) -> str:
    """Render the name at ``offset``.

    Example: ``eth{n:1-2},ethx{n}`` gives eth1, eth2, ethx1, ethx2, ...
    For ``eth{n:1-2}`` alone offset 2 renders eth3 (re-based past ``end``).
    """
    if offset < 0:
        raise ValueError(f"Interface offset must be non-negative, got {offset}")

    segments = spec.reachable_segments
    remainder = offset
    # Every segment before the last reachable one is bounded
    for segment in segments[:-1]:
        if remainder < segment.length:
            return segment.render(segment.start + remainder)
        remainder -= segment.length

    last = segments[-1]
    return last.render(last.start + remainder)


def offset_for_name(spec: PatternSpec, name: str | None) -> Optional[int]:
    """Decode ``name`` back to its offset.

    A segment accepts the name when the literal prefix/suffix match, the
    number is at least ``start`` and, for a bounded segment that is not the
    last one, at most ``end``. Otherwise the next segment is tried.

    Returns:
        The offset, or None when no segment accepts the name (e.g. the
        endpoint was renamed by hand or produced by another pattern).
    """
    if not name:
        return None

    segments = spec.reachable_segments
    last_index = len(segments) - 1
    base = 0
    for index, segment in enumerate(segments):
        value = segment.extract(name)
        if value is not None and value >= segment.start:
            if index == last_index or value <= segment.end:
                return base + value - segment.start
        if index != last_index:
            base += segment.length
    return None
