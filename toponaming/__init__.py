"""Interface and node-id allocation for network topology editors."""

from toponaming.codec import name_for_offset, offset_for_name
from toponaming.identifiers import EntityCategory, strip_trailing_digits, unique_id
from toponaming.patterns import PatternSpec, Segment, parse_pattern
from toponaming.pool import (
    AllocationScope,
    EndpointAllocator,
    allocate,
    allocate_link_endpoints,
    collect_used_offsets,
    next_free_offset,
)
from toponaming.coordinator import remap_on_pattern_change

__version__ = "0.1.0"

__all__ = [
    "AllocationScope",
    "EndpointAllocator",
    "EntityCategory",
    "PatternSpec",
    "Segment",
    "allocate",
    "allocate_link_endpoints",
    "collect_used_offsets",
    "name_for_offset",
    "next_free_offset",
    "offset_for_name",
    "parse_pattern",
    "remap_on_pattern_change",
    "strip_trailing_digits",
    "unique_id",
]
