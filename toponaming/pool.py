"""Interface allocation within a naming scope.

A scope is the set of nodes whose existing interface names must be avoided:
normally just the node itself, or every alias of one logical node so that
aliases draw from one shared sequence.

Public API:
    next_free_offset(used)                 – lowest unused offset
    collect_used_offsets(spec, scope, host)
    allocate(spec, scope, host)            – next free name, no side effects
    scope_for(host, entity_id)             – single node or alias group scope
    EndpointAllocator                      – batch allocator that remembers
                                             names handed out but not yet attached
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from toponaming.base import NamingHost
from toponaming.codec import name_for_offset, offset_for_name
from toponaming.patterns import PatternSpec, parse_pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllocationScope:
    """Nodes that share one interface numbering pool."""

    entity_ids: frozenset[str]

    @classmethod
    def single(cls, entity_id: str) -> "AllocationScope":
        return cls(frozenset({entity_id}))

    @classmethod
    def alias_group(cls, entity_ids: Iterable[str]) -> "AllocationScope":
        return cls(frozenset(entity_ids))

    @property
    def is_group(self) -> bool:
        return len(self.entity_ids) > 1


def scope_for(host: NamingHost, entity_id: str) -> AllocationScope:
    """Build the scope for a node, resolving its alias group fresh."""
    members = set(host.alias_group(entity_id) or ())
    members.add(entity_id)
    return AllocationScope.alias_group(members)


def next_free_offset(used_offsets: Iterable[int]) -> int:
    """Return the smallest non-negative integer not in ``used_offsets``."""
    used = set(used_offsets)
    offset = 0
    while offset in used:
        offset += 1
    return offset


def collect_used_offsets(
    spec: PatternSpec,
    scope: AllocationScope,
    host: NamingHost,
) -> set[int]:
    """Decode every interface name held by the scope's nodes.

    Names the pattern did not produce (hand-edited, other patterns, empty)
    are skipped.
    """
    used: set[int] = set()
    for entity_id in sorted(scope.entity_ids):
        for attachment in host.connections(entity_id):
            offset = offset_for_name(spec, attachment.endpoint)
            if offset is not None:
                used.add(offset)
    return used


def allocate(spec: PatternSpec, scope: AllocationScope, host: NamingHost) -> str:
    """Return the next free interface name in the scope.

    Nothing is recorded: the caller must attach the name to a link before
    calling again, or the same name comes back.
    """
    offset = next_free_offset(collect_used_offsets(spec, scope, host))
    name = name_for_offset(spec, offset)
    logger.debug(f"Allocated {name} (offset {offset}) in scope {sorted(scope.entity_ids)}")
    return name


@dataclass
class _ScopePool:
    spec: PatternSpec
    used: set[int]


@dataclass
class EndpointAllocator:
    """Allocates several interface names before any of them is attached.

    Each scope is scanned once, on first use; offsets handed out afterwards
    are remembered so a self-link or a batch of pasted links never receives
    the same name twice. Create a new allocator per editing operation: the
    cached scopes go stale as soon as the host's topology changes.
    """

    host: NamingHost
    _pools: dict[AllocationScope, _ScopePool] = field(default_factory=dict)

    def _pool_for(self, entity_id: str) -> _ScopePool:
        scope = scope_for(self.host, entity_id)
        pool = self._pools.get(scope)
        if pool is None:
            spec = parse_pattern(self.host.interface_pattern(entity_id))
            pool = _ScopePool(spec=spec, used=collect_used_offsets(spec, scope, self.host))
            self._pools[scope] = pool
        return pool

    def allocate(self, entity_id: str) -> str:
        """Return the next interface name for a node and reserve it.

        Special nodes (bridges, host adapters, dummies) get "".
        """
        if self.host.is_special(entity_id):
            return ""

        pool = self._pool_for(entity_id)
        offset = next_free_offset(pool.used)
        pool.used.add(offset)
        return name_for_offset(pool.spec, offset)


def allocate_link_endpoints(
    host: NamingHost,
    source_id: str,
    target_id: str,
) -> tuple[str, str]:
    """Allocate both interface names for a new link.

    Returns:
        (source_endpoint, target_endpoint); a self-link gets two
        different names.
    """
    allocator = EndpointAllocator(host)
    source_endpoint = allocator.allocate(source_id)
    target_endpoint = allocator.allocate(target_id)
    return source_endpoint, target_endpoint
