"""Interface naming catalog for node kinds.

Maps containerlab node kinds to the interface pattern used when a link is
drawn to a node of that kind. Operators can layer overrides on top through
``settings.interface_patterns``; a node can pin its own pattern through its
``interface_pattern`` field.

When adding a new kind:
1. Add a KindNaming entry to KIND_CATALOG
2. List short names the topology files use under ``aliases``
3. Add the kind to the catalog test table
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from toponaming.config import settings
from toponaming.patterns import DEFAULT_PATTERN_TEXT, parse_pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KindNaming:
    """Interface naming for one node kind.

    Fields:
        kind: Canonical kind identifier (e.g., "nokia_srlinux")
        interface_pattern: Pattern text (see toponaming.patterns)
        aliases: Alternative kind names that resolve to this entry
    """

    kind: str
    interface_pattern: str
    aliases: tuple[str, ...] = field(default_factory=tuple)


KIND_CATALOG: list[KindNaming] = [
    # Nokia
    KindNaming("nokia_srlinux", "e1-{n}", aliases=("srl",)),
    KindNaming("nokia_sros", "1/1/{n}", aliases=("vr-sros", "vr-nokia_sros")),
    # Arista
    KindNaming("arista_ceos", "eth{n}", aliases=("ceos",)),
    KindNaming("arista_veos", "Et{n}", aliases=("vr-veos", "vr-arista_veos")),
    # Cisco
    KindNaming("cisco_xrd", "Gi0-0-0-{n:0}", aliases=("xrd",)),
    KindNaming("cisco_xrv9k", "Gi0/0/0/{n:0}", aliases=("vr-xrv9k", "vr-cisco_xrv9k")),
    KindNaming("cisco_csr1000v", "Gi{n:2}", aliases=("vr-csr", "vr-cisco_csr1000v")),
    KindNaming("cisco_c8000v", "Gi{n:2}", aliases=("c8000v",)),
    KindNaming("cisco_n9kv", "Ethernet1/{n}", aliases=("vr-n9kv", "vr-cisco_n9kv")),
    KindNaming(
        "cisco_iol",
        "Ethernet0/{n:1-3},Ethernet1/{n:0-3},Ethernet2/{n:0-3},Ethernet3/{n:0-3}",
        aliases=("iol",),
    ),
    # Juniper
    KindNaming("juniper_crpd", "eth{n}", aliases=("crpd",)),
    KindNaming("juniper_vjunosrouter", "ge-0/0/{n:0}"),
    KindNaming("juniper_vjunosswitch", "ge-0/0/{n:0}"),
    KindNaming("juniper_vjunosevolved", "et-0/0/{n:0}"),
    KindNaming("juniper_vsrx", "ge-0/0/{n:0}", aliases=("vr-vsrx", "vr-juniper_vsrx")),
    KindNaming("juniper_vmx", "ge-0/0/{n:0}", aliases=("vr-vmx", "vr-juniper_vmx")),
    # Others
    KindNaming("cvx", "swp{n}", aliases=("cumulus_cvx",)),
    KindNaming("sonic-vs", "Ethernet{n:0}"),
    KindNaming("fortinet_fortigate", "port{n}"),
    KindNaming("vyosnetworks_vyos", "eth{n}", aliases=("vyos",)),
    KindNaming("linux", "eth{n}"),
]

_BY_KIND: dict[str, KindNaming] = {}
for _entry in KIND_CATALOG:
    _BY_KIND[_entry.kind] = _entry
    for _alias in _entry.aliases:
        _BY_KIND[_alias] = _entry


def get_kind_naming(kind: str | None) -> Optional[KindNaming]:
    """Look up a catalog entry by canonical kind or alias."""
    if not kind:
        return None
    return _BY_KIND.get(kind) or _BY_KIND.get(kind.lower())


def resolve_interface_pattern(kind: str | None, override: str | None = None) -> str:
    """Return the pattern text for a node.

    Lookup chain:
    1. Node-level override (if it parses to a usable pattern)
    2. settings.interface_patterns[kind] (or its canonical kind)
    3. KIND_CATALOG entry for the kind or alias
    4. settings.default_interface_pattern
    """
    if override:
        if not parse_pattern(override).fallback:
            return override
        logger.warning(f"Ignoring unusable interface pattern override {override!r}")

    entry = get_kind_naming(kind)
    if kind:
        configured = settings.interface_patterns.get(kind)
        if configured is None and entry is not None:
            configured = settings.interface_patterns.get(entry.kind)
        if configured:
            return configured

    if entry is not None:
        return entry.interface_pattern

    return settings.default_interface_pattern or DEFAULT_PATTERN_TEXT


def is_special_node_id(node_id: str) -> bool:
    """Whether a node id names a bridge/host/macvlan/vxlan/dummy endpoint.

    These endpoints never get an allocated interface name.
    """
    if not node_id:
        return False
    return any(node_id.startswith(prefix) for prefix in settings.special_node_prefixes)


def is_adapter_kind(kind: str) -> bool:
    """Whether ``<kind>:<label>`` ids carry a host adapter as the label."""
    return kind in settings.adapter_kinds
