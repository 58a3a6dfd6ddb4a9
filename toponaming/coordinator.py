"""Editing operations that keep interface names and node ids consistent.

Key operations:
- remap_on_pattern_change: re-encode a node's interface names under a new
  pattern, preserving allocation order
- change_node_kind: switch a node's kind and remap its interfaces
- connect_nodes: draw a new link with freshly allocated interfaces
- duplicate_nodes: copy nodes (and the links between them) with fresh ids

None of these are transactional. Callers that need undo should keep the
returned renames / id maps or snapshot the graph beforehand.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from toponaming.base import NamingHost
from toponaming.codec import name_for_offset, offset_for_name
from toponaming.config import settings
from toponaming.identifiers import (
    classify_node,
    is_template_id,
    next_template_id,
    unique_id,
)
from toponaming.kinds import is_special_node_id
from toponaming.patterns import PatternSpec, parse_pattern
from toponaming.pool import EndpointAllocator
from toponaming.schemas import EndpointRole, GraphLink, GraphNode
from toponaming.topology import TopologyIndex, link_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EndpointRename:
    """One interface name rewritten by a remap."""
    link_id: str
    role: EndpointRole
    old_name: str
    new_name: str


def remap_on_pattern_change(
    entity_id: str,
    old_spec: PatternSpec,
    new_spec: PatternSpec,
    host: NamingHost,
) -> list[EndpointRename]:
    """Rewrite a node's interface names from ``old_spec`` to ``new_spec``.

    The Nth interface stays the Nth interface: each name is decoded to its
    offset under the old pattern and re-encoded under the new one. Names the
    old pattern did not produce are left untouched.

    Args:
        entity_id: Node whose link ends are rewritten
        old_spec: Pattern the current names were allocated under
        new_spec: Pattern to allocate under from now on
        host: Naming host providing connections and the endpoint writer

    Returns:
        The renames applied, in the order they were written
    """
    renames: list[EndpointRename] = []
    if old_spec == new_spec:
        return renames

    # Materialize first: writes below must not disturb the enumeration
    for attachment in list(host.connections(entity_id)):
        offset = offset_for_name(old_spec, attachment.endpoint)
        if offset is None:
            if attachment.endpoint:
                logger.debug(
                    f"Keeping {entity_id}:{attachment.endpoint}, not produced by {old_spec.original!r}"
                )
            continue
        new_name = name_for_offset(new_spec, offset)
        if new_name == attachment.endpoint:
            continue
        host.set_endpoint(attachment.link_id, attachment.role, new_name)
        renames.append(
            EndpointRename(attachment.link_id, attachment.role, attachment.endpoint, new_name)
        )

    if renames:
        logger.info(
            f"Remapped {len(renames)} interfaces on {entity_id} "
            f"from {old_spec.original!r} to {new_spec.original!r}"
        )
    return renames


def change_node_kind(
    topology: TopologyIndex,
    node_id: str,
    new_kind: str | None,
    update_endpoints: bool | None = None,
) -> list[EndpointRename]:
    """Change a node's kind, remapping its interfaces to the new kind's pattern.

    A node-level ``interface_pattern`` override pins the pattern, so only
    nodes relying on the kind catalog are remapped.

    Args:
        topology: Topology holding the node
        node_id: Node to change
        new_kind: Kind to switch to
        update_endpoints: Remap connected interfaces; defaults to
            settings.update_endpoints_on_kind_change

    Returns:
        The interface renames applied (empty when remapping is disabled)
    """
    node = topology.require_node(node_id)
    old_spec = parse_pattern(topology.interface_pattern(node_id))
    old_kind = node.kind
    node.kind = new_kind
    logger.info(f"Node {node_id} kind changed from {old_kind} to {new_kind}")

    if update_endpoints is None:
        update_endpoints = settings.update_endpoints_on_kind_change
    if not update_endpoints:
        return []

    new_spec = parse_pattern(topology.interface_pattern(node_id))
    return remap_on_pattern_change(node_id, old_spec, new_spec, topology)


def _unique_link_id(topology: TopologyIndex, link: GraphLink) -> str:
    base = link_name(link.source, link.source_endpoint, link.target, link.target_endpoint)
    used = topology.link_ids()
    candidate = base
    counter = 1
    while candidate in used:
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate


def connect_nodes(topology: TopologyIndex, source_id: str, target_id: str) -> GraphLink:
    """Add a link between two nodes with the next free interface on each end.

    Special nodes (bridges, host adapters, dummies) get an empty interface.

    Raises:
        NodeNotFoundError: If either node is not in the topology
    """
    topology.require_node(source_id)
    topology.require_node(target_id)

    allocator = EndpointAllocator(topology)
    link = GraphLink(
        id="",
        source=source_id,
        target=target_id,
        source_endpoint=allocator.allocate(source_id),
        target_endpoint=allocator.allocate(target_id),
    )
    link.id = _unique_link_id(topology, link)
    topology.add_link(link)
    logger.info(f"Created link {link.id}")
    return link


def _duplicate_node(node: GraphNode, used_ids: set[str], used_names: set[str]) -> GraphNode:
    """Copy one node under a fresh id and display name."""
    if is_template_id(node.id) and node.name:
        new_name = unique_id(node.name, used_names)
        new_id = next_template_id(used_ids)
    else:
        category = classify_node(node.id, node.is_group)
        if node.is_group:
            base = node.name or node.id.split(":", 1)[0]
        else:
            base = node.name or node.id
        new_id = unique_id(base, used_ids, category)
        if node.is_group:
            new_name = new_id.split(":", 1)[0]
        else:
            new_name = new_id

    if new_id.startswith("dummy"):
        new_name = "dummy"
    elif is_special_node_id(new_id) and ":" in new_id:
        new_name = new_id

    return node.model_copy(update={"id": new_id, "name": new_name, "copy_from": node.id})


def duplicate_nodes(topology: TopologyIndex, node_ids: Iterable[str]) -> dict[str, str]:
    """Duplicate nodes and the links running between them.

    Copied links keep their interface names (the copies start with no other
    links, so those names are free); empty interfaces on ordinary nodes are
    filled from the copy's pattern and the link id follows the filled names.
    A copied alias whose root was not copied stays in the original alias
    group and gets fresh interfaces from it.

    Args:
        topology: Topology to paste into
        node_ids: Nodes to duplicate, in paste order

    Returns:
        Map of original node id to the new node id

    Raises:
        NodeNotFoundError: If a node id is not in the topology
    """
    originals = [topology.require_node(node_id) for node_id in node_ids]
    used_ids = topology.node_ids()
    used_names = topology.node_names()

    id_map: dict[str, str] = {}
    for node in originals:
        if node.id in id_map:
            continue
        copy = _duplicate_node(node, used_ids, used_names)
        topology.add_node(copy)
        used_ids.add(copy.id)
        used_names.add(copy.name)
        id_map[node.id] = copy.id

    # Aliases follow their root when it was copied too; otherwise the copy
    # joins the original alias group and must draw from its shared pool
    pooled: set[str] = set()
    for new_id in id_map.values():
        copy = topology.require_node(new_id)
        if not copy.alias_of:
            continue
        if copy.alias_of in id_map:
            copy.alias_of = id_map[copy.alias_of]
        else:
            pooled.add(new_id)

    internal_links = [
        link
        for link in list(topology.graph.links)
        if link.source in id_map and link.target in id_map
    ]
    pending: list[tuple[GraphLink, list[EndpointRole]]] = []
    for link in internal_links:
        copy = link.model_copy(
            update={"id": "", "source": id_map[link.source], "target": id_map[link.target]}
        )
        missing: list[EndpointRole] = []
        for role in (EndpointRole.SOURCE, EndpointRole.TARGET):
            if copy.node_for(role) in pooled:
                copy.set_endpoint(role, "")
            if not copy.endpoint(role):
                missing.append(role)
        copy.id = _unique_link_id(topology, copy)
        topology.add_link(copy)
        pending.append((copy, missing))

    # Fill blanks only once every copied link is attached so the allocator
    # sees the names carried over from the originals
    allocator = EndpointAllocator(topology)
    for copy, missing in pending:
        if not missing:
            continue
        for role in missing:
            copy.set_endpoint(role, allocator.allocate(copy.node_for(role)))
        # Re-derive the id from the filled interface names
        copy.id = ""
        copy.id = _unique_link_id(topology, copy)

    logger.info(
        f"Duplicated {len(id_map)} nodes and {len(pending)} links: "
        + ", ".join(f"{old}->{new}" for old, new in id_map.items())
    )
    return id_map
