"""In-memory naming host over a TopologyGraph snapshot.

TopologyIndex answers the engine's questions (pattern, connections, alias
group) straight from the graph lists on every call, so it always reflects
the current snapshot. Read paths treat unknown ids as isolated nodes with
the default pattern; mutations on unknown ids raise.
"""
from __future__ import annotations

from typing import Iterator

from toponaming.base import Attachment, NamingHost
from toponaming.kinds import resolve_interface_pattern
from toponaming.schemas import EndpointRole, GraphLink, GraphNode, TopologyGraph


class NodeNotFoundError(Exception):
    """Raised when a node id is not part of the topology."""
    pass


class LinkNotFoundError(Exception):
    """Raised when a link id is not part of the topology."""
    pass


def link_name(
    source_node: str,
    source_interface: str,
    target_node: str,
    target_interface: str,
) -> str:
    """Build the id of a link from its two ends.

    Each end renders as ``node:interface`` (the interface is empty for
    special nodes) and the ends are joined in sorted order, so drawing the
    link in either direction yields the same id.

    Args:
        source_node: Node id on the source end
        source_interface: Interface name on the source end
        target_node: Node id on the target end
        target_interface: Interface name on the target end

    Returns:
        Link id such as "r1:eth2-r2:eth1"
    """
    ends = sorted((f"{source_node}:{source_interface}", f"{target_node}:{target_interface}"))
    return "-".join(ends)


class TopologyIndex(NamingHost):
    """NamingHost backed by a mutable TopologyGraph."""

    def __init__(self, graph: TopologyGraph | None = None):
        self.graph = graph if graph is not None else TopologyGraph()

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_node(self, node_id: str) -> GraphNode | None:
        for node in self.graph.nodes:
            if node.id == node_id:
                return node
        return None

    def require_node(self, node_id: str) -> GraphNode:
        node = self.get_node(node_id)
        if node is None:
            raise NodeNotFoundError(f"Node {node_id} not found")
        return node

    def get_link(self, link_id: str) -> GraphLink | None:
        for link in self.graph.links:
            if link.id == link_id:
                return link
        return None

    def node_ids(self) -> set[str]:
        return {node.id for node in self.graph.nodes}

    def node_names(self) -> set[str]:
        return {node.name for node in self.graph.nodes if node.name}

    def link_ids(self) -> set[str]:
        return {link.id for link in self.graph.links}

    def links_of(self, node_id: str) -> Iterator[GraphLink]:
        for link in self.graph.links:
            if link.source == node_id or link.target == node_id:
                yield link

    # =========================================================================
    # NamingHost
    # =========================================================================

    def interface_pattern(self, entity_id: str) -> str | None:
        node = self.get_node(entity_id)
        if node is None:
            return None
        return resolve_interface_pattern(node.kind, node.interface_pattern)

    def connections(self, entity_id: str) -> Iterator[Attachment]:
        for link in self.links_of(entity_id):
            for role in (EndpointRole.SOURCE, EndpointRole.TARGET):
                if link.node_for(role) == entity_id:
                    yield Attachment(link.id, role, link.endpoint(role))

    def alias_group(self, entity_id: str) -> set[str]:
        """Every node sharing the same alias root.

        The root is the node an alias points at via ``alias_of`` (or the
        node itself). Membership is symmetric: the root, all of its aliases
        and the queried node form one group.
        """
        node = self.get_node(entity_id)
        root = (node.alias_of if node else None) or entity_id
        members = {entity_id, root}
        for other in self.graph.nodes:
            if (other.alias_of or other.id) == root:
                members.add(other.id)
        return members

    def set_endpoint(self, link_id: str, role: EndpointRole, name: str) -> None:
        link = self.get_link(link_id)
        if link is None:
            raise LinkNotFoundError(f"Link {link_id} not found")
        link.set_endpoint(role, name)

    # =========================================================================
    # Mutation Methods
    # =========================================================================

    def add_node(self, node: GraphNode) -> GraphNode:
        if self.get_node(node.id) is not None:
            raise ValueError(f"Node {node.id} already exists")
        self.graph.nodes.append(node)
        return node

    def add_link(self, link: GraphLink) -> GraphLink:
        for node_id in (link.source, link.target):
            self.require_node(node_id)
        if self.get_link(link.id) is not None:
            raise ValueError(f"Link {link.id} already exists")
        self.graph.links.append(link)
        return link
