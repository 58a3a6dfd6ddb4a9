"""Topology graph schemas consumed by the naming engine.

These Pydantic models are the editor's in-memory snapshot of a topology:
nodes, the links between them and the interface names recorded on each
link endpoint.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class EndpointRole(str, Enum):
    """Which end of a link a node sits on."""
    SOURCE = "source"
    TARGET = "target"


class GraphNode(BaseModel):
    id: str
    name: str = ""  # Display name for UI
    kind: str | None = None  # e.g. "nokia_srlinux", "bridge"
    # "group" for group containers, otherwise the node's topology role
    role: str | None = None
    # Node-level pattern override, takes priority over the kind catalog
    interface_pattern: str | None = None
    # Alias nodes point at the topology node they visually represent
    alias_of: str | None = None
    # Copy/paste provenance: id of the node this one was duplicated from
    copy_from: str | None = None

    @property
    def is_group(self) -> bool:
        return self.role == "group"


class GraphLink(BaseModel):
    id: str
    source: str
    target: str
    source_endpoint: str = ""
    target_endpoint: str = ""

    def node_for(self, role: EndpointRole) -> str:
        return self.source if role == EndpointRole.SOURCE else self.target

    def endpoint(self, role: EndpointRole) -> str:
        return self.source_endpoint if role == EndpointRole.SOURCE else self.target_endpoint

    def set_endpoint(self, role: EndpointRole, name: str) -> None:
        if role == EndpointRole.SOURCE:
            self.source_endpoint = name
        else:
            self.target_endpoint = name


class TopologyGraph(BaseModel):
    nodes: list[GraphNode] = Field(default_factory=list)
    links: list[GraphLink] = Field(default_factory=list)
