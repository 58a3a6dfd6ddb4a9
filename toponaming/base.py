"""Host interface for the naming engine.

The engine never walks a graph itself. Everything it needs to know about the
topology comes through a NamingHost supplied by the caller, and the only
write it performs (endpoint remapping) goes back through the same host.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, NamedTuple

from toponaming.kinds import is_special_node_id
from toponaming.schemas import EndpointRole


class Attachment(NamedTuple):
    """One end of a link that belongs to a given node."""
    link_id: str
    role: EndpointRole
    endpoint: str  # Interface name recorded for this end ("" if unset)


class NamingHost(ABC):
    """Collaborator callbacks the host application provides.

    Implementations must present a consistent snapshot for the duration of
    a single allocation call.
    """

    @abstractmethod
    def interface_pattern(self, entity_id: str) -> str | None:
        """Return the naming pattern text for a node.

        None (or malformed text) selects the default pattern.
        """
        ...

    @abstractmethod
    def connections(self, entity_id: str) -> Iterable[Attachment]:
        """Enumerate every link end the node occupies.

        A self-link yields two attachments, one per role.
        """
        ...

    @abstractmethod
    def alias_group(self, entity_id: str) -> set[str]:
        """Return the ids sharing one naming pool with the node.

        May be just ``{entity_id}``.
        """
        ...

    @abstractmethod
    def set_endpoint(self, link_id: str, role: EndpointRole, name: str) -> None:
        """Record a new interface name on one end of a link."""
        ...

    def is_special(self, entity_id: str) -> bool:
        """Whether the node is a bridge/host/dummy style endpoint."""
        return is_special_node_id(entity_id)
