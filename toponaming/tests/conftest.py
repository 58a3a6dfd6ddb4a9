"""Shared pytest fixtures for naming engine tests."""
# ruff: noqa: E402  -- sys.path setup must run before package imports
from __future__ import annotations

from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from toponaming.config import Settings, settings
from toponaming.schemas import GraphLink, GraphNode, TopologyGraph
from toponaming.topology import TopologyIndex


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    """Reset the settings singleton to field defaults.

    Defaults come from the field declarations, not a fresh Settings(), so
    TOPONAMING_* variables in the environment don't leak into tests.
    """
    for name, field in Settings.model_fields.items():
        monkeypatch.setattr(settings, name, field.get_default(call_default_factory=True))
    yield settings


@pytest.fixture
def make_topology():
    """Build a TopologyIndex from compact node/link descriptions.

    Nodes are GraphNode kwargs (or a bare id string); links are
    (source, source_endpoint, target, target_endpoint) tuples.
    """

    def _make(nodes, links=()):
        graph = TopologyGraph()
        for node in nodes:
            if isinstance(node, str):
                node = {"id": node}
            graph.nodes.append(GraphNode(**node))
        for source, source_ep, target, target_ep in links:
            graph.links.append(
                GraphLink(
                    id=f"{source}:{source_ep}-{target}:{target_ep}",
                    source=source,
                    target=target,
                    source_endpoint=source_ep,
                    target_endpoint=target_ep,
                )
            )
        return TopologyIndex(graph)

    return _make
