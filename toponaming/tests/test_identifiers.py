"""Tests for unique node id generation."""
from __future__ import annotations

import pytest

from toponaming.config import settings
from toponaming.identifiers import (
    EntityCategory,
    classify_node,
    is_template_id,
    next_template_id,
    strip_trailing_digits,
    unique_id,
)


class TestStripTrailingDigits:
    """Tests for strip_trailing_digits()."""

    @pytest.mark.parametrize("value,expected", [
        ("router12", ("router", 12)),
        ("srl", ("srl", None)),
        ("", ("", None)),
        ("123", ("", 123)),
        ("eth0/1", ("eth0/", 1)),
        ("dummy0", ("dummy", 0)),
    ])
    def test_split(self, value, expected):
        assert strip_trailing_digits(value) == expected


class TestUniqueId:
    """Tests for unique_id()."""

    @pytest.mark.parametrize("base,used,category,expected", [
        # Plain ids
        ("router2", {"router1", "router2"}, EntityCategory.PLAIN, "router3"),
        ("srl", set(), EntityCategory.PLAIN, "srl1"),
        ("srl", {"srl1", "srl2"}, EntityCategory.PLAIN, "srl3"),
        ("router7", set(), EntityCategory.PLAIN, "router7"),
        ("leaf0", {"leaf0"}, EntityCategory.PLAIN, "leaf1"),
        # Dummies
        ("dummy", {"dummy1"}, EntityCategory.PLAIN, "dummy2"),
        ("dummy", set(), EntityCategory.PLAIN, "dummy1"),
        ("dummy3", {"dummy3"}, EntityCategory.PLAIN, "dummy4"),
        # Host adapters: the adapter label is incremented
        ("host:eth3", {"host:eth3"}, EntityCategory.ADAPTER, "host:eth4"),
        ("host:eth3", {"host:eth3", "host:eth4"}, EntityCategory.PLAIN, "host:eth5"),
        ("macvlan:enp", {"macvlan:enp1"}, EntityCategory.ADAPTER, "macvlan:enp2"),
        ("mgmt-net:net0", {"mgmt-net:net0"}, EntityCategory.ADAPTER, "mgmt-net:net1"),
        # Other colon-qualified ids
        ("vxlan:remote", set(), EntityCategory.EXTERNAL, "vxlan:remote1"),
        ("vxlan:vtep7", {"vxlan:vtep1"}, EntityCategory.EXTERNAL, "vxlan:vtep2"),
        # Groups
        ("spine", set(), EntityCategory.GROUP, "spine1:1"),
        ("spine", {"spine1:1"}, EntityCategory.GROUP, "spine2:1"),
        ("pod3", {"pod3:1"}, EntityCategory.GROUP, "pod4:1"),
    ])
    def test_rules(self, base, used, category, expected):
        assert unique_id(base, used, category) == expected

    def test_adapter_kind_detected_without_category(self):
        assert unique_id("host:eth1", {"host:eth1"}) == "host:eth2"

    @pytest.mark.parametrize("base", ["r1", "srl", "dummy", "host:eth1", "vxlan:x", "spine"])
    def test_never_returns_used_id(self, base):
        used = {base}
        for _ in range(20):
            new_id = unique_id(base, used)
            assert new_id not in used
            used.add(new_id)

    def test_custom_adapter_kinds(self, monkeypatch):
        monkeypatch.setattr(settings, "adapter_kinds", ["bridge"])
        assert unique_id("bridge:br0", {"bridge:br0"}) == "bridge:br1"
        assert unique_id("host:eth3", set()) == "host:eth1"


class TestClassifyNode:
    """Tests for classify_node()."""

    @pytest.mark.parametrize("node_id,is_group,expected", [
        ("r1", False, EntityCategory.PLAIN),
        ("spine:1", True, EntityCategory.GROUP),
        ("host:eth1", False, EntityCategory.ADAPTER),
        ("macvlan:enp0s3", False, EntityCategory.ADAPTER),
        ("vxlan:10.0.0.1/100", False, EntityCategory.EXTERNAL),
        ("vxlan-stitch:a", False, EntityCategory.EXTERNAL),
        ("dummy1", False, EntityCategory.PLAIN),
        ("bridge:br0", False, EntityCategory.PLAIN),
    ])
    def test_classify(self, node_id, is_group, expected):
        assert classify_node(node_id, is_group) == expected


class TestTemplateIds:
    """Tests for nodeId-N placeholder ids."""

    def test_is_template_id(self):
        assert is_template_id("nodeId-3")
        assert not is_template_id("srl1")

    @pytest.mark.parametrize("used,expected", [
        (set(), "nodeId-1"),
        ({"nodeId-1", "nodeId-7", "r1"}, "nodeId-8"),
        ({"nodeId-x", "srl2"}, "nodeId-1"),
        # Only ASCII digits count as a template number
        ({"nodeId-²", "nodeId-٣", "nodeId-2"}, "nodeId-3"),
    ])
    def test_next_template_id(self, used, expected):
        assert next_template_id(used) == expected
