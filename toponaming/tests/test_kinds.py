"""Tests for the kind naming catalog and pattern resolution."""
from __future__ import annotations

import logging

import pytest

from toponaming.config import settings
from toponaming.kinds import (
    KIND_CATALOG,
    get_kind_naming,
    is_adapter_kind,
    is_special_node_id,
    resolve_interface_pattern,
)
from toponaming.patterns import parse_pattern


class TestKindCatalog:
    """Every catalog entry must be usable."""

    @pytest.mark.parametrize("entry", KIND_CATALOG, ids=lambda e: e.kind)
    def test_pattern_parses(self, entry):
        assert parse_pattern(entry.interface_pattern).fallback is False

    def test_kinds_and_aliases_unique(self):
        names = []
        for entry in KIND_CATALOG:
            names.append(entry.kind)
            names.extend(entry.aliases)
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("kind,canonical", [
        ("nokia_srlinux", "nokia_srlinux"),
        ("srl", "nokia_srlinux"),
        ("SRL", "nokia_srlinux"),
        ("ceos", "arista_ceos"),
        ("xrd", "cisco_xrd"),
    ])
    def test_lookup(self, kind, canonical):
        assert get_kind_naming(kind).kind == canonical

    @pytest.mark.parametrize("kind", [None, "", "bridge", "unknown_kind"])
    def test_lookup_miss(self, kind):
        assert get_kind_naming(kind) is None


class TestResolveInterfacePattern:
    """Tests for resolve_interface_pattern() lookup chain."""

    @pytest.mark.parametrize("kind,expected", [
        ("nokia_srlinux", "e1-{n}"),
        ("srl", "e1-{n}"),
        ("juniper_vjunosrouter", "ge-0/0/{n:0}"),
        ("cisco_c8000v", "Gi{n:2}"),
        ("linux", "eth{n}"),
        ("bridge", "eth{n}"),
        (None, "eth{n}"),
    ])
    def test_catalog_and_default(self, kind, expected):
        assert resolve_interface_pattern(kind) == expected

    def test_override_wins(self):
        assert resolve_interface_pattern("nokia_srlinux", "ethernet-1/{n}") == "ethernet-1/{n}"

    def test_unusable_override_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="toponaming.kinds"):
            assert resolve_interface_pattern("nokia_srlinux", "mgmt") == "e1-{n}"
        assert "mgmt" in caplog.text

    def test_settings_override_by_kind(self, monkeypatch):
        monkeypatch.setattr(settings, "interface_patterns", {"nokia_srlinux": "ethernet-1/{n}"})
        assert resolve_interface_pattern("nokia_srlinux") == "ethernet-1/{n}"
        # Aliases resolve through the canonical kind
        assert resolve_interface_pattern("srl") == "ethernet-1/{n}"

    def test_settings_override_for_uncataloged_kind(self, monkeypatch):
        monkeypatch.setattr(settings, "interface_patterns", {"frr": "veth{n:0}"})
        assert resolve_interface_pattern("frr") == "veth{n:0}"

    def test_node_override_beats_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "interface_patterns", {"linux": "ens{n}"})
        assert resolve_interface_pattern("linux", "eth{n:0}") == "eth{n:0}"

    def test_default_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "default_interface_pattern", "if{n:0}")
        assert resolve_interface_pattern("unknown_kind") == "if{n:0}"
        assert resolve_interface_pattern("nokia_srlinux") == "e1-{n}"


class TestSpecialNodes:
    """Tests for special node detection."""

    @pytest.mark.parametrize("node_id,expected", [
        ("host:eth1", True),
        ("mgmt-net:net0", True),
        ("macvlan:enp0s3", True),
        ("vxlan:10.0.0.1/100", True),
        ("vxlan-stitch:a", True),
        ("dummy", True),
        ("dummy4", True),
        ("r1", False),
        ("bridge1", False),
        ("", False),
    ])
    def test_is_special_node_id(self, node_id, expected):
        assert is_special_node_id(node_id) is expected

    def test_adapter_kinds(self):
        assert is_adapter_kind("host")
        assert is_adapter_kind("macvlan")
        assert not is_adapter_kind("vxlan")
