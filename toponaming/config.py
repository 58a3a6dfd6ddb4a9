"""Naming engine configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Naming settings loaded from environment variables."""

    # Interface naming
    default_interface_pattern: str = "eth{n}"
    # Per-kind pattern overrides, layered over the built-in catalog
    # (e.g. TOPONAMING_INTERFACE_PATTERNS='{"nokia_srlinux": "ethernet-1/{n}"}')
    interface_patterns: dict[str, str] = {}

    # Remap connected endpoints when a node's kind changes
    update_endpoints_on_kind_change: bool = True

    # Node ids that never carry an allocated interface name
    special_node_prefixes: list[str] = [
        "host:",
        "mgmt-net:",
        "macvlan:",
        "vxlan:",
        "vxlan-stitch:",
        "dummy",
    ]

    # Special kinds whose ids are "<kind>:<adapter>" (e.g. host:eth1)
    adapter_kinds: list[str] = ["host", "mgmt-net", "macvlan"]

    # Editor-created nodes before they are named (nodeId-1, nodeId-2, ...)
    template_id_prefix: str = "nodeId-"

    class Config:
        env_prefix = "TOPONAMING_"


settings = Settings()
