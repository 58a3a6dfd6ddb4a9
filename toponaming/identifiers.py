"""Unique node identifiers for duplicated and newly created nodes.

Node ids are unique across the whole topology, unlike interface names which
only need to be unique per node. How a fresh id is derived depends on what
the base id looks like:

    dummy, dummy3          → dummy1, dummy4, ...
    host:eth3              → host:eth4         (adapter label incremented)
    vxlan:remote           → vxlan:remote1     (other colon-qualified ids)
    spine (group)          → spine1:1, spine2:1, ...
    router2                → router3
    srl                    → srl1, srl2, ...

Public API:
    unique_id(base_name, used_ids, category)
    strip_trailing_digits(value)
    next_template_id(used_ids)
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Collection, Optional

from toponaming.config import settings
from toponaming.kinds import is_adapter_kind, is_special_node_id

# Groups are addressed as "<name>:<level>"; copies always land on level 1
GROUP_LEVEL_SUFFIX = ":1"

_DUMMY_RE = re.compile(r"dummy([0-9]+)?")
_NUMBER_RE = re.compile(r"[0-9]+")


class EntityCategory(str, Enum):
    """How a node's id is suffixed when it is duplicated."""
    PLAIN = "plain"
    GROUP = "group"
    EXTERNAL = "external"  # colon-qualified special endpoints
    ADAPTER = "adapter"  # <kind>:<host adapter>, e.g. host:eth1, macvlan:enp0s3


def strip_trailing_digits(value: str) -> tuple[str, Optional[int]]:
    """Split ``value`` into its non-numeric head and trailing number.

    >>> strip_trailing_digits("router12")
    ('router', 12)
    >>> strip_trailing_digits("srl")
    ('srl', None)
    """
    index = len(value)
    while index > 0 and value[index - 1] in "0123456789":
        index -= 1
    digits = value[index:]
    return value[:index], int(digits) if digits else None


def _probe(render: Callable[[int], str], used_ids: Collection[str], start: int) -> str:
    counter = start
    while render(counter) in used_ids:
        counter += 1
    return render(counter)


def _unique_dummy(base_name: str, used_ids: Collection[str]) -> str:
    _, number = strip_trailing_digits(base_name)
    return _probe(lambda n: f"dummy{n}", used_ids, 1 if number is None else number)


def _unique_adapter(kind: str, label: str, used_ids: Collection[str]) -> str:
    head, number = strip_trailing_digits(label)
    if number is None:
        return _probe(lambda n: f"{kind}:{label}{n}", used_ids, 1)
    return _probe(lambda n: f"{kind}:{head}{n}", used_ids, number)


def _unique_external(base_name: str, used_ids: Collection[str]) -> str:
    head, _ = strip_trailing_digits(base_name)
    return _probe(lambda n: f"{head}{n}", used_ids, 1)


def _unique_group(base_name: str, used_ids: Collection[str]) -> str:
    head, number = strip_trailing_digits(base_name)
    return _probe(lambda n: f"{head}{n}{GROUP_LEVEL_SUFFIX}", used_ids, 1 if number is None else number)


def _unique_plain(base_name: str, used_ids: Collection[str]) -> str:
    head, number = strip_trailing_digits(base_name)
    if number is None:
        return _probe(lambda n: f"{base_name}{n}", used_ids, 1)
    return _probe(lambda n: f"{head}{n}", used_ids, number)


def unique_id(
    base_name: str,
    used_ids: Collection[str],
    category: EntityCategory = EntityCategory.PLAIN,
) -> str:
    """Derive an id from ``base_name`` that is not in ``used_ids``.

    Rules are tried in order: dummy shape, adapter ids, other colon-qualified
    ids, groups, plain ids. A free numbered base name (``router7``,
    ``host:eth3``) is returned as-is; unnumbered names always gain a suffix.

    Args:
        base_name: Id or name of the node being copied
        used_ids: Every id already taken
        category: EntityCategory of the node

    Returns:
        A fresh id
    """
    if _DUMMY_RE.fullmatch(base_name):
        return _unique_dummy(base_name, used_ids)

    if ":" in base_name:
        kind, label = base_name.split(":", 1)
        if category == EntityCategory.ADAPTER or is_adapter_kind(kind):
            return _unique_adapter(kind, label, used_ids)
        return _unique_external(base_name, used_ids)

    if category == EntityCategory.GROUP:
        return _unique_group(base_name, used_ids)

    return _unique_plain(base_name, used_ids)


def classify_node(node_id: str, is_group: bool = False) -> EntityCategory:
    """Pick the EntityCategory for an existing node id."""
    if is_group:
        return EntityCategory.GROUP
    if is_special_node_id(node_id) and ":" in node_id:
        kind = node_id.split(":", 1)[0]
        return EntityCategory.ADAPTER if is_adapter_kind(kind) else EntityCategory.EXTERNAL
    return EntityCategory.PLAIN


def is_template_id(node_id: str) -> bool:
    """Whether ``node_id`` is an editor placeholder id (nodeId-N)."""
    return node_id.startswith(settings.template_id_prefix)


def next_template_id(used_ids: Collection[str]) -> str:
    """Return ``nodeId-<max+1>`` over the placeholder ids in use."""
    prefix = settings.template_id_prefix
    highest = 0
    for node_id in used_ids:
        if not node_id.startswith(prefix):
            continue
        suffix = node_id[len(prefix):]
        if _NUMBER_RE.fullmatch(suffix):
            highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1}"
