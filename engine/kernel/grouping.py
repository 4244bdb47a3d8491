"""
VO Foundry Views Kernel — Grouping Engine

Pure function: (rows, levels) → list[Node]

Recursively partitions asset rows along a view's levels:

  - each level splits rows by the string value of its field
  - rows with no value for a level are left out of that branch (strict
    hierarchy: no "Unknown X" ghost nodes)
  - a terminal level stops grouping; everything below becomes leaves
  - past the last level, rows become leaf nodes (container shells dropped)

Node ids are path-qualified ("/actor_id:a1/bin_id:b1/leaf:t1") so they are
unique across the whole tree. Deterministic: same rows and levels → same
tree, same ids, same order.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from engine.kernel.asset_types import ASSET_TYPES, get_file_icon
from engine.kernel.dimensions import Level
from engine.kernel.types import (
    OWNER_TYPE_ORDER,
    SHELL_STATUSES,
    STATUS_EMPTY,
    STATUS_GRAY,
    STATUS_GREEN,
    STATUS_ORDER,
    STATUS_RED,
    STATUS_YELLOW,
    TERMINAL_DEPTH,
    UNLISTED_ORDER,
    AssetRow,
    as_text,
    row_value,
)

# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------


@dataclass
class LeafNode:
    id: str
    label: str
    leaf_type: str
    asset_type: str
    file_icon: str
    data: AssetRow
    type: str = "leaf"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "id": self.id,
            "label": self.label,
            "leaf_type": self.leaf_type,
            "asset_type": self.asset_type,
            "file_icon": self.file_icon,
            "data": self.data.to_dict(),
        }


@dataclass
class GroupNode:
    id: str
    field: str
    field_value: str
    label: str
    icon: str | None
    status: str
    count: int | None
    depth: int
    children: list[Node] = field(default_factory=list)
    type: str = "group"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "id": self.id,
            "field": self.field,
            "field_value": self.field_value,
            "label": self.label,
            "icon": self.icon,
            "status": self.status,
            "count": self.count,
            "depth": self.depth,
            "children": [c.to_dict() for c in self.children],
        }


Node = GroupNode | LeafNode


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def group_by_levels(
    rows: Sequence[AssetRow],
    levels: Sequence[Level],
    depth: int = 0,
    parent_path: str = "",
) -> list[Node]:
    """
    Group rows into a tree along the given levels.

    Empty rows → []. Empty levels → every non-shell row as a leaf.
    """
    if not rows:
        return []

    if depth >= len(levels):
        return [_make_leaf(row, parent_path) for row in rows if row.status != STATUS_EMPTY]

    level = levels[depth]
    groups: dict[str, list[AssetRow]] = {}
    for row in rows:
        key = as_text(row_value(row, level.field))
        if key == "":
            continue
        groups.setdefault(key, []).append(row)

    next_depth = TERMINAL_DEPTH if level.terminal else depth + 1

    nodes: list[GroupNode] = []
    for key, children in groups.items():
        node_id = f"{parent_path}/{level.field}:{key}"
        nodes.append(
            GroupNode(
                id=node_id,
                field=level.field,
                field_value=key,
                label=_group_label(level, key, children),
                icon=level.resolved_icon,
                status=rollup_status(r.status for r in children),
                count=sum(1 for r in children if r.take_id) or None,
                depth=depth,
                children=group_by_levels(children, levels, next_depth, node_id),
            )
        )

    nodes.sort(key=_sort_key(level.field))
    return list(nodes)


def rollup_status(statuses: Any) -> str:
    """
    Traffic-light summary of a group's take statuses (shell statuses ignored).

      any rejected, or new without approved  → red
      new and approved                       → yellow
      approved only                          → green
      nothing real                           → gray
    """
    real = {s for s in statuses if s not in SHELL_STATUSES}
    if not real:
        return STATUS_GRAY

    has_approved = "approved" in real
    has_new = "new" in real
    if "rejected" in real or (has_new and not has_approved):
        return STATUS_RED
    if has_new and has_approved:
        return STATUS_YELLOW
    if has_approved:
        return STATUS_GREEN
    return STATUS_GRAY


def iter_nodes(tree: Sequence[Node]) -> Iterator[Node]:
    """Depth-first, pre-order walk of every node."""
    for node in tree:
        yield node
        if isinstance(node, GroupNode):
            yield from iter_nodes(node.children)


def iter_leaves(tree: Sequence[Node]) -> Iterator[LeafNode]:
    for node in iter_nodes(tree):
        if isinstance(node, LeafNode):
            yield node


def find_node(tree: Sequence[Node], node_id: str) -> Node | None:
    """Find a node by its path-qualified id."""
    for node in iter_nodes(tree):
        if node.id == node_id:
            return node
    return None


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _make_leaf(row: AssetRow, parent_path: str) -> LeafNode:
    asset_type = ASSET_TYPES.get(row.asset_type) or ASSET_TYPES["audio"]
    leaf_type = row.leaf_type or asset_type.leaf_type

    filename = as_text(row.filename)
    label = filename
    if not label:
        if row.take_id:
            label = f"{leaf_type} {as_text(row.take_number) or row.id}"
        else:
            label = f"(no {leaf_type}s)"

    return LeafNode(
        id=f"{parent_path}/leaf:{row.id}",
        label=label,
        leaf_type=leaf_type,
        asset_type=asset_type.id,
        file_icon=get_file_icon(filename),
        data=row,
    )


def _group_label(level: Level, key: str, children: list[AssetRow]) -> str:
    mapped = level.resolved_label_map.get(key)
    if mapped:
        return mapped
    display_field = level.resolved_display_field
    if display_field:
        display = row_value(children[0], display_field)
        if display:
            return as_text(display)
    return key


def _sort_key(field_name: str):
    if field_name == "owner_type":
        return lambda n: OWNER_TYPE_ORDER.get(n.field_value, UNLISTED_ORDER)
    if field_name == "status":
        return lambda n: STATUS_ORDER.get(n.field_value, UNLISTED_ORDER)
    # Case-insensitive first so "mira" sits beside "Mira", then exact text for a stable tie-break
    return lambda n: (n.label.casefold(), n.label)
