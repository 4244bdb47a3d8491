"""
VO Foundry Views Kernel — the pure view engine.

Four components:
  index     — raw catalog → denormalized AssetRow list (with shell rows)
  filters   — (row, filter) → bool, rule sets or legacy predicates
  grouping  — rows × levels → tree of GroupNode / LeafNode
  views     — preset + custom view registry, build_view_tree orchestration
"""

from engine.kernel.dimensions import DIMENSIONS, Level, get_dimension
from engine.kernel.filters import FilterRule, Predicate, RuleSet, apply_filters, coerce_filter
from engine.kernel.grouping import GroupNode, LeafNode, find_node, group_by_levels, rollup_status
from engine.kernel.index import audit_catalog, build_asset_index
from engine.kernel.views import (
    PRESET_VIEWS,
    View,
    ViewTreeResult,
    build_view_tree,
    get_all_views,
    get_sticky_name,
    get_view_by_id,
    resolve_view_tree,
)

__all__ = [
    "DIMENSIONS",
    "Level",
    "get_dimension",
    "FilterRule",
    "Predicate",
    "RuleSet",
    "apply_filters",
    "coerce_filter",
    "GroupNode",
    "LeafNode",
    "find_node",
    "group_by_levels",
    "rollup_status",
    "audit_catalog",
    "build_asset_index",
    "PRESET_VIEWS",
    "View",
    "ViewTreeResult",
    "build_view_tree",
    "get_all_views",
    "get_sticky_name",
    "get_view_by_id",
    "resolve_view_tree",
]
