"""
VO Foundry Views Kernel — View Registry

Resolves a view id to its levels and filter, then runs the pipeline:

  catalog → build_asset_index → filter_rows → group_by_levels → tree

Presets are a read-only table; user-authored views are passed in per call
and shadow presets with the same id. Nothing here mutates shared state, so
any number of tree panels may build trees concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from engine.kernel.dimensions import DIMENSION_FIELDS, Level, get_dimension
from engine.kernel.filters import Filter, Predicate, RuleSet, coerce_filter, filter_rows, validate_filter
from engine.kernel.grouping import Node, group_by_levels
from engine.kernel.index import build_asset_index
from engine.kernel.types import Warning

logger = logging.getLogger(__name__)

VIEW_CATEGORIES: frozenset[str] = frozenset({"view", "summary"})

# Keys of the catalog mapping passed to build_view_tree
CATALOG_KEYS: tuple[str, ...] = ("actors", "bins", "media", "takes", "scenes")

# Record keys used for joins and lookups; values must be strings or integers
SCALAR_KEYS: tuple[str, ...] = (
    "bin_id",
    "owner_id",
    "owner_type",
    "scene_id",
    "media_id",
    "content_id",
    "media_type",
    "status",
)


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class View:
    id: str
    levels: tuple[Level, ...]
    name: str = ""
    category: str = "view"
    filter: Filter | None = None
    description: str = ""

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> View:
        """
        Build a view from its persisted shape:
          {id, name, category, levels: [{field, displayField, ...}], filter: [{field, op, value}]}
        Raises ValueError when the id, levels or filter cannot be interpreted.
        """
        view_id = d.get("id")
        if not isinstance(view_id, str) or not view_id:
            raise ValueError("view requires a non-empty string 'id'")
        raw_levels = d.get("levels") or ()
        if not isinstance(raw_levels, (list, tuple)):
            raise ValueError(f"View {view_id}: levels must be a list")
        for i, lv in enumerate(raw_levels):
            problem = _level_problem(lv)
            if problem:
                raise ValueError(f"View {view_id}: levels[{i}] {problem}")
        return cls(
            id=view_id,
            name=d.get("name") or "",
            category=d.get("category") or "view",
            levels=tuple(lv if isinstance(lv, Level) else Level.from_dict(lv) for lv in raw_levels),
            filter=coerce_filter(d.get("filter")),
            description=d.get("description") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "levels": [lv.to_dict() for lv in self.levels],
        }
        if isinstance(self.filter, RuleSet):
            d["filter"] = [r.to_dict() for r in self.filter.rules]
        if self.description:
            d["description"] = self.description
        return d


@dataclass
class ViewTreeResult:
    """
    Outcome of building one view's tree.
    found=False means the view id did not resolve; nodes is then empty.
    """

    view_id: str
    view: View | None
    nodes: list[Node] = field(default_factory=list)
    warnings: list[Warning] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.view is not None


def _level_problem(lv: Any) -> str | None:
    if isinstance(lv, Level):
        return None
    if not isinstance(lv, Mapping):
        return "must be an object"
    for key in ("field", "displayField", "display_field", "icon"):
        value = lv.get(key)
        if value is not None and not isinstance(value, str):
            return f"'{key}' must be a string"
    label_map = lv.get("labelMap", lv.get("label_map"))
    if label_map is not None:
        if not isinstance(label_map, Mapping):
            return "'labelMap' must be an object"
        if not all(isinstance(v, str) for v in label_map.values()):
            return "'labelMap' values must be strings"
    return None


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


def _preset(
    view_id: str,
    fields: Sequence[str],
    *,
    name: str = "",
    category: str = "view",
    description: str = "",
    rules: Sequence[Mapping[str, Any]] | None = None,
) -> View:
    levels = tuple(Level.for_dimension(f) for f in fields)
    return View(
        id=view_id,
        name=name,
        category=category,
        description=description,
        levels=levels,
        filter=coerce_filter(list(rules)) if rules else None,
    )


PRESET_VIEWS: Mapping[str, View] = MappingProxyType(
    {
        v.id: v
        for v in (
            _preset(
                "by-actor",
                ("actor_id", "bin_id", "media_id"),
                description="Actors, their bins, then media",
            ),
            _preset(
                "by-scene",
                ("scene_id", "actor_id", "bin_id", "media_id"),
                description="Scenes, the actors in them, then bins and media",
            ),
            _preset(
                "by-owner",
                ("owner_type", "owner_id", "bin_id", "media_id"),
                description="Global, actor and scene owners side by side",
            ),
            _preset(
                "by-type",
                ("media_type", "owner_id", "bin_id", "media_id"),
                description="Group by media type (dialogue, music, sfx...)",
            ),
            _preset(
                "by-status",
                ("status", "actor_id", "media_id"),
                description="Group by approval status",
            ),
            _preset(
                "unapproved",
                ("status", "actor_id", "media_id"),
                name="unapproved",
                category="summary",
                description="Everything not yet approved",
                rules=(
                    {"field": "status", "op": "ne", "value": "approved"},
                    {"field": "status", "op": "ne", "value": "__empty__"},
                ),
            ),
            _preset(
                "missing-takes",
                ("owner_id", "media_id"),
                name="missing takes",
                category="summary",
                description="Media that has never been generated",
                rules=({"field": "status", "op": "eq", "value": "__none__"},),
            ),
            _preset(
                "flat",
                ("media_id",),
                name="all media",
                description="Flat list of all media",
            ),
        )
    }
)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def _coerce_views(
    custom_views: Iterable[View | Mapping[str, Any]] | None,
    warnings: list[Warning] | None = None,
) -> list[View]:
    """
    Custom views as View objects. A view that cannot be interpreted is
    skipped (and reported in warnings when given) so it never hides the rest.
    """
    if not custom_views:
        return []
    views: list[View] = []
    for i, raw in enumerate(custom_views):
        if isinstance(raw, View):
            views.append(raw)
            continue
        try:
            if not isinstance(raw, Mapping):
                raise ValueError(f"custom view must be an object, got {type(raw).__name__}")
            views.append(View.from_dict(raw))
        except ValueError as e:
            logger.warning("views: skipping custom view %d: %s", i, e)
            if warnings is not None:
                details = {"index": i}
                if isinstance(raw, Mapping) and isinstance(raw.get("id"), str):
                    details["view_id"] = raw["id"]
                warnings.append(Warning(code="invalid_view", message=str(e), details=details))
    return views


def get_view_by_id(
    view_id: str,
    custom_views: Iterable[View | Mapping[str, Any]] | None = None,
    warnings: list[Warning] | None = None,
) -> View | None:
    """User views take precedence over presets with the same id."""
    for view in _coerce_views(custom_views, warnings):
        if view.id == view_id:
            return view
    return PRESET_VIEWS.get(view_id)


def get_all_views(custom_views: Iterable[View | Mapping[str, Any]] | None = None) -> list[View]:
    """Custom views first, then every preset not shadowed by one."""
    combined = _coerce_views(custom_views)
    seen = {v.id for v in combined}
    combined.extend(p for p in PRESET_VIEWS.values() if p.id not in seen)
    return combined


def get_sticky_name(view: View) -> str:
    """Display name: the view's own name, else "by <first dimension>"."""
    if view.name and view.name.strip():
        return view.name
    if not view.levels:
        return "new view"
    first = view.levels[0].field
    dim = get_dimension(first)
    return f"by {dim.name.lower() if dim else first}"


def validate_view(view: View) -> list[str]:
    """
    Structural validation of a view.
    Returns a list of error strings. Empty list = valid.
    """
    errors: list[str] = []
    if not view.id:
        errors.append("view requires 'id'")
    if view.category not in VIEW_CATEGORIES:
        errors.append(f"Unknown view category: {view.category}")
    errors.extend(_level_errors(view))
    if not isinstance(view.filter, Predicate):
        errors.extend(validate_filter(view.filter))
    return errors


def _level_errors(view: View) -> list[str]:
    return [
        f"levels[{i}] has unknown field: {level.field}"
        for i, level in enumerate(view.levels)
        if level.field not in DIMENSION_FIELDS
    ]


# ---------------------------------------------------------------------------
# Tree building
# ---------------------------------------------------------------------------


def _record_problem(record: Any) -> str | None:
    """Why a catalog record cannot be indexed, or None when it can."""
    if not isinstance(record, Mapping):
        return f"must be an object, got {type(record).__name__}"
    record_id = record.get("id")
    if isinstance(record_id, bool) or not isinstance(record_id, (str, int)) or record_id == "":
        return "requires a string or integer 'id'"
    for key in SCALAR_KEYS:
        ref = record.get(key)
        if ref is not None and (isinstance(ref, bool) or not isinstance(ref, (str, int))):
            return f"'{key}' must be a string or integer"
    return None


def _collect_catalog(data: Any, warnings: list[Warning]) -> dict[str, list[Any]] | None:
    """
    Catalog collections ready for build_asset_index, or None when the
    catalog cannot be used at all. Records that cannot be indexed are
    dropped with a warning; the rest still build.
    """
    if not isinstance(data, Mapping):
        warnings.append(
            Warning(
                code="invalid_collection",
                message=f"Catalog must be an object, got {type(data).__name__}",
                details={"collection": None},
            )
        )
        return None

    collections: dict[str, list[Any]] = {}
    for key in CATALOG_KEYS:
        value = data.get(key)
        if value is None:
            value = []
        if not isinstance(value, (list, tuple)):
            warnings.append(
                Warning(
                    code="invalid_collection",
                    message=f"Catalog '{key}' must be a list, got {type(value).__name__}",
                    details={"collection": key},
                )
            )
            continue
        kept = []
        for i, record in enumerate(value):
            problem = _record_problem(record)
            if problem is None:
                kept.append(record)
                continue
            warnings.append(
                Warning(
                    code="invalid_collection",
                    message=f"Catalog '{key}'[{i}] {problem}; skipped",
                    details={"collection": key, "index": i},
                )
            )
        collections[key] = kept
    if len(collections) < len(CATALOG_KEYS):
        return None
    return collections


def resolve_view_tree(
    view_id: str,
    data: Mapping[str, Any],
    custom_views: Iterable[View | Mapping[str, Any]] | None = None,
) -> ViewTreeResult:
    """
    Resolve a view and build its tree. Never raises for bad input.

    Problems come back as warnings:
      view_not_found      the id matched no custom view or preset
      invalid_view        a custom view could not be read (it is skipped), or
                          the resolved view names an unknown dimension
      invalid_collection  the catalog or one of its collections is not usable
                          (empty tree), or a record lacks an id (record skipped)
      filter_error        a legacy predicate raised (empty tree)

    Malformed filter rules do not empty the tree; they are evaluated
    leniently and reported as lenient_filter warnings.
    """
    warnings: list[Warning] = []
    view = get_view_by_id(view_id, custom_views, warnings)
    if view is None:
        logger.warning("views: view not found: %s", view_id)
        warnings.append(Warning(code="view_not_found", message=f"View not found: {view_id}"))
        return ViewTreeResult(view_id=view_id, view=None, warnings=warnings)

    result = ViewTreeResult(view_id=view_id, view=view, warnings=warnings)

    errors = _level_errors(view)
    if errors:
        logger.warning("views: invalid view %s: %s", view_id, "; ".join(errors))
        result.warnings.append(Warning(code="invalid_view", message="; ".join(errors), details={"errors": errors}))
        return result

    if not isinstance(view.filter, Predicate):
        for problem in validate_filter(view.filter):
            # The evaluator tolerates these; report without emptying the tree
            result.warnings.append(Warning(code="lenient_filter", message=problem))

    collections = _collect_catalog(data, result.warnings)
    if collections is None:
        return result

    rows = build_asset_index(
        collections["actors"],
        collections["bins"],
        collections["media"],
        collections["takes"],
        collections["scenes"],
    )

    try:
        rows = filter_rows(rows, view.filter)
    except Exception as e:
        logger.exception("views: filter for %s raised", view_id)
        result.warnings.append(Warning(code="filter_error", message=f"Filter raised: {e}"))
        return result

    result.nodes = group_by_levels(rows, view.levels)
    return result


def build_view_tree(
    view_id: str,
    data: Mapping[str, Any],
    custom_views: Iterable[View | Mapping[str, Any]] | None = None,
) -> list[Node]:
    """
    Tree for a view id, or [] when the view does not resolve.
    Use resolve_view_tree to tell "not found" apart from "no data".
    """
    return resolve_view_tree(view_id, data, custom_views).nodes
