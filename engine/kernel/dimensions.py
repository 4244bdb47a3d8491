"""
VO Foundry Views Kernel — Dimensions and Levels

A dimension is one addressable grouping field of an AssetRow, with the
display metadata pickers and labels need. A view's level is a dimension
placed at one depth of the tree, optionally overriding that metadata.

DIMENSIONS is a fixed, read-only catalog; levels naming any other field are
rejected by validate_view before they reach the grouping engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

_EMPTY_MAP: Mapping[str, str] = MappingProxyType({})


def _frozen_map(d: Mapping[str, str] | None) -> Mapping[str, str]:
    if not d:
        return _EMPTY_MAP
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class Dimension:
    field: str
    name: str
    icon: str
    display_field: str | None = None
    label_map: Mapping[str, str] = field(default_factory=lambda: _EMPTY_MAP)
    is_terminal: bool = False

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.field, "name": self.name, "icon": self.icon}
        if self.display_field:
            d["displayField"] = self.display_field
        if self.label_map:
            d["labelMap"] = dict(self.label_map)
        if self.is_terminal:
            d["isTerminal"] = True
        return d


DIMENSIONS: tuple[Dimension, ...] = (
    Dimension(
        field="owner_type",
        name="Owner Type",
        icon="owner",
        label_map=_frozen_map({"global": "Global", "actor": "Actors", "scene": "Scenes"}),
    ),
    Dimension(field="owner_id", name="Owner", icon="person", display_field="owner_name"),
    Dimension(field="actor_id", name="Actor", icon="person", display_field="actor_name"),
    Dimension(field="scene_id", name="Scene", icon="folder", display_field="scene_name"),
    Dimension(field="bin_id", name="Bin", icon="folder", display_field="bin_name"),
    Dimension(
        field="media_type",
        name="Type",
        icon="type",
        label_map=_frozen_map(
            {
                "dialogue": "Dialogue",
                "music": "Music",
                "sfx": "SFX",
                "image": "Image",
                "video": "Video",
                "script": "Script",
            }
        ),
    ),
    Dimension(
        field="status",
        name="Status",
        icon="status",
        label_map=_frozen_map(
            {
                "approved": "Approved",
                "new": "New",
                "rejected": "Rejected",
                "hidden": "Hidden",
                "__none__": "No Takes",
                "__empty__": "Empty",
            }
        ),
    ),
    Dimension(field="media_id", name="Media", icon="content", display_field="media_name", is_terminal=True),
)

DIMENSIONS_BY_FIELD: Mapping[str, Dimension] = MappingProxyType({d.field: d for d in DIMENSIONS})

DIMENSION_FIELDS: frozenset[str] = frozenset(DIMENSIONS_BY_FIELD)


def get_dimension(field_name: str) -> Dimension | None:
    return DIMENSIONS_BY_FIELD.get(field_name)


# ---------------------------------------------------------------------------
# Levels
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Level:
    """One grouping step of a view. Unset metadata falls back to the dimension's."""

    field: str
    display_field: str | None = None
    icon: str | None = None
    is_terminal: bool = False
    label_map: Mapping[str, str] = field(default_factory=lambda: _EMPTY_MAP)

    @property
    def terminal(self) -> bool:
        """Terminal if either the level or its dimension says so."""
        if self.is_terminal:
            return True
        dim = get_dimension(self.field)
        return dim is not None and dim.is_terminal

    @property
    def resolved_display_field(self) -> str | None:
        dim = get_dimension(self.field)
        return self.display_field or (dim.display_field if dim else None)

    @property
    def resolved_icon(self) -> str | None:
        dim = get_dimension(self.field)
        return self.icon or (dim.icon if dim else None)

    @property
    def resolved_label_map(self) -> Mapping[str, str]:
        """Dimension labels with this level's overrides on top."""
        dim = get_dimension(self.field)
        if dim is None or not dim.label_map:
            return self.label_map
        if not self.label_map:
            return dim.label_map
        return {**dim.label_map, **self.label_map}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Level:
        """Accepts both the persisted camelCase keys and snake_case."""
        return cls(
            field=d.get("field", ""),
            display_field=d.get("displayField", d.get("display_field")),
            icon=d.get("icon"),
            is_terminal=bool(d.get("isTerminal", d.get("is_terminal", False))),
            label_map=_frozen_map(d.get("labelMap", d.get("label_map"))),
        )

    @classmethod
    def for_dimension(cls, field_name: str, **overrides: Any) -> Level:
        """A level carrying its dimension's default metadata."""
        dim = DIMENSIONS_BY_FIELD[field_name]
        params: dict[str, Any] = {
            "display_field": dim.display_field,
            "icon": dim.icon,
            "label_map": dim.label_map,
        }
        params.update(overrides)
        if "label_map" in overrides:
            params["label_map"] = _frozen_map(overrides["label_map"])
        return cls(field=field_name, **params)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"field": self.field}
        if self.display_field:
            d["displayField"] = self.display_field
        if self.icon:
            d["icon"] = self.icon
        if self.is_terminal:
            d["isTerminal"] = True
        if self.label_map:
            d["labelMap"] = dict(self.label_map)
        return d
