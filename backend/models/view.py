"""View models: request bodies and responses for the view registry and tree routes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from backend.models.catalog import Catalog
from engine.kernel.filters import RuleSet
from engine.kernel.types import Warning
from engine.kernel.views import View, ViewTreeResult, get_sticky_name


class LevelModel(BaseModel):
    """One grouping level, in the persisted camelCase shape."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    field: str = Field(min_length=1)
    display_field: str | None = Field(default=None, alias="displayField")
    icon: str | None = None
    is_terminal: bool = Field(default=False, alias="isTerminal")
    label_map: dict[str, str] | None = Field(default=None, alias="labelMap")


class FilterRuleModel(BaseModel):
    model_config = {"extra": "forbid"}

    field: str | None = None
    op: str | None = None
    value: Any = None


class SaveViewRequest(BaseModel):
    """What the client sends to create or replace a custom view."""

    model_config = {"extra": "forbid"}

    name: str = Field(default="", max_length=200)
    category: str = "view"
    description: str = Field(default="", max_length=1000)
    levels: list[LevelModel] = Field(default_factory=list)
    filter: list[FilterRuleModel] | None = None

    def to_view_dict(self, view_id: str) -> dict[str, Any]:
        d = self.model_dump(by_alias=True, exclude_none=True)
        d["id"] = view_id
        return d


class CustomViewModel(SaveViewRequest):
    """A custom view sent inline with a tree request."""

    id: str = Field(min_length=1)

    def to_view_dict(self, view_id: str | None = None) -> dict[str, Any]:
        return super().to_view_dict(view_id or self.id)


class ViewResponse(BaseModel):
    """What the API returns for a view."""

    id: str
    name: str
    sticky_name: str
    category: str
    description: str
    levels: list[dict[str, Any]]
    filter: list[dict[str, Any]] | None = None
    preset: bool

    @classmethod
    def from_view(cls, view: View, preset: bool) -> ViewResponse:
        return cls(
            id=view.id,
            name=view.name,
            sticky_name=get_sticky_name(view),
            category=view.category,
            description=view.description,
            levels=[lv.to_dict() for lv in view.levels],
            filter=[r.to_dict() for r in view.filter.rules] if isinstance(view.filter, RuleSet) else None,
            preset=preset,
        )


class WarningModel(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None

    @classmethod
    def from_warning(cls, warning: Warning) -> WarningModel:
        return cls(code=warning.code, message=warning.message, details=warning.details)


class TreeRequest(Catalog):
    """Catalog plus optional unsaved views that shadow stored ones."""

    model_config = {"extra": "forbid"}

    custom_views: list[CustomViewModel] = Field(default_factory=list)


class TreeResponse(BaseModel):
    """
    A built tree.

    nodes are group / leaf dicts as produced by the grouping engine; warnings
    explain any part of the catalog or view that was skipped.
    """

    view: ViewResponse
    nodes: list[dict[str, Any]]
    warnings: list[WarningModel]

    @classmethod
    def from_result(cls, result: ViewTreeResult, preset: bool) -> TreeResponse:
        return cls(
            view=ViewResponse.from_view(result.view, preset),
            nodes=[n.to_dict() for n in result.nodes],
            warnings=[WarningModel.from_warning(w) for w in result.warnings],
        )


class AuditResponse(BaseModel):
    warnings: list[WarningModel]
