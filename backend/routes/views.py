"""View routes — dimension catalog, view CRUD, tree building, catalog audit."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from backend.config import settings
from backend.models.catalog import Catalog
from backend.models.view import (
    AuditResponse,
    SaveViewRequest,
    TreeRequest,
    TreeResponse,
    ViewResponse,
    WarningModel,
)
from backend.repos.view_repo import ViewRepo, get_view_repo
from engine.kernel.dimensions import DIMENSIONS
from engine.kernel.index import audit_catalog
from engine.kernel.views import PRESET_VIEWS, View, get_all_views, get_view_by_id, resolve_view_tree, validate_view

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["views"])


def _is_preset(view_id: str, custom_views: list[dict[str, Any]]) -> bool:
    return view_id in PRESET_VIEWS and all(v["id"] != view_id for v in custom_views)


@router.get("/dimensions", status_code=200)
async def list_dimensions() -> list[dict[str, Any]]:
    """Every field a view level may group by."""
    return [d.to_dict() for d in DIMENSIONS]


@router.get("/views", status_code=200)
async def list_views(repo: ViewRepo = Depends(get_view_repo)) -> list[ViewResponse]:
    """Stored custom views first, then presets they do not shadow."""
    custom = await repo.list_all()
    return [ViewResponse.from_view(v, _is_preset(v.id, custom)) for v in get_all_views(custom)]


@router.get("/views/{view_id}", status_code=200)
async def get_view(view_id: str, repo: ViewRepo = Depends(get_view_repo)) -> ViewResponse:
    """Get a single view by id."""
    custom = await repo.list_all()
    view = get_view_by_id(view_id, custom)
    if view is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="View not found.")
    return ViewResponse.from_view(view, _is_preset(view_id, custom))


@router.put("/views/{view_id}", status_code=200)
async def save_view(
    view_id: str,
    req: SaveViewRequest,
    repo: ViewRepo = Depends(get_view_repo),
) -> ViewResponse:
    """
    Create or replace a custom view.

    Saving under a preset's id shadows the preset until the custom view is
    deleted.
    """
    try:
        view = View.from_dict(req.to_view_dict(view_id))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    errors = validate_view(view)
    if errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail={"errors": errors})

    await repo.put(view.to_dict())
    return ViewResponse.from_view(view, preset=False)


@router.delete("/views/{view_id}", status_code=200)
async def delete_view(view_id: str, repo: ViewRepo = Depends(get_view_repo)):
    """Delete a custom view. Presets cannot be deleted."""
    deleted = await repo.delete(view_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Custom view not found.")
    return {"message": "View deleted."}


@router.post("/views/{view_id}/tree", status_code=200)
async def build_tree(
    view_id: str,
    req: TreeRequest,
    repo: ViewRepo = Depends(get_view_repo),
) -> TreeResponse:
    """
    Build the tree for one view over the posted catalog.

    Inline custom_views shadow stored views, which shadow presets. Problems
    with the view or catalog come back as warnings next to whatever part of
    the tree could be built.
    """
    if req.size > settings.MAX_TREE_ROWS:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Catalog has {req.size} records; limit is {settings.MAX_TREE_ROWS}.",
        )

    stored = await repo.list_all()
    custom = [v.to_view_dict() for v in req.custom_views] + stored

    result = resolve_view_tree(view_id, req.to_kernel(), custom)

    if not result.found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="View not found.")

    logger.info(
        "views: built %s over %d records: %d top-level nodes, %d warnings",
        view_id,
        req.size,
        len(result.nodes),
        len(result.warnings),
    )
    return TreeResponse.from_result(result, _is_preset(view_id, custom))


@router.post("/catalog/audit", status_code=200)
async def audit(req: Catalog) -> AuditResponse:
    """Referential and bin-policy problems in a catalog."""
    data = req.to_kernel()
    warnings = audit_catalog(data["actors"], data["bins"], data["media"], data["takes"], data["scenes"])
    return AuditResponse(warnings=[WarningModel.from_warning(w) for w in warnings])
