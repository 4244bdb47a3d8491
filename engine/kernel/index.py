"""
VO Foundry Views Kernel — Asset Index Builder

Pure function: (actors, bins, media, takes, scenes) → list[AssetRow]

Joins the raw catalog collections into one flat list of denormalized rows so
the grouping engine can slice by any dimension:

  - one row per take, carrying its media / bin / owner / scene context
  - one "__none__" row per media item with zero takes
  - one "__empty__" row per bin no media item references
  - one "__empty__" row per actor / scene not carried by any other row

Every real container is carried by at least one row, so empty ones still
show up as tree nodes. Row order follows the source collections.
No IO. Inputs are read, never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from engine.kernel.asset_types import (
    get_allowed_media_types,
    get_asset_type_for_media,
    is_media_type_allowed,
)
from engine.kernel.types import (
    DEFAULT_TAKE_STATUS,
    SHELL_ACTOR,
    SHELL_BIN,
    SHELL_MEDIA,
    SHELL_SCENE,
    STATUS_EMPTY,
    STATUS_NONE,
    AssetRow,
    Warning,
)

logger = logging.getLogger(__name__)

GLOBAL_OWNER_NAME = "Global"
UNKNOWN_ACTOR_NAME = "Unknown Actor"
UNKNOWN_SCENE_NAME = "Unknown Scene"
UNKNOWN_BIN_NAME = "Unknown Bin"

Record = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_asset_index(
    actors: Iterable[Record],
    bins: Iterable[Record],
    media: Iterable[Record],
    takes: Iterable[Record],
    scenes: Iterable[Record] = (),
) -> list[AssetRow]:
    """
    Build the denormalized row index for one catalog snapshot.
    Callers guarantee id uniqueness within each collection.
    """
    actor_list = list(actors)
    bin_list = list(bins)
    scene_list = list(scenes)

    actors_by_id = {a["id"]: a for a in actor_list}
    bins_by_id = {b["id"]: b for b in bin_list}
    scenes_by_id = {s["id"]: s for s in scene_list}
    takes_by_media = _takes_by_media_id(takes)

    rows: list[AssetRow] = []
    used_bins: set[str] = set()

    for item in media:
        bin_id = item.get("bin_id")
        if bin_id is not None:
            used_bins.add(bin_id)

        context = _media_context(item, bins_by_id, actors_by_id, scenes_by_id)
        item_takes = takes_by_media.get(item["id"], [])

        if not item_takes:
            rows.append(AssetRow(id=f"media-{item['id']}", status=STATUS_NONE, shell=SHELL_MEDIA, **context))
            continue

        for take in item_takes:
            rows.append(
                AssetRow(
                    id=take["id"],
                    status=take.get("status") or DEFAULT_TAKE_STATUS,
                    take_id=take["id"],
                    take_number=take.get("take_number"),
                    filename=take.get("filename"),
                    path=take.get("path"),
                    duration_sec=take.get("duration_sec"),
                    created_at=take.get("created_at"),
                    status_changed_at=take.get("status_changed_at"),
                    generated_by=take.get("generated_by"),
                    **context,
                )
            )

    for b in bin_list:
        if b["id"] in used_bins:
            continue
        rows.append(_bin_shell(b, actors_by_id, scenes_by_id))

    # Bin shells count: an actor whose only bins are empty is carried by them
    seen_actors = {r.actor_id for r in rows if r.actor_id is not None}
    seen_scenes = {r.scene_id for r in rows if r.scene_id is not None}

    for a in actor_list:
        if a["id"] not in seen_actors:
            rows.append(_actor_shell(a))
    for s in scene_list:
        if s["id"] not in seen_scenes:
            rows.append(_scene_shell(s))

    return rows


def audit_catalog(
    actors: Iterable[Record],
    bins: Iterable[Record],
    media: Iterable[Record],
    takes: Iterable[Record],
    scenes: Iterable[Record] = (),
) -> list[Warning]:
    """
    Report referential and bin-policy problems in a catalog.
    Never raises; an empty list means the catalog is consistent.
    """
    warnings: list[Warning] = []
    bins_by_id = {b["id"]: b for b in bins}
    media_list = list(media)
    media_ids = {m["id"] for m in media_list}

    for item in media_list:
        bin_id = item.get("bin_id")
        if bin_id is None:
            continue
        b = bins_by_id.get(bin_id)
        if b is None:
            warnings.append(
                Warning(
                    code="unknown_bin",
                    message=f"Media {item['id']} references unknown bin {bin_id}",
                    details={"media_id": item["id"], "bin_id": bin_id},
                )
            )
            continue
        if not is_media_type_allowed(b.get("media_type"), item.get("media_type")):
            warnings.append(
                Warning(
                    code="media_type_not_allowed",
                    message=(
                        f"Media {item['id']} has type {item.get('media_type')!r}; "
                        f"bin {bin_id} ({b.get('media_type')}) allows {', '.join(get_allowed_media_types(b.get('media_type')))}"
                    ),
                    details={"media_id": item["id"], "bin_id": bin_id},
                )
            )

    for take in takes:
        media_id = _take_media_id(take)
        if media_id not in media_ids:
            warnings.append(
                Warning(
                    code="orphan_take",
                    message=f"Take {take['id']} references unknown media {media_id}",
                    details={"take_id": take["id"], "media_id": media_id},
                )
            )

    if warnings:
        logger.info("audit_catalog: %d issue(s) found", len(warnings))
    return warnings


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _take_media_id(take: Record) -> Any:
    """Takes written before the media rename carry content_id instead."""
    media_id = take.get("media_id")
    if media_id is None:
        media_id = take.get("content_id")
    return media_id


def _takes_by_media_id(takes: Iterable[Record]) -> dict[Any, list[Record]]:
    grouped: dict[Any, list[Record]] = {}
    for take in takes:
        grouped.setdefault(_take_media_id(take), []).append(take)
    return grouped


def _actor_name(actor: Record | None) -> str:
    if actor is None:
        return UNKNOWN_ACTOR_NAME
    return actor.get("display_name") or actor.get("name") or UNKNOWN_ACTOR_NAME


def _scene_name(scene: Record | None) -> str:
    if scene is None:
        return UNKNOWN_SCENE_NAME
    return scene.get("name") or UNKNOWN_SCENE_NAME


def _owner_context(
    owner_type: str | None,
    owner_id: Any,
    actors_by_id: dict[Any, Record],
    scenes_by_id: dict[Any, Record],
) -> dict[str, Any]:
    """Owner fields shared by media rows and bin shells."""
    owner_type = owner_type or "global"
    if owner_type == "actor":
        name = _actor_name(actors_by_id.get(owner_id))
        return {
            "owner_type": owner_type,
            "owner_id": owner_id,
            "owner_name": name,
            "actor_id": owner_id,
            "actor_name": name,
        }
    if owner_type == "scene":
        name = _scene_name(scenes_by_id.get(owner_id))
        return {"owner_type": owner_type, "owner_id": owner_id, "owner_name": name}
    return {"owner_type": owner_type, "owner_id": owner_id, "owner_name": GLOBAL_OWNER_NAME}


def _scene_context(scene_id: Any, scenes_by_id: dict[Any, Record]) -> dict[str, Any]:
    if scene_id is None:
        return {"scene_id": None, "scene_name": None}
    return {"scene_id": scene_id, "scene_name": _scene_name(scenes_by_id.get(scene_id))}


def _media_context(
    item: Record,
    bins_by_id: dict[Any, Record],
    actors_by_id: dict[Any, Record],
    scenes_by_id: dict[Any, Record],
) -> dict[str, Any]:
    bin_id = item.get("bin_id")
    b = bins_by_id.get(bin_id) if bin_id is not None else None
    owner = _owner_context(item.get("owner_type"), item.get("owner_id"), actors_by_id, scenes_by_id)

    # Direct scene ownership wins, then the item's own link, then its bin's
    if owner["owner_type"] == "scene":
        scene_id = owner["owner_id"]
    else:
        scene_id = item.get("scene_id") or (b.get("scene_id") if b else None)

    asset_type = get_asset_type_for_media(item.get("media_type"))
    if bin_id is None:
        bin_name = None
    else:
        bin_name = (b.get("name") if b else None) or UNKNOWN_BIN_NAME

    return {
        "media_id": item["id"],
        "media_name": item.get("name"),
        "media_type": item.get("media_type"),
        "prompt": item.get("prompt"),
        "bin_id": bin_id,
        "bin_name": bin_name,
        "asset_type": asset_type.id,
        "leaf_type": asset_type.leaf_type,
        **owner,
        **_scene_context(scene_id, scenes_by_id),
    }


def _bin_shell(
    b: Record,
    actors_by_id: dict[Any, Record],
    scenes_by_id: dict[Any, Record],
) -> AssetRow:
    owner = _owner_context(b.get("owner_type"), b.get("owner_id"), actors_by_id, scenes_by_id)
    scene_id = owner["owner_id"] if owner["owner_type"] == "scene" else b.get("scene_id")
    asset_type = get_asset_type_for_media(b.get("media_type"))
    return AssetRow(
        id=f"bin-{b['id']}",
        status=STATUS_EMPTY,
        shell=SHELL_BIN,
        bin_id=b["id"],
        bin_name=b.get("name") or UNKNOWN_BIN_NAME,
        media_type=b.get("media_type"),
        asset_type=asset_type.id,
        leaf_type=asset_type.leaf_type,
        **owner,
        **_scene_context(scene_id, scenes_by_id),
    )


def _actor_shell(actor: Record) -> AssetRow:
    name = _actor_name(actor)
    return AssetRow(
        id=f"actor-{actor['id']}",
        status=STATUS_EMPTY,
        shell=SHELL_ACTOR,
        owner_type="actor",
        owner_id=actor["id"],
        owner_name=name,
        actor_id=actor["id"],
        actor_name=name,
    )


def _scene_shell(scene: Record) -> AssetRow:
    name = _scene_name(scene)
    return AssetRow(
        id=f"scene-{scene['id']}",
        status=STATUS_EMPTY,
        shell=SHELL_SCENE,
        owner_type="scene",
        owner_id=scene["id"],
        owner_name=name,
        scene_id=scene["id"],
        scene_name=name,
    )
