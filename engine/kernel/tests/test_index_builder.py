"""
Views Kernel -- Asset Index Builder Tests

build_asset_index joins actors, bins, media, takes and scenes into one flat
list of rows. Every real container must be carried by at least one row so
empty ones still render as tree nodes.

Covers:
  - One row per take with denormalized owner / bin / scene context
  - "__none__" rows for media without takes
  - "__empty__" shell rows for unused bins, unseen actors and scenes
  - Scene association: direct ownership, media link, bin link
  - Legacy take.content_id and actor.name fallbacks
  - Source order preserved, inputs never mutated
  - audit_catalog reports orphans and bin policy violations
"""

import copy

from engine.kernel.index import audit_catalog, build_asset_index
from engine.kernel.types import STATUS_EMPTY, STATUS_NONE


# ============================================================================
# Helpers
# ============================================================================


def index_of(catalog):
    return build_asset_index(
        catalog["actors"],
        catalog["bins"],
        catalog["media"],
        catalog["takes"],
        catalog["scenes"],
    )


def rows_by_id(rows):
    return {r.id: r for r in rows}


# ============================================================================
# Take rows
# ============================================================================


class TestTakeRows:
    """One row per take, carrying the take and everything above it."""

    def test_one_row_per_take(self, scenario_catalog):
        rows = index_of(scenario_catalog)
        take_rows = [r for r in rows if r.take_id]
        assert [r.take_id for r in take_rows] == ["t1", "t2"]

    def test_take_fields_copied(self, scenario_catalog):
        row = rows_by_id(index_of(scenario_catalog))["t1"]
        assert row.take_number == 1
        assert row.status == "approved"
        assert row.filename == "greeting_001.wav"
        assert row.duration_sec == 1.5
        assert row.created_at == "2026-01-01T00:00:00Z"
        assert row.shell is None

    def test_context_denormalized(self, scenario_catalog):
        row = rows_by_id(index_of(scenario_catalog))["t2"]
        assert row.media_id == "m1"
        assert row.media_name == "greeting"
        assert row.media_type == "dialogue"
        assert row.prompt == "Hello there."
        assert row.bin_id == "b1"
        assert row.bin_name == "Lines"
        assert row.owner_type == "actor"
        assert row.owner_name == "Tim"
        assert row.actor_id == "a1"
        assert row.actor_name == "Tim"
        assert row.asset_type == "audio"
        assert row.leaf_type == "take"

    def test_missing_status_defaults_to_new(self, rich_catalog):
        row = rows_by_id(index_of(rich_catalog))["t4"]
        assert row.status == "new"

    def test_legacy_content_id_on_take(self, rich_catalog):
        """Takes carrying content_id instead of media_id still join."""
        row = rows_by_id(index_of(rich_catalog))["t3"]
        assert row.media_id == "m3"
        assert row.media_name == "main theme"


# ============================================================================
# Shell rows
# ============================================================================


class TestShellRows:
    """Empty containers are represented by placeholder rows."""

    def test_media_without_takes(self, rich_catalog):
        row = rows_by_id(index_of(rich_catalog))["media-m2"]
        assert row.status == STATUS_NONE
        assert row.take_id is None
        assert row.media_id == "m2"
        assert row.shell == "media"

    def test_unused_bin(self, rich_catalog):
        row = rows_by_id(index_of(rich_catalog))["bin-b2"]
        assert row.status == STATUS_EMPTY
        assert row.bin_id == "b2"
        assert row.bin_name == "Barks"
        assert row.media_id is None
        assert row.actor_id == "a2"
        assert row.owner_name == "Mira"

    def test_unseen_actor(self, rich_catalog):
        row = rows_by_id(index_of(rich_catalog))["actor-a3"]
        assert row.status == STATUS_EMPTY
        assert row.actor_name == "Narrator"
        assert row.bin_id is None

    def test_unseen_scene(self, rich_catalog):
        row = rows_by_id(index_of(rich_catalog))["scene-s2"]
        assert row.status == STATUS_EMPTY
        assert row.scene_name == "Act 2"
        assert row.owner_type == "scene"

    def test_actor_with_empty_bin_gets_no_extra_shell(self, rich_catalog):
        """
        An actor counts as seen on any emitted row, bin shells included.
        Mira's only bin is empty, so the bin shell carries the actor and
        no separate actor shell is added.
        """
        rows = index_of(rich_catalog)
        mira_rows = [r for r in rows if r.actor_id == "a2"]
        assert [r.id for r in mira_rows] == ["bin-b2"]

    def test_actor_without_anything(self, scenario_catalog):
        rows = index_of(scenario_catalog)
        mira_rows = [r for r in rows if r.actor_id == "a2"]
        assert len(mira_rows) == 1
        assert mira_rows[0].status == STATUS_EMPTY

    def test_every_container_represented(self, rich_catalog):
        rows = index_of(rich_catalog)
        assert {a["id"] for a in rich_catalog["actors"]} <= {r.actor_id for r in rows}
        assert {s["id"] for s in rich_catalog["scenes"]} <= {r.scene_id for r in rows}
        assert {b["id"] for b in rich_catalog["bins"]} <= {r.bin_id for r in rows}
        assert {m["id"] for m in rich_catalog["media"]} <= {r.media_id for r in rows}

    def test_empty_catalog(self):
        assert build_asset_index([], [], [], [], []) == []


# ============================================================================
# Scene association
# ============================================================================


class TestSceneAssociation:
    """A row's scene comes from ownership, the media's own link, or its bin."""

    def test_scene_owned_media(self, rich_catalog):
        row = rows_by_id(index_of(rich_catalog))["t4"]
        assert row.scene_id == "s1"
        assert row.scene_name == "Act 1"
        assert row.owner_name == "Act 1"
        assert row.actor_id is None

    def test_scene_via_bin(self, rich_catalog):
        row = rows_by_id(index_of(rich_catalog))["t1"]
        assert row.scene_id == "s1"
        assert row.scene_name == "Act 1"

    def test_scene_via_media_link(self, scenario_catalog):
        scenario_catalog["scenes"] = [{"id": "s9", "name": "Finale"}]
        scenario_catalog["media"][0]["scene_id"] = "s9"
        row = rows_by_id(index_of(scenario_catalog))["t1"]
        assert row.scene_id == "s9"
        assert row.scene_name == "Finale"

    def test_global_media_has_no_scene(self, rich_catalog):
        row = rows_by_id(index_of(rich_catalog))["t3"]
        assert row.owner_type == "global"
        assert row.owner_name == "Global"
        assert row.scene_id is None


# ============================================================================
# Ordering and purity
# ============================================================================


class TestOrderingAndPurity:

    def test_source_order(self, rich_catalog):
        ids = [r.id for r in index_of(rich_catalog)]
        assert ids == ["t1", "t2", "media-m2", "t3", "t4", "bin-b2", "actor-a3", "scene-s2"]

    def test_inputs_not_mutated(self, rich_catalog):
        before = copy.deepcopy(rich_catalog)
        index_of(rich_catalog)
        assert rich_catalog == before

    def test_dangling_references_fall_back(self):
        rows = build_asset_index(
            [],
            [],
            [{"id": "m1", "name": "x", "media_type": "dialogue", "bin_id": "gone", "owner_type": "actor", "owner_id": "ghost"}],
            [],
        )
        assert len(rows) == 1
        assert rows[0].bin_name == "Unknown Bin"
        assert rows[0].actor_name == "Unknown Actor"

    def test_clip_media_uses_file_leaves(self):
        rows = build_asset_index(
            [],
            [{"id": "b1", "name": "Boards", "media_type": "clips", "owner_type": "global"}],
            [{"id": "m1", "name": "shot 1", "media_type": "image", "bin_id": "b1", "owner_type": "global"}],
            [],
        )
        assert rows[0].asset_type == "clip"
        assert rows[0].leaf_type == "file"


# ============================================================================
# Catalog audit
# ============================================================================


class TestAuditCatalog:

    def test_consistent_catalog(self, rich_catalog):
        assert audit_catalog(
            rich_catalog["actors"],
            rich_catalog["bins"],
            rich_catalog["media"],
            rich_catalog["takes"],
            rich_catalog["scenes"],
        ) == []

    def test_orphan_take(self, scenario_catalog):
        scenario_catalog["takes"].append({"id": "t9", "media_id": "nope"})
        warnings = audit_catalog(
            scenario_catalog["actors"],
            scenario_catalog["bins"],
            scenario_catalog["media"],
            scenario_catalog["takes"],
        )
        assert [w.code for w in warnings] == ["orphan_take"]
        assert warnings[0].details == {"take_id": "t9", "media_id": "nope"}

    def test_media_type_not_allowed_in_bin(self, scenario_catalog):
        scenario_catalog["media"][0]["media_type"] = "music"
        warnings = audit_catalog(
            scenario_catalog["actors"],
            scenario_catalog["bins"],
            scenario_catalog["media"],
            scenario_catalog["takes"],
        )
        assert [w.code for w in warnings] == ["media_type_not_allowed"]

    def test_unknown_bin(self, scenario_catalog):
        scenario_catalog["media"][0]["bin_id"] = "b404"
        warnings = audit_catalog(
            scenario_catalog["actors"],
            scenario_catalog["bins"],
            scenario_catalog["media"],
            scenario_catalog["takes"],
        )
        assert [w.code for w in warnings] == ["unknown_bin"]
