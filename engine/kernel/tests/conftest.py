"""
Engine kernel test configuration.

Catalog fixtures shared by the index, filter, grouping and view tests.
Catalogs are plain dicts shaped like the REST client's JSON.
"""

import pytest


@pytest.fixture
def scenario_catalog():
    """
    Two actors. Tim owns one dialogue bin holding one media item with an
    approved and a new take. Mira owns nothing.
    """
    return {
        "actors": [
            {"id": "a1", "display_name": "Tim"},
            {"id": "a2", "display_name": "Mira"},
        ],
        "bins": [
            {"id": "b1", "name": "Lines", "media_type": "dialogue", "owner_type": "actor", "owner_id": "a1"},
        ],
        "media": [
            {
                "id": "m1",
                "name": "greeting",
                "media_type": "dialogue",
                "bin_id": "b1",
                "owner_type": "actor",
                "owner_id": "a1",
                "prompt": "Hello there.",
            },
        ],
        "takes": [
            {
                "id": "t1",
                "media_id": "m1",
                "take_number": 1,
                "status": "approved",
                "filename": "greeting_001.wav",
                "duration_sec": 1.5,
                "created_at": "2026-01-01T00:00:00Z",
            },
            {
                "id": "t2",
                "media_id": "m1",
                "take_number": 2,
                "status": "new",
                "filename": "greeting_002.wav",
                "duration_sec": 1.7,
                "created_at": "2026-01-02T00:00:00Z",
            },
        ],
        "scenes": [],
    }


@pytest.fixture
def rich_catalog():
    """
    Global, actor and scene owners; an empty bin; an empty scene; a media
    item without takes; takes across every status.
    """
    return {
        "actors": [
            {"id": "a1", "display_name": "Tim"},
            {"id": "a2", "display_name": "Mira"},
            {"id": "a3", "name": "Narrator"},
        ],
        "scenes": [
            {"id": "s1", "name": "Act 1", "actor_ids": ["a1"]},
            {"id": "s2", "name": "Act 2"},
        ],
        "bins": [
            {"id": "b1", "name": "Lines", "media_type": "dialogue", "owner_type": "actor", "owner_id": "a1", "scene_id": "s1"},
            {"id": "b2", "name": "Barks", "media_type": "dialogue", "owner_type": "actor", "owner_id": "a2"},
            {"id": "b3", "name": "Score", "media_type": "music", "owner_type": "global", "owner_id": None},
            {"id": "b4", "name": "Ambience", "media_type": "sfx", "owner_type": "scene", "owner_id": "s1"},
        ],
        "media": [
            {"id": "m1", "name": "greeting", "media_type": "dialogue", "bin_id": "b1", "owner_type": "actor", "owner_id": "a1", "prompt": "Hello there."},
            {"id": "m2", "name": "farewell", "media_type": "dialogue", "bin_id": "b1", "owner_type": "actor", "owner_id": "a1", "prompt": "Goodbye."},
            {"id": "m3", "name": "main theme", "media_type": "music", "bin_id": "b3", "owner_type": "global", "owner_id": None, "prompt": "Sweeping strings"},
            {"id": "m4", "name": "wind", "media_type": "sfx", "bin_id": "b4", "owner_type": "scene", "owner_id": "s1", "prompt": "Howling wind"},
        ],
        "takes": [
            {"id": "t1", "media_id": "m1", "take_number": 1, "status": "approved", "filename": "greeting_001.wav"},
            {"id": "t2", "media_id": "m1", "take_number": 2, "status": "rejected", "filename": "greeting_002.wav"},
            {"id": "t3", "content_id": "m3", "take_number": 1, "status": "new", "filename": "main_theme_001.mp3"},
            {"id": "t4", "media_id": "m4", "take_number": 1, "filename": None},
        ],
    }
