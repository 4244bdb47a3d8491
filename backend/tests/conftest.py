"""
Pytest configuration and fixtures for the views service tests.
"""

from __future__ import annotations

import httpx
import pytest

from backend.main import app
from backend.repos.view_repo import ViewRepo, get_view_repo


@pytest.fixture
def view_repo(tmp_path):
    """A repo backed by a fresh file per test."""
    return ViewRepo(tmp_path / "views.json")


@pytest.fixture
async def client(view_repo):
    """Test client with the view repo swapped for the per-test one."""
    app.dependency_overrides[get_view_repo] = lambda: view_repo
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def catalog():
    """Tim has a dialogue bin with one line and two takes; Mira has nothing."""
    return {
        "actors": [
            {"id": "a1", "display_name": "Tim"},
            {"id": "a2", "display_name": "Mira"},
        ],
        "bins": [
            {"id": "b1", "name": "Lines", "media_type": "dialogue", "owner_type": "actor", "owner_id": "a1"},
        ],
        "media": [
            {"id": "m1", "name": "greeting", "media_type": "dialogue", "bin_id": "b1", "owner_type": "actor", "owner_id": "a1"},
        ],
        "takes": [
            {"id": "t1", "media_id": "m1", "take_number": 1, "status": "approved", "filename": "greeting_001.wav"},
            {"id": "t2", "content_id": "m1", "take_number": 2, "status": "new", "filename": "greeting_002.wav"},
        ],
        "scenes": [],
    }
