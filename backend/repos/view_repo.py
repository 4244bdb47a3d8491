"""Repository for user-authored views, persisted as one JSON file."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

from backend.config import settings

logger = logging.getLogger(__name__)


class ViewRepo:
    """
    Custom views in their persisted shape:

      {"views": [{"id": ..., "name": ..., "levels": [...], "filter": [...]}, ...]}

    Order is insertion order; replacing a view keeps its position.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _load(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        with open(self.path) as f:
            data = json.load(f)
        views = data.get("views", []) if isinstance(data, dict) else []
        return [v for v in views if isinstance(v, dict) and v.get("id")]

    def _save(self, views: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w") as f:
            json.dump({"views": views}, f, indent=2)
        os.replace(tmp, self.path)

    async def list_all(self) -> list[dict[str, Any]]:
        """All stored views."""
        async with self._lock:
            return self._load()

    async def get(self, view_id: str) -> dict[str, Any] | None:
        async with self._lock:
            for view in self._load():
                if view["id"] == view_id:
                    return view
        return None

    async def put(self, view: dict[str, Any]) -> dict[str, Any]:
        """
        Create or replace a view by id.

        Args:
            view: View dict in the persisted shape (must carry "id")

        Returns:
            The stored view
        """
        async with self._lock:
            views = self._load()
            for i, existing in enumerate(views):
                if existing["id"] == view["id"]:
                    views[i] = view
                    break
            else:
                views.append(view)
            self._save(views)
        logger.info("view_repo: saved view %s (%d stored)", view["id"], len(views))
        return view

    async def delete(self, view_id: str) -> bool:
        """Delete a view. Returns False if no such view was stored."""
        async with self._lock:
            views = self._load()
            kept = [v for v in views if v["id"] != view_id]
            if len(kept) == len(views):
                return False
            self._save(kept)
        logger.info("view_repo: deleted view %s", view_id)
        return True


_view_repo: ViewRepo | None = None


def get_view_repo() -> ViewRepo:
    """FastAPI dependency: the process-wide repo at settings.VIEWS_FILE."""
    global _view_repo
    if _view_repo is None:
        _view_repo = ViewRepo(settings.VIEWS_FILE)
    return _view_repo
