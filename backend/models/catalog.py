"""Catalog models: the actors, scenes, bins, media and takes a tree is built from."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field


class CatalogItem(BaseModel):
    """Base for catalog records. Unknown fields pass through to the index untouched."""

    model_config = {"extra": "allow"}

    id: str


class Actor(CatalogItem):
    display_name: str | None = None
    name: str | None = None


class Scene(CatalogItem):
    name: str | None = None
    actor_ids: list[str] = Field(default_factory=list)


class Bin(CatalogItem):
    name: str | None = None
    media_type: str | None = None
    owner_type: str | None = None
    owner_id: str | None = None
    scene_id: str | None = None


class Media(CatalogItem):
    name: str | None = None
    media_type: str | None = None
    bin_id: str | None = None
    owner_type: str | None = None
    owner_id: str | None = None
    scene_id: str | None = None
    prompt: str | None = None


class Take(CatalogItem):
    # Older clients send content_id
    media_id: str | None = Field(default=None, validation_alias=AliasChoices("media_id", "content_id"))
    take_number: int | None = None
    status: str | None = None
    filename: str | None = None
    path: str | None = None
    duration_sec: float | None = None
    created_at: str | None = None
    status_changed_at: str | None = None
    generated_by: str | None = None


class Catalog(BaseModel):
    """What the client sends to build a tree or audit a catalog."""

    actors: list[Actor] = Field(default_factory=list)
    bins: list[Bin] = Field(default_factory=list)
    media: list[Media] = Field(default_factory=list)
    takes: list[Take] = Field(default_factory=list)
    scenes: list[Scene] = Field(default_factory=list)

    @property
    def size(self) -> int:
        """Upper bound on index rows this catalog can produce."""
        return len(self.actors) + len(self.bins) + len(self.media) + len(self.takes) + len(self.scenes)

    def to_kernel(self) -> dict[str, list[dict[str, Any]]]:
        """Plain dicts in the shape build_asset_index expects."""
        return {
            "actors": [a.model_dump() for a in self.actors],
            "bins": [b.model_dump() for b in self.bins],
            "media": [m.model_dump() for m in self.media],
            "takes": [t.model_dump() for t in self.takes],
            "scenes": [s.model_dump() for s in self.scenes],
        }
