"""
VO Foundry Views Kernel — Shared Types

Data classes and constants used across the index builder, filter evaluator,
grouping engine, and view registry. These are the contracts that bind the
kernel together.

Rows are projections of the raw catalog (actors, scenes, bins, media, takes).
They are rebuilt from scratch on every index build and never mutated.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

# ---------------------------------------------------------------------------
# Status vocabulary
# ---------------------------------------------------------------------------

# Media item with zero takes
STATUS_NONE = "__none__"
# Container (bin / actor / scene) with zero media items
STATUS_EMPTY = "__empty__"

SHELL_STATUSES: frozenset[str] = frozenset({STATUS_NONE, STATUS_EMPTY})

DEFAULT_TAKE_STATUS = "new"

# Rollup colors, worst first
STATUS_RED = "red"
STATUS_YELLOW = "yellow"
STATUS_GREEN = "green"
STATUS_GRAY = "gray"

# Sibling ordering for fixed-order dimensions; unlisted values sort last
OWNER_TYPE_ORDER: dict[str, int] = {"global": 0, "actor": 1, "scene": 2}
STATUS_ORDER: dict[str, int] = {"approved": 0, "new": 1, "rejected": 2, "hidden": 3}
UNLISTED_ORDER = 99

# Depth a terminal dimension jumps to so everything below becomes leaves
TERMINAL_DEPTH = 999

# Shell kinds carried on placeholder rows
SHELL_MEDIA = "media"
SHELL_BIN = "bin"
SHELL_ACTOR = "actor"
SHELL_SCENE = "scene"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AssetRow:
    """
    One denormalized row of the asset index.

    Three flavours:
    - take row: one per generated take (take_id set, shell None)
    - media shell: a media item with no takes (status "__none__")
    - container shell: a bin / actor / scene with no media (status "__empty__")
    """

    id: str
    status: str
    take_id: str | None = None
    take_number: int | None = None
    filename: str | None = None
    path: str | None = None
    duration_sec: float | None = None
    created_at: str | None = None
    status_changed_at: str | None = None
    generated_by: str | None = None
    media_id: str | None = None
    media_name: str | None = None
    media_type: str | None = None
    prompt: str | None = None
    bin_id: str | None = None
    bin_name: str | None = None
    owner_type: str | None = None
    owner_id: str | None = None
    owner_name: str | None = None
    actor_id: str | None = None
    actor_name: str | None = None
    scene_id: str | None = None
    scene_name: str | None = None
    asset_type: str = "audio"
    leaf_type: str = "take"
    shell: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


ROW_FIELDS: frozenset[str] = frozenset(f.name for f in fields(AssetRow))


@dataclass
class Warning:
    """A non-fatal issue surfaced to the caller instead of raising."""

    code: str
    message: str
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            d["details"] = self.details
        return d


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def row_value(row: AssetRow, field: str) -> Any:
    """
    Typed accessor for a row field by name.

    Only declared AssetRow fields resolve; anything else is None, the same
    as a missing property on the raw catalog objects.
    """
    if field not in ROW_FIELDS:
        return None
    return getattr(row, field)


def as_text(value: Any) -> str:
    """
    Coerce a field value to the string form used for grouping keys and
    equality filters.

    Follows the conventions the catalog JSON was written with:
      None        → ""
      True/False  → "true"/"false"
      3.0         → "3"
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
