"""
VO Foundry Views Kernel — Asset Types

Policy tables describing what kind of leaves a media item produces and which
media types a bin may hold.

  audio   media → takes       (dialogue, music, sfx)
  clip    media → files       (image, video, storyboard)
  script  media → documents   (script, notes, documentation)

The grouping engine only reads these for leaf labels and icons. Bin
constraints are checked by audit_catalog, never by grouping.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class AssetType:
    id: str
    leaf_type: str
    extensions: tuple[str, ...]
    media_types: tuple[str, ...]


ASSET_TYPES: Mapping[str, AssetType] = MappingProxyType(
    {
        "audio": AssetType(
            id="audio",
            leaf_type="take",
            extensions=("wav", "mp3", "flac", "aiff", "ogg", "m4a"),
            media_types=("dialogue", "music", "sfx"),
        ),
        "clip": AssetType(
            id="clip",
            leaf_type="file",
            extensions=("png", "jpg", "jpeg", "gif", "webp", "svg", "mp4", "mov", "avi", "webm"),
            media_types=("image", "video", "storyboard"),
        ),
        "script": AssetType(
            id="script",
            leaf_type="document",
            extensions=("txt", "md", "doc", "docx", "pdf", "rtf"),
            media_types=("script", "notes", "documentation"),
        ),
    }
)

MEDIA_TYPE_TO_ASSET: Mapping[str, str] = MappingProxyType(
    {media_type: asset.id for asset in ASSET_TYPES.values() for media_type in asset.media_types}
)

# Bin media_type → media types allowed inside it. Unknown bin types fall back to "general".
BIN_MEDIA_CONSTRAINTS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "dialogue": ("dialogue",),
        "music": ("music",),
        "sfx": ("sfx",),
        "clips": ("image", "video", "storyboard"),
        "documents": ("script", "notes", "documentation"),
        "general": tuple(MEDIA_TYPE_TO_ASSET),
    }
)

_VIDEO_EXTENSIONS = frozenset({"mp4", "mov", "avi", "webm"})


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_asset_type(asset_type_id: str) -> AssetType | None:
    return ASSET_TYPES.get(asset_type_id)


def get_asset_type_for_media(media_type: str | None) -> AssetType:
    """Asset type for a media type. Unknown or missing types are audio."""
    asset_id = MEDIA_TYPE_TO_ASSET.get(media_type or "")
    return ASSET_TYPES[asset_id] if asset_id else ASSET_TYPES["audio"]


def _extension(filename: str) -> str:
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def get_asset_type_from_extension(filename: str) -> AssetType | None:
    ext = _extension(filename)
    if not ext:
        return None
    for asset_type in ASSET_TYPES.values():
        if ext in asset_type.extensions:
            return asset_type
    return None


def get_file_icon(filename: str | None) -> str:
    """Icon name for a leaf file, by extension. Unknown or missing names get "file"."""
    if not filename:
        return "file"
    asset_type = get_asset_type_from_extension(filename)
    if asset_type is None:
        return "file"

    ext = _extension(filename)
    if asset_type.id == "audio":
        return "audioFile"
    if asset_type.id == "clip":
        return "videoFile" if ext in _VIDEO_EXTENSIONS else "imageFile"
    if ext == "pdf":
        return "pdfFile"
    if ext in ("doc", "docx"):
        return "wordFile"
    return "textFile"


# ---------------------------------------------------------------------------
# Bin constraints
# ---------------------------------------------------------------------------


def get_allowed_media_types(bin_media_type: str | None) -> tuple[str, ...]:
    return BIN_MEDIA_CONSTRAINTS.get(bin_media_type or "", BIN_MEDIA_CONSTRAINTS["general"])


def is_media_type_allowed(bin_media_type: str | None, media_type: str | None) -> bool:
    return media_type in get_allowed_media_types(bin_media_type)
