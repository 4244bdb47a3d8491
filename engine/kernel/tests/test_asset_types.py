"""
Views Kernel -- Asset Type Policy Tests

Covers:
  - Media type → asset type mapping (unknown falls back to audio)
  - File extension lookup and leaf icons
  - Bin media constraints
"""

import pytest

from engine.kernel.asset_types import (
    ASSET_TYPES,
    get_allowed_media_types,
    get_asset_type,
    get_asset_type_for_media,
    get_asset_type_from_extension,
    get_file_icon,
    is_media_type_allowed,
)


class TestAssetTypeLookup:

    @pytest.mark.parametrize(
        "media_type,expected",
        [("dialogue", "audio"), ("sfx", "audio"), ("video", "clip"), ("notes", "script")],
    )
    def test_for_media(self, media_type, expected):
        assert get_asset_type_for_media(media_type).id == expected

    def test_unknown_media_is_audio(self):
        assert get_asset_type_for_media("hologram").id == "audio"
        assert get_asset_type_for_media(None).id == "audio"

    def test_by_id(self):
        assert get_asset_type("clip").leaf_type == "file"
        assert get_asset_type("nope") is None

    def test_leaf_types(self):
        assert {a.id: a.leaf_type for a in ASSET_TYPES.values()} == {
            "audio": "take",
            "clip": "file",
            "script": "document",
        }

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ASSET_TYPES["audio"] = None


class TestExtensions:

    def test_case_insensitive(self):
        assert get_asset_type_from_extension("LINE_001.WAV").id == "audio"

    def test_unknown_or_missing(self):
        assert get_asset_type_from_extension("archive.zip") is None
        assert get_asset_type_from_extension("README") is None

    @pytest.mark.parametrize(
        "filename,icon",
        [
            ("a.wav", "audioFile"),
            ("a.png", "imageFile"),
            ("a.mov", "videoFile"),
            ("a.pdf", "pdfFile"),
            ("a.docx", "wordFile"),
            ("a.md", "textFile"),
            ("a.zip", "file"),
            (None, "file"),
        ],
    )
    def test_file_icon(self, filename, icon):
        assert get_file_icon(filename) == icon


class TestBinConstraints:

    def test_dialogue_bin(self):
        assert get_allowed_media_types("dialogue") == ("dialogue",)
        assert is_media_type_allowed("dialogue", "dialogue")
        assert not is_media_type_allowed("dialogue", "music")

    def test_clips_bin(self):
        assert is_media_type_allowed("clips", "storyboard")
        assert not is_media_type_allowed("clips", "sfx")

    def test_unknown_bin_is_general(self):
        assert is_media_type_allowed("misc", "music")
        assert is_media_type_allowed(None, "script")
        assert not is_media_type_allowed("general", "hologram")
