"""Tests for entry type classification."""

import pytest

from zeronovel_toolkit.arch.filetypes import DEFAULT_FILE_TYPE, FILE_TYPE_MAP, get_file_type


class TestGetFileType:
    """Tests for get_file_type."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("config.ini", "script"),
            ("system.cfg", "config"),
            ("readme.txt", "text"),
            ("strings.json", "text"),
            ("bg01.png", "image"),
            ("cg.jpeg", "image"),
            ("op.wmv", "video"),
            ("bgm01.ogg", "audio"),
            ("start.scn", "scene"),
            ("save.dat", "data"),
            ("main.lua", "script"),
            ("engine.dll", "binary"),
        ],
    )
    def test_known_extensions(self, name, expected):
        assert get_file_type(name) == expected

    def test_case_insensitive(self):
        assert get_file_type("BG01.PNG") == "image"
        assert get_file_type("Voice.Wav") == "audio"

    def test_no_extension(self):
        assert get_file_type("README") == DEFAULT_FILE_TYPE

    def test_unknown_extension(self):
        assert get_file_type("model.fbx") == "file"

    def test_empty_name(self):
        assert get_file_type("") == "file"

    def test_only_last_suffix_counts(self):
        assert get_file_type("archive.png.bak") == "file"
        assert get_file_type("backup.bak.png") == "image"

    def test_directory_dots_ignored(self):
        assert get_file_type("data.v2\\readme") == "file"
        assert get_file_type("data.v2/bg.tga") == "image"

    def test_leading_dot_is_extension(self):
        assert get_file_type(".png") == "image"
        assert get_file_type("dir\\.ogg") == "audio"
        assert get_file_type("bg/.PNG") == "image"

    def test_trailing_dot(self):
        assert get_file_type("readme.") == "file"

    def test_labels(self):
        assert set(FILE_TYPE_MAP.values()) <= {
            "script",
            "config",
            "text",
            "image",
            "video",
            "audio",
            "scene",
            "data",
            "binary",
            "file",
        }

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            FILE_TYPE_MAP[".psd"] = "image"
