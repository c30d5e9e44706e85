"""Tests for path resolution helpers."""

import os

import pytest

from ..path_utils import display_path, expand_home, normalize_for_match, to_abs_path


@pytest.fixture
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return str(home_dir)


class TestNormalizeForMatch:

    def test_backslashes_become_forward_slashes(self):
        assert normalize_for_match("C:\\Audio\\Wwise\\.git\\x") == "C:/Audio/Wwise/.git/x"

    def test_forward_slashes_unchanged(self):
        assert normalize_for_match("/a/b/c") == "/a/b/c"

    def test_empty(self):
        assert normalize_for_match("") == ""

    def test_display_path_matches(self):
        assert display_path("Events\\Default.wwu") == "Events/Default.wwu"


class TestExpandHome:

    def test_bare_tilde(self, home):
        assert expand_home("~") == home

    def test_tilde_slash(self, home):
        assert expand_home("~/Docs/Audio") == os.path.join(home, "Docs/Audio")

    def test_other_user_left_alone(self, home):
        assert expand_home("~bob/Docs") == "~bob/Docs"

    def test_plain_path_unchanged(self, home):
        assert expand_home("/srv/audio") == "/srv/audio"


class TestToAbsPath:

    def test_absolute_is_normalized(self):
        assert to_abs_path("/srv/audio/../wwise/./Events") == "/srv/wwise/Events"

    def test_relative_uses_base_dir(self, tmp_path):
        assert to_abs_path("unity/Assets", str(tmp_path)) == os.path.join(str(tmp_path), "unity", "Assets")

    def test_relative_without_base_uses_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert to_abs_path("wwise") == os.path.join(os.getcwd(), "wwise")

    def test_input_is_trimmed(self, tmp_path):
        assert to_abs_path("  wwise  ", str(tmp_path)) == os.path.join(str(tmp_path), "wwise")

    def test_home_expanded_before_resolution(self, home):
        assert to_abs_path("~/Docs", "/somewhere/else") == os.path.join(home, "Docs")

    def test_base_dir_home_expanded(self, home):
        assert to_abs_path("Docs", "~") == os.path.join(home, "Docs")

    def test_parent_segments_collapse_out_of_base(self, tmp_path):
        base = tmp_path / "project"
        assert to_abs_path("../shared", str(base)) == os.path.join(str(tmp_path), "shared")
