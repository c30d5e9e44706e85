"""Tests for plugin discovery and exposure through the registry."""

import pytest

from ..base import ToolPlugin
from ..registry import PluginRegistry
from ..game_audio import ConfigurationError, GameAudioPlugin


@pytest.fixture
def roots_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("GAME_AUDIO_CONFIG_PATH", raising=False)
    monkeypatch.delenv("JAATO_WORKSPACE_ROOT", raising=False)
    monkeypatch.delenv("workspaceRoot", raising=False)
    wwise = tmp_path / "wwise"
    wwise.mkdir()
    return {"roots": [{"id": "wwise", "path": str(wwise)}]}


class TestRegistryPluginDiscovery:

    def test_game_audio_plugin_discovered(self):
        registry = PluginRegistry()
        discovered = registry.discover()

        assert "game_audio" in discovered
        assert "game_audio" in registry.list_available()

    def test_internal_modules_not_discovered(self):
        registry = PluginRegistry()
        registry.discover()

        for name in ("base", "registry", "sandbox_utils", "tests"):
            assert name not in registry.list_available()

    def test_discovered_plugin_implements_protocol(self):
        registry = PluginRegistry()
        registry.discover()

        plugin = registry.get_plugin("game_audio")
        assert isinstance(plugin, ToolPlugin)
        assert plugin.name == "game_audio"

    def test_get_unknown_plugin(self):
        registry = PluginRegistry()
        assert registry.get_plugin("nonexistent") is None


class TestRegistryExposure:

    def test_expose_unknown_plugin_raises(self):
        registry = PluginRegistry()
        with pytest.raises(ValueError):
            registry.expose_tool("nonexistent")

    def test_expose_without_roots_fails_fast(self, roots_config):
        registry = PluginRegistry()
        registry.register_plugin(GameAudioPlugin())

        with pytest.raises(ConfigurationError):
            registry.expose_tool("game_audio")
        assert not registry.is_exposed("game_audio")

    def test_expose_and_collect(self, roots_config):
        registry = PluginRegistry()
        registry.register_plugin(GameAudioPlugin())

        registry.expose_tool("game_audio", config=roots_config)

        assert registry.is_exposed("game_audio")
        assert registry.list_exposed() == ["game_audio"]
        names = [schema.name for schema in registry.get_exposed_tool_schemas()]
        assert names == ["audio_roots", "audio_search", "audio_read", "audio_check_event"]
        assert set(registry.get_exposed_executors()) == set(names)
        assert set(registry.get_auto_approved_tools()) == set(names)
        assert "audio_check_event" in registry.get_system_instructions()
        assert registry.get_exposed_user_commands() == []

    def test_expose_with_new_config_reinitializes(self, roots_config, tmp_path):
        registry = PluginRegistry()
        plugin = GameAudioPlugin()
        registry.register_plugin(plugin)
        registry.expose_tool("game_audio", config=roots_config)

        unity = tmp_path / "unity"
        unity.mkdir()
        registry.expose_tool("game_audio", config={"roots": [{"id": "unity", "path": str(unity)}]})

        result = plugin.get_executors()["audio_roots"]({})
        assert [root["id"] for root in result["roots"]] == ["unity"]

    def test_unexpose(self, roots_config):
        registry = PluginRegistry()
        registry.register_plugin(GameAudioPlugin())
        registry.expose_tool("game_audio", config=roots_config)

        registry.unexpose_all()

        assert not registry.is_exposed("game_audio")
        assert registry.get_exposed_tool_schemas() == []
        assert registry.list_exposed() == []
        assert registry.get_exposed_user_commands() == []
        assert registry.get_system_instructions() is None
