# Game audio audit package
#
# Read-only search and inspection tools over several configured root
# directories (requirement docs, Wwise work units, Unity sources). The tools
# are packaged as a plugin and can be driven from an agent host or from the
# command line:
#
#   from audio_audit import PluginRegistry, GameAudioPlugin
#
# Lazy loading: imports are deferred via __getattr__ so that importing the
# package does not pull in the CLI dependencies.

# Mapping from public name -> (module_path, attribute_name)
_LAZY_IMPORTS = {
    # Plugin system
    "PluginRegistry": (".plugins.registry", "PluginRegistry"),
    "ToolPlugin": (".plugins.base", "ToolPlugin"),
    "ToolSchema": (".plugins.base", "ToolSchema"),
    # Game audio tools
    "GameAudioPlugin": (".plugins.game_audio", "GameAudioPlugin"),
    "GameAudioConfig": (".plugins.game_audio", "GameAudioConfig"),
    "load_config": (".plugins.game_audio", "load_config"),
    "search_across_roots": (".plugins.game_audio", "search_across_roots"),
    "check_event": (".plugins.game_audio", "check_event"),
}


def __getattr__(name):
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        import importlib
        module = importlib.import_module(module_path, __name__)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Plugin system
    "PluginRegistry",
    "ToolPlugin",
    "ToolSchema",
    # Game audio tools
    "GameAudioPlugin",
    "GameAudioConfig",
    "load_config",
    "search_across_roots",
    "check_event",
]
