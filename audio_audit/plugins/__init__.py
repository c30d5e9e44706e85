"""Plugin system for tool discovery and management.

This package provides a plugin architecture for tool implementations that
can be discovered, exposed/unexposed, and driven by an agent host.

Usage:
    from audio_audit.plugins import PluginRegistry

    registry = PluginRegistry()
    registry.discover()

    # List available plugins
    print(registry.list_available())  # ['game_audio']

    # Expose specific plugins
    registry.expose_tool('game_audio', config={'roots': [...]})

    # Get tools for exposed plugins
    schemas = registry.get_exposed_tool_schemas()
    executors = registry.get_exposed_executors()

    # Unexpose when done
    registry.unexpose_all()
"""

from .base import ToolPlugin, ToolSchema, UserCommand
from .registry import PluginRegistry

__all__ = ['ToolPlugin', 'ToolSchema', 'UserCommand', 'PluginRegistry']
