"""Discovery and exposure of audit tool plugins."""

import importlib
import importlib.metadata
import logging
import pkgutil
from pathlib import Path
from typing import Dict, List, Set, Callable, Any, Optional

from .base import ToolPlugin, ToolSchema, UserCommand

logger = logging.getLogger(__name__)

# Entry point group for externally packaged tool plugins
PLUGIN_ENTRY_POINT_GROUP = "audio_audit.plugins"


class PluginRegistry:
    """Manages plugin discovery, lifecycle, and tool exposure state.

    Usage:
        registry = PluginRegistry()
        registry.discover()

        print(registry.list_available())  # ['game_audio']

        registry.expose_tool('game_audio', config={'roots': [...]})

        # Get tools for exposed plugins
        tool_schemas = registry.get_exposed_tool_schemas()
        executors = registry.get_exposed_executors()

        # Later, unexpose plugins
        registry.unexpose_all()
    """

    def __init__(self):
        self._plugins: Dict[str, ToolPlugin] = {}
        self._exposed: Set[str] = set()
        self._configs: Dict[str, Dict[str, Any]] = {}

    def discover(self, include_directory: bool = True) -> List[str]:
        """Discover plugins via entry points and optionally directory scanning.

        Entry points allow external packages to register plugins:
            [project.entry-points."audio_audit.plugins"]
            my_plugin = "my_package.plugins:create_plugin"

        Args:
            include_directory: Also scan the plugins directory for local plugins.

        Returns:
            Names of plugins found by this call.
        """
        discovered = []
        discovered.extend(self._discover_via_entry_points())
        if include_directory:
            discovered.extend(self._discover_via_directory())
        return discovered

    def _discover_via_entry_points(self) -> List[str]:
        """Discover plugins registered under PLUGIN_ENTRY_POINT_GROUP."""
        discovered = []

        for ep in importlib.metadata.entry_points(group=PLUGIN_ENTRY_POINT_GROUP):
            # Skip if already loaded (avoid duplicates with directory scan)
            if ep.name in self._plugins:
                continue

            try:
                create_plugin = ep.load()
                plugin = create_plugin()

                if not isinstance(plugin, ToolPlugin):
                    logger.warning(
                        "Entry point '%s': plugin does not implement ToolPlugin protocol",
                        ep.name,
                    )
                    continue

                self._plugins[plugin.name] = plugin
                discovered.append(plugin.name)

            except Exception as exc:
                logger.error("Error loading entry point '%s': %s", ep.name, exc, exc_info=True)

        return discovered

    def _discover_via_directory(self, plugin_dir: Optional[Path] = None) -> List[str]:
        """Discover plugins by scanning the plugins directory.

        Scans for packages exporting a create_plugin() factory function and
        PLUGIN_KIND == "tool".

        Args:
            plugin_dir: Directory to scan (defaults to audio_audit/plugins).

        Returns:
            Names of plugins found in the directory.
        """
        if plugin_dir is None:
            plugin_dir = Path(__file__).parent

        discovered = []

        for finder, name, ispkg in pkgutil.iter_modules([str(plugin_dir)]):
            # Shared modules and test packages are not plugins
            if name.startswith('_') or name in ('base', 'registry', 'sandbox_utils', 'tests'):
                continue

            if name in self._plugins:
                continue

            try:
                module = importlib.import_module(f".{name}", package=__package__)

                if getattr(module, 'PLUGIN_KIND', None) != "tool":
                    continue

                if hasattr(module, 'create_plugin'):
                    plugin = module.create_plugin()

                    if not isinstance(plugin, ToolPlugin):
                        logger.warning("%s: plugin does not implement ToolPlugin protocol", name)
                        continue

                    self._plugins[plugin.name] = plugin
                    discovered.append(plugin.name)

            except Exception as exc:
                logger.error("Error loading plugin '%s': %s", name, exc, exc_info=True)

        return discovered

    def list_available(self) -> List[str]:
        """Names of all registered plugins, exposed or not."""
        return list(self._plugins.keys())

    def list_exposed(self) -> List[str]:
        """List currently exposed plugin names."""
        return list(self._exposed)

    def is_exposed(self, name: str) -> bool:
        """Check if a plugin's tools are currently exposed."""
        return name in self._exposed

    def get_plugin(self, name: str) -> Optional[ToolPlugin]:
        """Look up a registered plugin."""
        return self._plugins.get(name)

    def register_plugin(self, plugin: ToolPlugin) -> None:
        """Register an already constructed plugin instance."""
        self._plugins[plugin.name] = plugin

    def expose_tool(self, name: str, config: Optional[Dict[str, Any]] = None) -> None:
        """Expose a plugin's tools.

        The plugin is initialized on first exposure. Exposing an already
        exposed plugin with a different config shuts it down and initializes
        it again.

        Args:
            name: Plugin name to expose.
            config: Settings passed to the plugin's initialize().

        Raises:
            ValueError: If no plugin is registered under ``name``.
        """
        if name not in self._plugins:
            raise ValueError(f"Plugin '{name}' not found. Available: {self.list_available()}")

        plugin = self._plugins[name]

        if name not in self._exposed:
            plugin.initialize(config)
            if config:
                self._configs[name] = config
            self._exposed.add(name)
        elif config and config != self._configs.get(name):
            plugin.shutdown()
            plugin.initialize(config)
            self._configs[name] = config

    def unexpose_tool(self, name: str) -> None:
        """Stop exposing a plugin's tools.

        The plugin's shutdown() runs and its stored config is forgotten.

        Args:
            name: Plugin name to unexpose.
        """
        if name in self._exposed:
            self._plugins[name].shutdown()
            self._exposed.discard(name)
            self._configs.pop(name, None)

    def expose_all(self, config: Optional[Dict[str, Dict[str, Any]]] = None) -> None:
        """Expose all discovered plugins' tools.

        Args:
            config: Per-plugin settings keyed by plugin name.
        """
        config = config or {}
        for name in self._plugins:
            self.expose_tool(name, config.get(name))

    def unexpose_all(self) -> None:
        """Stop exposing all plugins' tools."""
        for name in list(self._exposed):
            self.unexpose_tool(name)

    def get_exposed_tool_schemas(self) -> List[ToolSchema]:
        """Get ToolSchemas from all exposed plugins."""
        schemas = []
        for name in self._exposed:
            try:
                schemas.extend(self._plugins[name].get_tool_schemas())
            except Exception as exc:
                logger.error("Error getting tool schemas from '%s': %s", name, exc, exc_info=True)
        return schemas

    def get_exposed_executors(self) -> Dict[str, Callable[[Dict[str, Any]], Any]]:
        """Get executor callables from all exposed plugins."""
        executors = {}
        for name in self._exposed:
            try:
                executors.update(self._plugins[name].get_executors())
            except Exception as exc:
                logger.error("Error getting executors from '%s': %s", name, exc, exc_info=True)
        return executors

    def get_system_instructions(self) -> Optional[str]:
        """Combine system instructions from all exposed plugins.

        Returns:
            Combined instructions string, or None if no plugins have instructions.
        """
        instructions = []
        for name in self._exposed:
            try:
                plugin_instructions = self._plugins[name].get_system_instructions()
                if plugin_instructions:
                    instructions.append(plugin_instructions)
            except Exception as exc:
                logger.error("Error getting system instructions from '%s': %s", name, exc, exc_info=True)

        if not instructions:
            return None
        return "\n\n".join(instructions)

    def get_auto_approved_tools(self) -> List[str]:
        """Collect auto-approved tool names from all exposed plugins.

        Returns:
            List of tool names that should be whitelisted for permission checks.
        """
        tools = []
        for name in self._exposed:
            try:
                auto_approved = self._plugins[name].get_auto_approved_tools()
                if auto_approved:
                    tools.extend(auto_approved)
            except Exception as exc:
                logger.error("Error getting auto-approved tools from '%s': %s", name, exc, exc_info=True)
        return tools

    def get_exposed_user_commands(self) -> List[UserCommand]:
        """Collect user-facing commands from all exposed plugins."""
        commands: List[UserCommand] = []
        for name in self._exposed:
            try:
                user_commands = self._plugins[name].get_user_commands()
                if user_commands:
                    commands.extend(user_commands)
            except Exception as exc:
                logger.error("Error getting user commands from '%s': %s", name, exc, exc_info=True)
        return commands
