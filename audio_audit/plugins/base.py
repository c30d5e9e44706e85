"""Protocol and declaration types shared by audit tool plugins."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Protocol, runtime_checkable


# Categories a ToolSchema may declare
TOOL_CATEGORIES = [
    "filesystem",   # reading a single file
    "search",       # content search and cross-checks
    "system",       # configuration introspection
]


@dataclass
class ToolSchema:
    """Declaration of one tool as a host sees it.

    Attributes:
        name: Tool name, unique across exposed plugins (e.g. 'audio_search').
        description: One or two sentences for the host's tool list.
        parameters: JSON Schema object for the argument dict.
        category: One of TOOL_CATEGORIES, or None.
        discoverability: "core" tools are always listed; "discoverable"
            tools are listed when the host asks for them.
    """
    name: str
    description: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    category: Optional[str] = None
    discoverability: str = "discoverable"


class UserCommand(NamedTuple):
    """A command a person can run directly, bypassing the model.

    Attributes:
        name: Command word.
        description: Short help text.
        share_with_model: Whether the command output is also added to the
            conversation.
    """
    name: str
    description: str
    share_with_model: bool = False


@runtime_checkable
class ToolPlugin(Protocol):
    """What the registry expects from a plugin object.

    Tools are declared by get_tool_schemas() and run by the callables from
    get_executors(), which take an argument dict and return a JSON-ready dict.
    """

    @property
    def name(self) -> str:
        """Registry key for the plugin."""
        ...

    def get_tool_schemas(self) -> List[ToolSchema]:
        ...

    def get_executors(self) -> Dict[str, Callable[[Dict[str, Any]], Any]]:
        """Map each tool name to the callable that runs it."""
        ...

    def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Prepare the plugin when it is exposed.

        Args:
            config: Plugin settings supplied by the host, if any.
        """
        ...

    def shutdown(self) -> None:
        """Release state when the plugin is unexposed."""
        ...

    def get_system_instructions(self) -> Optional[str]:
        """Text telling the model how to use the tools, or None."""
        ...

    def get_auto_approved_tools(self) -> List[str]:
        """Names of tools the host may run without asking (read-only ones)."""
        ...

    def get_user_commands(self) -> List[UserCommand]:
        ...
