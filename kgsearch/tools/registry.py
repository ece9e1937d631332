"""
Tool Registry
==============

Central tool registry and tool configuration lookup.

    Agent -> ToolRegistry -> BaseTool instances
                  |
           tools.yaml (descriptions, categories)

Example:
    >>> registry = ToolRegistry()
    >>> registry.register(tool, category="search")
    >>> result = await registry.execute("rag_graph_search", query="react projects", ...)
    >>> schemas = registry.get_all_schemas()
"""

import structlog
import yaml
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from kgsearch.tools.base import BaseTool, ToolResult

log = structlog.get_logger()

DEFAULT_TOOLS_CONFIG = Path(__file__).resolve().parent.parent / "config" / "tools.yaml"


@dataclass(frozen=True)
class ToolConfig:
    """
    Registration metadata of a tool.

    Attributes:
        name: Tool name
        description: Description shown to the agent
        category: Registry category (e.g. "search")
    """
    name: str
    description: str
    category: Optional[str] = None


@lru_cache(maxsize=None)
def _load_tool_configs(path: str) -> Dict[str, ToolConfig]:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    configs = {}
    for name, entry in (raw.get("tools") or {}).items():
        entry = entry or {}
        configs[name] = ToolConfig(
            name=name,
            description=str(entry.get("description", "")).strip(),
            category=entry.get("category"),
        )

    log.debug(f"Loaded {len(configs)} tool configs from {path}")
    return configs


def get_tool_config(name: str, config_path: Optional[Path] = None) -> ToolConfig:
    """
    Look up the configuration of a tool.

    Args:
        name: Tool name
        config_path: YAML file (default: kgsearch/config/tools.yaml)

    Returns:
        ToolConfig

    Raises:
        KeyError: If the tool is not configured
    """
    configs = _load_tool_configs(str(config_path or DEFAULT_TOOLS_CONFIG))
    if name not in configs:
        raise KeyError(f"No configuration for tool '{name}'")
    return configs[name]


class ToolRegistry:
    """
    Registry of the tools available to the agent.

    Features:
    - Registration under unique names
    - Get/List by name or category
    - Schema generation for LLM function calling
    """

    def __init__(self):
        self._tools: Dict[str, BaseTool] = {}
        self._categories: Dict[str, List[str]] = {}

        log.debug("ToolRegistry initialized")

    def register(self, tool: BaseTool, category: Optional[str] = None) -> None:
        """
        Register a tool.

        Raises:
            ValueError: If a tool with the same name already exists
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' already registered")

        self._tools[tool.name] = tool
        if category:
            self._categories.setdefault(category, []).append(tool.name)

        log.info(f"Tool registered: {tool.name}", category=category)

    def unregister(self, name: str) -> bool:
        """
        Remove a tool from the registry.

        Returns:
            True if removed, False if not found
        """
        if name not in self._tools:
            return False

        del self._tools[name]
        for tools in self._categories.values():
            if name in tools:
                tools.remove(name)

        log.info(f"Tool unregistered: {name}")
        return True

    def get(self, name: str) -> Optional[BaseTool]:
        return self._tools.get(name)

    def get_required(self, name: str) -> BaseTool:
        """
        Get a tool by name.

        Raises:
            KeyError: If the tool is not registered
        """
        if name not in self._tools:
            raise KeyError(f"Tool '{name}' not found in registry")
        return self._tools[name]

    def list(self, category: Optional[str] = None) -> List[str]:
        """Registered tool names, optionally filtered by category."""
        if category:
            return list(self._categories.get(category, []))
        return list(self._tools.keys())

    def list_categories(self) -> List[str]:
        return list(self._categories.keys())

    def get_all_schemas(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        """JSON schemas of the registered tools, for the LLM."""
        return [self._tools[name].get_schema() for name in self.list(category)]

    async def execute(self, name: str, **kwargs) -> ToolResult:
        """Execute a tool by name."""
        tool = self.get(name)
        if not tool:
            return ToolResult.fail(f"Tool '{name}' not found")

        return await tool(**kwargs)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __iter__(self):
        return iter(self._tools.keys())


# Singleton instance
_default_registry: Optional[ToolRegistry] = None


def get_tool_registry() -> ToolRegistry:
    """Singleton ToolRegistry instance."""
    global _default_registry
    if _default_registry is None:
        _default_registry = ToolRegistry()
    return _default_registry


def register_tool(tool: BaseTool, category: Optional[str] = None) -> None:
    """Shortcut for get_tool_registry().register()."""
    get_tool_registry().register(tool, category)
