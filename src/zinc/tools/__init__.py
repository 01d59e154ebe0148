"""Built-in tools — handlers, parameter models and the registry."""

from zinc.tools.catalog import BUILTIN_TOOLS, build_default_registry
from zinc.tools.registry import ToolRegistry, ToolSpec

__all__ = [
    "BUILTIN_TOOLS",
    "ToolRegistry",
    "ToolSpec",
    "build_default_registry",
]
