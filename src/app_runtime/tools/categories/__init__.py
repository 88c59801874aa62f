"""
Tool Categories
Each module registers the handlers of one category.
"""

from ..registry import ToolRegistry
from .app import register_app_tools
from .calc import register_calc_tools
from .http import register_http_tools
from .remote import register_remote_tools
from .system import register_system_tools
from .timer import register_timer_tools
from .ui import register_ui_tools


def build_default_registry() -> ToolRegistry:
    """Registry with every built-in category plus gateway routing."""
    registry = ToolRegistry()
    register_calc_tools(registry)
    register_ui_tools(registry)
    register_system_tools(registry)
    register_app_tools(registry)
    register_http_tools(registry)
    register_timer_tools(registry)
    register_remote_tools(registry)
    return registry


__all__ = [
    "build_default_registry",
    "register_app_tools",
    "register_calc_tools",
    "register_http_tools",
    "register_remote_tools",
    "register_system_tools",
    "register_timer_tools",
    "register_ui_tools",
]
