"""
App Runtime
Interpreter for AI-generated declarative applications.
"""

from .blueprint import AppSpec, ComponentType, LifecycleHooks, UIComponent
from .channel import AppChannel, CloseApp, SpawnApp
from .runtime import GenerationStatus, ProtocolController, Session, SessionFactory
from .state import ComponentState
from .tools import TimerRegistry, ToolExecutor, ToolRegistry

__version__ = "0.1.0"

__all__ = [
    "AppSpec",
    "ComponentType",
    "LifecycleHooks",
    "UIComponent",
    "AppChannel",
    "CloseApp",
    "SpawnApp",
    "GenerationStatus",
    "ProtocolController",
    "Session",
    "SessionFactory",
    "ComponentState",
    "TimerRegistry",
    "ToolExecutor",
    "ToolRegistry",
]
