"""Interpreter runtime: protocol state machine, lifecycle and sessions."""

from .lifecycle import HookOutcome, LifecycleController
from .protocol import (
    Complete,
    ErrorEvent,
    GenerationSnapshot,
    GenerationStart,
    GenerationStatus,
    ProtocolController,
    Thought,
    Transport,
    UIGenerated,
    parse_event,
)
from .session import Session, SessionFactory

__all__ = [
    "HookOutcome",
    "LifecycleController",
    "Complete",
    "ErrorEvent",
    "GenerationSnapshot",
    "GenerationStart",
    "GenerationStatus",
    "ProtocolController",
    "Thought",
    "Transport",
    "UIGenerated",
    "parse_event",
    "Session",
    "SessionFactory",
]
