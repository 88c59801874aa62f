"""Session state storage."""

from .store import ComponentState, Listener, Unsubscribe

__all__ = ["ComponentState", "Listener", "Unsubscribe"]
