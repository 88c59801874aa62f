"""
Component State Store
Per-session observable key/value storage backing rendered components.
"""

from typing import Any, Callable, Iterator

from ..core import get_logger

logger = get_logger(__name__)

Listener = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class ComponentState:
    """
    Key-keyed observable state for one session.

    Listeners are notified synchronously inside ``set``, in subscription
    order. The listener set is snapshotted when a notification pass starts,
    so listeners added during the pass only see later writes. Listeners run
    on the caller's task and must not block.
    """

    def __init__(self) -> None:
        self._state: dict[str, Any] = {}
        self._listeners: dict[str, dict[int, Listener]] = {}
        self._next_token = 0
        # Bumped on clear() so stale unsubscribe callables become no-ops
        self._generation = 0

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or ``default`` when absent."""
        value = self._state.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` and notify every listener subscribed to ``key``."""
        self._state[key] = value

        listeners = self._listeners.get(key)
        if not listeners:
            return

        for listener in list(listeners.values()):
            try:
                listener(value)
            except Exception as e:
                logger.error("listener_failed", key=key, error=str(e), exc_info=True)

    def subscribe(self, key: str, listener: Listener) -> Unsubscribe:
        """
        Register a listener for ``key``.

        Returns:
            Callable that removes the listener; safe to call more than once
        """
        token = self._next_token
        self._next_token += 1
        generation = self._generation
        self._listeners.setdefault(key, {})[token] = listener

        def unsubscribe() -> None:
            if generation != self._generation:
                return
            listeners = self._listeners.get(key)
            if listeners is None:
                return
            listeners.pop(token, None)
            if not listeners:
                del self._listeners[key]

        return unsubscribe

    def clear(self) -> None:
        """Drop every key and every listener."""
        self._state.clear()
        self._listeners.clear()
        self._generation += 1

    def keys(self) -> list[str]:
        """Keys currently stored."""
        return list(self._state.keys())

    def snapshot(self) -> dict[str, Any]:
        """Shallow copy of the stored values."""
        return dict(self._state)

    def listener_count(self, key: str) -> int:
        """Number of listeners subscribed to ``key``."""
        return len(self._listeners.get(key, {}))

    def __contains__(self, key: object) -> bool:
        return key in self._state

    def __len__(self) -> int:
        return len(self._state)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._state))
