"""ID Generation.

ULID-based identifiers with type prefixes so logs stay readable
(sess_*, req_*, tmr_*). ULIDs are lexicographically sortable by creation time.
"""

from typing import NewType
from ulid import ULID

SessionID = NewType("SessionID", str)
"""Host session identifier"""

RequestID = NewType("RequestID", str)
"""Generation request identifier"""

TimerID = NewType("TimerID", str)
"""Timer handle identifier"""


class Prefix:
    """ID prefix constants."""

    SESSION = "sess"
    REQUEST = "req"
    TIMER = "tmr"


def _generate_with_prefix(prefix: str) -> str:
    return f"{prefix}_{ULID()}"


def new_session_id() -> SessionID:
    """Generate new session ID."""
    return SessionID(_generate_with_prefix(Prefix.SESSION))


def new_request_id() -> RequestID:
    """Generate new request ID."""
    return RequestID(_generate_with_prefix(Prefix.REQUEST))


def new_timer_id() -> TimerID:
    """Generate new timer ID."""
    return TimerID(_generate_with_prefix(Prefix.TIMER))


def has_prefix(id_str: str, prefix: str) -> bool:
    """Check whether an ID carries the given type prefix."""
    return id_str.startswith(f"{prefix}_")
