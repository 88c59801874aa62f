"""
Timer Registry
Session-owned one-shot and periodic timers with typed handles.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..core.id import TimerID, new_timer_id
from ..monitoring import MetricsCollector, metrics_collector

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], Any]


class TimerKind(str, Enum):
    """Timer flavours."""
    ONCE = "once"
    INTERVAL = "interval"


@dataclass
class TimerHandle:
    """Handle for a scheduled timer."""

    id: TimerID
    kind: TimerKind
    delay: float
    fired: int = 0
    task: Optional[asyncio.Task] = field(default=None, repr=False, compare=False)

    @property
    def state_key(self) -> str:
        """State key under which the handle id is published."""
        prefix = "timer" if self.kind == TimerKind.ONCE else "interval"
        return f"{prefix}_{self.id}"

    @property
    def active(self) -> bool:
        return self.task is not None and not self.task.done()


class TimerRegistry:
    """
    Owns every timer a session schedules.

    Timers must be created from inside a running event loop. ``close``
    is called when the owning session closes; no timer can be scheduled after it.
    """

    def __init__(self, metrics: MetricsCollector = metrics_collector) -> None:
        self._timers: Dict[str, TimerHandle] = {}
        self.metrics = metrics
        self._closed = False

    def schedule_once(self, delay: float, callback: TimerCallback) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        return self._schedule(TimerKind.ONCE, delay, callback)

    def schedule_interval(self, interval: float, callback: TimerCallback) -> TimerHandle:
        """Run ``callback`` every ``interval`` seconds until cancelled."""
        if interval <= 0:
            raise ValueError("Interval must be positive")
        return self._schedule(TimerKind.INTERVAL, interval, callback)

    def _schedule(self, kind: TimerKind, delay: float, callback: TimerCallback) -> TimerHandle:
        if self._closed:
            raise RuntimeError("Timer registry is closed")
        handle = TimerHandle(id=new_timer_id(), kind=kind, delay=max(delay, 0.0))
        loop = asyncio.get_running_loop()
        handle.task = loop.create_task(self._run(handle, callback), name=f"timer-{handle.id}")
        self._timers[handle.id] = handle
        self.metrics.set_active_timers(len(self._timers))
        logger.debug(f"Scheduled {kind.value} timer {handle.id} ({handle.delay}s)")
        return handle

    async def _run(self, handle: TimerHandle, callback: TimerCallback) -> None:
        try:
            while True:
                await asyncio.sleep(handle.delay)
                handle.fired += 1
                await self._fire(handle, callback)
                if handle.kind == TimerKind.ONCE:
                    break
        finally:
            self._timers.pop(handle.id, None)
            self.metrics.set_active_timers(len(self._timers))

    async def _fire(self, handle: TimerHandle, callback: TimerCallback) -> None:
        try:
            result = callback()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Timer {handle.id} callback failed: {e}", exc_info=True)

    def get(self, timer_id: str) -> Optional[TimerHandle]:
        """Get a live timer by ID."""
        return self._timers.get(timer_id)

    def cancel(self, timer_id: str) -> bool:
        """
        Cancel a timer of either kind.

        Returns:
            True if a live timer was cancelled
        """
        handle = self._timers.pop(timer_id, None)
        if handle is None:
            return False
        if handle.task is not None:
            handle.task.cancel()
        self.metrics.set_active_timers(len(self._timers))
        logger.debug(f"Cancelled timer {timer_id}")
        return True

    def cancel_all(self) -> int:
        """Cancel every live timer, returning how many were cancelled."""
        ids = list(self._timers)
        for timer_id in ids:
            self.cancel(timer_id)
        if ids:
            logger.info(f"Cancelled {len(ids)} timers")
        return len(ids)

    def close(self) -> int:
        """Cancel every timer and refuse new ones."""
        self._closed = True
        return self.cancel_all()

    @property
    def closed(self) -> bool:
        return self._closed

    def active(self) -> List[TimerHandle]:
        """Live timers."""
        return list(self._timers.values())

    def __len__(self) -> int:
        return len(self._timers)
