"""
Lifecycle Controller
Runs an application's mount and unmount hooks through the tool executor.
"""

from dataclasses import dataclass
from typing import Any, Optional

from returns.pipeline import is_successful

from ..blueprint import AppSpec
from ..core import get_logger
from ..monitoring import MetricsCollector, metrics_collector
from ..tools import ToolExecutor

logger = get_logger(__name__)


@dataclass(frozen=True)
class HookOutcome:
    """Result of one lifecycle hook."""

    tool_id: str
    ok: bool
    result: Any = None
    error: Optional[str] = None


class LifecycleController:
    """
    Executes lifecycle hooks in declared order.

    Each hook is isolated: a failing hook is logged and the remaining
    hooks still run.
    """

    def __init__(self, executor: ToolExecutor, metrics: MetricsCollector = metrics_collector) -> None:
        self.executor = executor
        self.metrics = metrics

    async def mount(self, spec: AppSpec) -> list[HookOutcome]:
        """Run ``on_mount`` hooks of a freshly installed spec."""
        return await self._run("on_mount", spec.lifecycle_hooks.on_mount)

    async def unmount(self, spec: AppSpec) -> list[HookOutcome]:
        """Run ``on_unmount`` hooks of a spec being torn down."""
        return await self._run("on_unmount", spec.lifecycle_hooks.on_unmount)

    async def _run(self, phase: str, tool_ids: list[str]) -> list[HookOutcome]:
        if not tool_ids:
            return []

        logger.info("hooks_start", phase=phase, hook_count=len(tool_ids))
        outcomes = []
        for tool_id in tool_ids:
            try:
                result = await self.executor.run(tool_id, {})
            except Exception as e:
                outcome = HookOutcome(tool_id=tool_id, ok=False, error=str(e))
            else:
                if is_successful(result):
                    outcome = HookOutcome(tool_id=tool_id, ok=True, result=result.unwrap())
                else:
                    outcome = HookOutcome(tool_id=tool_id, ok=False, error=result.failure())

            if not outcome.ok:
                logger.error("hook_failed", phase=phase, tool_id=tool_id, error=outcome.error)
                self.metrics.record_hook_failure(phase)
            outcomes.append(outcome)

        failed = sum(1 for o in outcomes if not o.ok)
        logger.info("hooks_complete", phase=phase, hook_count=len(outcomes), failed=failed)
        return outcomes
