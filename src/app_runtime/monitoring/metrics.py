"""
Metrics Collection
Prometheus metrics for the application runtime
"""

import time

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the runtime.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        self.registry = registry

        # Tool metrics
        self.tool_executions_total = Counter(
            "runtime_tool_executions_total",
            "Total number of tool executions",
            ["category", "status"],
            registry=registry,
        )
        self.tool_duration = Histogram(
            "runtime_tool_duration_seconds",
            "Tool execution duration in seconds",
            ["category"],
            buckets=[0.001, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
            registry=registry,
        )

        # Protocol metrics
        self.protocol_events_total = Counter(
            "runtime_protocol_events_total",
            "Total number of inbound protocol events",
            ["type"],
            registry=registry,
        )
        self.generations_total = Counter(
            "runtime_generations_total",
            "Generation requests by outcome",
            ["outcome"],
            registry=registry,
        )

        # Lifecycle metrics
        self.hook_failures_total = Counter(
            "runtime_hook_failures_total",
            "Lifecycle hook failures",
            ["phase"],
            registry=registry,
        )
        self.active_timers = Gauge(
            "runtime_active_timers",
            "Timers currently scheduled",
            registry=registry,
        )

        self.uptime = Gauge(
            "runtime_uptime_seconds",
            "Runtime uptime in seconds",
            registry=registry,
        )
        self.start_time = time.time()

    def record_tool(self, category: str, status: str, duration: float) -> None:
        """Record a tool execution."""
        self.tool_executions_total.labels(category=category, status=status).inc()
        self.tool_duration.labels(category=category).observe(duration)

    def record_protocol_event(self, event_type: str) -> None:
        """Record an inbound protocol event."""
        self.protocol_events_total.labels(type=event_type).inc()

    def record_generation(self, outcome: str) -> None:
        """Record a generation outcome (requested, ready, failed, rejected)."""
        self.generations_total.labels(outcome=outcome).inc()

    def record_hook_failure(self, phase: str) -> None:
        """Record a failed lifecycle hook."""
        self.hook_failures_total.labels(phase=phase).inc()

    def set_active_timers(self, count: int) -> None:
        """Set the number of scheduled timers."""
        self.active_timers.set(count)

    def update_uptime(self) -> None:
        """Update the uptime metric."""
        self.uptime.set(time.time() - self.start_time)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        self.update_uptime()
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
