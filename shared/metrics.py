"""
Shared metrics configuration for the rules engine.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry
from typing import Dict, Any, Optional
import time
from contextlib import contextmanager


class MetricsCollector:
    """Centralized metrics collector for an engine.

    Metrics are only exported when a registry is supplied; with the default
    of ``None`` they are tracked but left unregistered, so any number of
    engines can coexist in one process.
    """

    def __init__(self, engine_name: str, registry: Optional[CollectorRegistry] = None):
        self.engine_name = engine_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up rule evaluation metrics."""

        # Engine info
        self._metrics["engine_info"] = Info(
            "rules_engine",
            "Rules engine information",
            registry=self.registry
        )
        self._metrics["engine_info"].info({
            "engine": self.engine_name,
            "version": "1.0.0"
        })

        self._metrics["rule_evaluations_total"] = Counter(
            "rule_evaluations_total",
            "Total rule evaluations",
            ["logic", "outcome"],
            registry=self.registry
        )

        self._metrics["rule_evaluation_duration_seconds"] = Histogram(
            "rule_evaluation_duration_seconds",
            "Rule evaluation duration in seconds",
            ["logic"],
            registry=self.registry
        )

        # Error metrics
        self._metrics["rule_evaluation_errors_total"] = Counter(
            "rule_evaluation_errors_total",
            "Total rule evaluation errors",
            ["error_code"],
            registry=self.registry
        )

        self._metrics["operator_registrations_total"] = Counter(
            "operator_registrations_total",
            "Total operator registrations",
            ["operator"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_evaluation(self, logic: str, outcome: str):
        """Record a completed rule evaluation."""
        self._metrics["rule_evaluations_total"].labels(
            logic=logic,
            outcome=outcome
        ).inc()

    def record_error(self, error_code: str):
        """Record error metrics."""
        self._metrics["rule_evaluation_errors_total"].labels(error_code=error_code).inc()

    def record_registration(self, operator: str):
        """Record an operator registration."""
        self._metrics["operator_registrations_total"].labels(operator=operator).inc()

    @contextmanager
    def time_operation(self, operation_name: str, **labels):
        """Context manager to time an operation."""
        start_time = time.time()
        try:
            yield
        finally:
            duration = time.time() - start_time
            if operation_name in self._metrics:
                self._metrics[operation_name].labels(**labels).observe(duration)


def get_metrics_collector(engine_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for an engine."""
    return MetricsCollector(engine_name, registry)
