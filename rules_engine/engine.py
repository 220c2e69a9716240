"""
Rule evaluation engine.
"""

import json
import threading
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from shared.config import EngineConfig, get_config
from shared.logging import get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from .cancellation import CancelSignal, check_cancelled
from .comparators import OperatorFunc
from .errors import FieldNotFoundError, UnknownOperatorError
from .models import Condition, Logic, Result, Rule, operator_name
from .paths import resolve
from .records import from_struct
from .registry import OperatorRegistry

ALL_CONDITIONS_MET = "all conditions met"
NO_CONDITIONS_MET = "no conditions met"


def format_value(value: Any) -> str:
    """Render a condition value for explanations.

    Whole floats print without a fractional part, so 100.0 reads as 100.
    """
    if isinstance(value, str):
        return value
    return json.dumps(_plain_numbers(value), ensure_ascii=False, default=str)


def comparator_outcome(operator: str, outcome: Any) -> bool:
    """Read a comparator's return value.

    Comparators return a bool, or a ``(matched, error)`` pair where a
    non-None error is raised. Anything else is rejected rather than read
    for truthiness.
    """
    if isinstance(outcome, tuple) and len(outcome) == 2:
        matched, error = outcome
        if error is not None:
            if isinstance(error, BaseException):
                raise error
            raise TypeError(f"operator '{operator}' returned a non-exception error: {error!r}")
        outcome = matched

    if not isinstance(outcome, bool):
        raise TypeError(
            f"operator '{operator}' must return a bool or (bool, error), got {type(outcome).__name__}"
        )
    return outcome


def _plain_numbers(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, (list, tuple)):
        return [_plain_numbers(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _plain_numbers(item) for key, item in value.items()}
    return value


def explain(condition: Condition, matched: bool) -> str:
    """Human-readable outcome of a single condition."""
    outcome = "true" if matched else "false"
    return f"{condition.field} {condition.operator} {format_value(condition.value)} → {outcome}"


class Engine:
    """Evaluates rules against data records.

    Holds its own operator registry unless one is passed in, in which case
    engines sharing that registry see each other's registrations.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        registry: Optional[OperatorRegistry] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.config = config if config is not None else get_config()
        self.logger = get_logger("rules.engine")
        self.registry = registry if registry is not None else OperatorRegistry()
        if metrics is None and self.config.enable_metrics:
            metrics = get_metrics_collector(self.config.engine_name)
        self.metrics = metrics

    def register(self, name: Any, fn: OperatorFunc) -> bool:
        """Register a custom operator; later registrations win."""
        replaced = self.registry.register(name, fn)
        if self.metrics:
            self.metrics.record_registration(operator_name(name))
        return replaced

    def lookup(self, name: Any) -> Optional[OperatorFunc]:
        return self.registry.lookup(name)

    def operators(self) -> List[str]:
        return self.registry.names()

    def evaluate(
        self,
        rule: Rule,
        data: Optional[Mapping],
        cancel_token: Optional[CancelSignal] = None,
    ) -> Result:
        """Evaluate ``rule`` against ``data``.

        Raises FieldNotFoundError, UnknownOperatorError, TypeMismatchError or
        EvaluationCancelledError; errors raised by custom comparators are
        propagated unchanged.
        """
        logic = rule.logic.value
        try:
            if self.metrics:
                with self.metrics.time_operation("rule_evaluation_duration_seconds", logic=logic):
                    result = self._evaluate(rule, data, cancel_token)
            else:
                result = self._evaluate(rule, data, cancel_token)
        except Exception as e:
            error_code = getattr(e, "code", type(e).__name__)
            self.logger.warning(
                "Rule evaluation failed",
                logic=logic,
                error_code=error_code,
                error=str(e)
            )
            if self.metrics:
                self.metrics.record_error(error_code)
                self.metrics.record_evaluation(logic, "error")
            raise

        if self.metrics:
            self.metrics.record_evaluation(logic, "matched" if result.matched else "unmatched")
        if self.config.log_evaluations:
            self.logger.debug(
                "Rule evaluated",
                logic=logic,
                conditions=len(rule.conditions),
                matched=result.matched,
                explanation=result.explanation
            )
        return result

    def evaluate_object(
        self,
        rule: Rule,
        obj: Any,
        cancel_token: Optional[CancelSignal] = None,
    ) -> Result:
        """Convert ``obj`` with from_struct, then evaluate."""
        return self.evaluate(rule, from_struct(obj), cancel_token)

    def _evaluate(self, rule: Rule, data: Optional[Mapping], cancel_token: Optional[CancelSignal]) -> Result:
        check_cancelled(cancel_token)

        if not rule.conditions:
            return Result(matched=True)

        if rule.logic == Logic.OR:
            for condition in rule.conditions:
                matched, explanation = self._evaluate_condition(condition, data, cancel_token)
                if matched:
                    return Result(matched=True, explanation=explanation)
            return Result(matched=False, explanation=NO_CONDITIONS_MET)

        for condition in rule.conditions:
            matched, explanation = self._evaluate_condition(condition, data, cancel_token)
            if not matched:
                return Result(matched=False, explanation=explanation)
        return Result(matched=True, explanation=ALL_CONDITIONS_MET)

    def _evaluate_condition(
        self,
        condition: Condition,
        data: Optional[Mapping],
        cancel_token: Optional[CancelSignal],
    ) -> Tuple[bool, str]:
        check_cancelled(cancel_token)

        value, found = resolve(data, condition.field)
        if not found:
            raise FieldNotFoundError(condition.field)

        fn = self.registry.lookup(condition.operator)
        if fn is None:
            raise UnknownOperatorError(condition.operator)

        matched = comparator_outcome(condition.operator, fn(value, condition.value))
        return matched, explain(condition, matched)


_default_engine: Optional[Engine] = None
_default_lock = threading.Lock()


def get_default_engine() -> Engine:
    """Process-wide engine, created on first use."""
    global _default_engine
    if _default_engine is None:
        with _default_lock:
            if _default_engine is None:
                _default_engine = Engine()
    return _default_engine


def reset_default_engine() -> None:
    """Drop the process-wide engine; the next call creates a fresh one."""
    global _default_engine
    with _default_lock:
        _default_engine = None


def evaluate(rule: Rule, data: Optional[Mapping], cancel_token: Optional[CancelSignal] = None) -> Result:
    """Evaluate using the default engine."""
    return get_default_engine().evaluate(rule, data, cancel_token)


def evaluate_object(rule: Rule, obj: Any, cancel_token: Optional[CancelSignal] = None) -> Result:
    """Evaluate a structured object using the default engine."""
    return get_default_engine().evaluate_object(rule, obj, cancel_token)


def register(name: Any, fn: OperatorFunc) -> bool:
    """Register an operator on the default engine."""
    return get_default_engine().register(name, fn)
