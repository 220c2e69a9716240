"""
Declarative rules engine.

Rules are ordered lists of field/operator/value conditions combined by AND
or OR. The engine resolves each field by dot-path in a data record, applies
the registered operator and short-circuits on the first deciding condition,
returning a Result with a human-readable explanation.

Modules of interest:
- models: Condition, Rule and Result wire models.
- engine: Engine and the process-wide default engine.
- registry: Operator registry used by each engine.
- comparators: Built-in operators and numeric coercion.
"""

from .cancellation import CancellationToken
from .engine import (
    Engine,
    evaluate,
    evaluate_object,
    get_default_engine,
    register,
    reset_default_engine,
)
from .errors import (
    EvaluationCancelledError,
    FieldNotFoundError,
    RecordConversionError,
    RuleEvaluationError,
    TypeMismatchError,
    UnknownOperatorError,
)
from .models import Condition, Logic, Operator, Result, Rule
from .paths import resolve
from .records import from_struct
from .registry import OperatorRegistry

__all__ = [
    "CancellationToken",
    "Condition",
    "Engine",
    "EvaluationCancelledError",
    "FieldNotFoundError",
    "Logic",
    "Operator",
    "OperatorRegistry",
    "RecordConversionError",
    "Result",
    "Rule",
    "RuleEvaluationError",
    "TypeMismatchError",
    "UnknownOperatorError",
    "evaluate",
    "evaluate_object",
    "from_struct",
    "get_default_engine",
    "register",
    "reset_default_engine",
    "resolve",
]
