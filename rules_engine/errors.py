"""
Error kinds raised while evaluating rules.

Every error aborts the whole evaluation; callers receive either a complete
Result or one of these exceptions, never both.
"""

from typing import Any, Dict, Optional

from shared.errors import RulesException


class RuleEvaluationError(RulesException):
    """Base class for errors surfaced by Engine.evaluate."""


class FieldNotFoundError(RuleEvaluationError):
    """A condition's field path does not resolve in the record."""

    def __init__(self, field: str):
        self.field = field
        super().__init__("FIELD_NOT_FOUND", f"field '{field}' not found", {"field": field})


class UnknownOperatorError(RuleEvaluationError):
    """A condition references an operator missing from the registry."""

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__("UNKNOWN_OPERATOR", f"unknown operator '{operator}'", {"operator": operator})


class TypeMismatchError(RuleEvaluationError):
    """A comparator received operands it cannot compare."""

    def __init__(self, operator: str, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.operator = operator
        payload = {"operator": operator}
        payload.update(details or {})
        super().__init__("TYPE_MISMATCH", message or f"type mismatch for {operator}", payload)


class EvaluationCancelledError(RuleEvaluationError):
    """The evaluation's cancellation token was triggered."""

    def __init__(self, reason: str = "cancelled"):
        self.reason = reason
        super().__init__("CANCELLED", f"evaluation {reason}", {"reason": reason})


class RecordConversionError(RulesException):
    """An object could not be converted into a data record."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("RECORD_CONVERSION_ERROR", message, details)
