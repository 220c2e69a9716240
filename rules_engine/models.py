"""
Rule data models for the rules engine.

Conditions, rules and results are immutable pydantic models whose JSON form
is the wire format: ``{"conditions": [{"field", "op", "value"}], "logic"}``
for rules and ``{"matched", "explanation"}`` for results.
"""

import copy
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer


class Operator(str, Enum):
    """Built-in comparison operators."""
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    CONTAINS = "contains"
    IN = "in"


class Logic(str, Enum):
    """How the conditions of a rule are combined."""
    AND = "and"
    OR = "or"


def operator_name(operator: Any) -> str:
    """Return the registry key for an operator given as enum or string."""
    if isinstance(operator, Enum):
        return str(operator.value)
    return operator


class Condition(BaseModel):
    """Single field-operator-value check."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: str = Field(..., description="Dot-separated path into the record")
    operator: str = Field(..., alias="op", description="Registered operator name")
    value: Any = Field(None, description="Value the field is compared against")

    @field_validator("operator", mode="before")
    @classmethod
    def _operator_value(cls, value: Any) -> Any:
        return operator_name(value)

    @field_validator("value", mode="before")
    @classmethod
    def _detach_value(cls, value: Any) -> Any:
        # Later changes to the caller's container must not reach the condition
        return copy.deepcopy(value)


class Rule(BaseModel):
    """Declarative rule: ordered conditions combined by AND or OR."""

    model_config = ConfigDict(frozen=True)

    conditions: Tuple[Condition, ...] = Field(default_factory=tuple)
    logic: Logic = Field(Logic.AND, description="Defaults to AND")

    @field_validator("logic", mode="before")
    @classmethod
    def _default_logic(cls, value: Any) -> Any:
        if value is None or value == "":
            return Logic.AND
        if isinstance(value, str) and not isinstance(value, Logic):
            return value.lower()
        return value

    @model_serializer(mode="wrap")
    def _omit_default_logic(self, handler):
        data = handler(self)
        if self.logic == Logic.AND:
            data.pop("logic", None)
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Wire form as a plain dict."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Wire form as a JSON string."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rule":
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, payload: str) -> "Rule":
        return cls.model_validate_json(payload)


class Result(BaseModel):
    """Outcome of evaluating a rule against a record."""

    model_config = ConfigDict(frozen=True)

    matched: bool
    explanation: Optional[str] = None

    @model_serializer(mode="wrap")
    def _omit_empty_explanation(self, handler):
        data = handler(self)
        if not self.explanation:
            data.pop("explanation", None)
        return data

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, payload: str) -> "Result":
        return cls.model_validate_json(payload)
