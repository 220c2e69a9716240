"""
Integration tests: rules arrive as JSON, records as dicts or objects.
"""

import json
from dataclasses import dataclass

import pytest

import rules_engine
from rules_engine import (
    CancellationToken,
    Engine,
    EvaluationCancelledError,
    FieldNotFoundError,
    Result,
    Rule,
)


SCENARIOS = [
    (
        '{"conditions": [{"field": "status", "op": "eq", "value": "active"}]}',
        {"status": "active"},
        {"matched": True, "explanation": "all conditions met"},
    ),
    (
        '{"conditions": [{"field": "age", "op": "gt", "value": 18},'
        ' {"field": "premium", "op": "eq", "value": true}]}',
        {"age": 17, "premium": True},
        {"matched": False, "explanation": "age gt 18 → false"},
    ),
    (
        '{"conditions": [{"field": "role", "op": "eq", "value": "admin"},'
        ' {"field": "score", "op": "gt", "value": 100}], "logic": "or"}',
        {"role": "user", "score": 150},
        {"matched": True, "explanation": "score gt 100 → true"},
    ),
    (
        '{"conditions": [{"field": "tags", "op": "contains", "value": "go"}]}',
        {"tags": "golang rules"},
        {"matched": True, "explanation": "all conditions met"},
    ),
    (
        '{"conditions": [{"field": "status", "op": "in", "value": ["active", "pending"]}]}',
        {"status": "pending"},
        {"matched": True, "explanation": "all conditions met"},
    ),
    (
        '{"conditions": []}',
        {},
        {"matched": True},
    ),
]


@dataclass
class Customer:
    age: int
    premium: bool
    country: str


@pytest.fixture(autouse=True)
def fresh_default_engine():
    rules_engine.reset_default_engine()
    yield
    rules_engine.reset_default_engine()


@pytest.mark.parametrize("payload,record,expected", SCENARIOS)
def test_json_rule_to_json_result(payload, record, expected):
    """Rules parsed from JSON produce the expected wire result."""
    result = rules_engine.evaluate(Rule.from_json(payload), record)

    assert json.loads(result.to_json()) == expected


def test_missing_field_yields_no_result():
    rule = Rule.from_json('{"conditions": [{"field": "missing.field", "op": "eq", "value": 1}]}')

    with pytest.raises(FieldNotFoundError) as exc_info:
        rules_engine.evaluate(rule, {})

    assert exc_info.value.to_response().details == {"field": "missing.field"}


def test_object_record_with_custom_operator():
    engine = Engine()
    engine.register("one_of_prefix", lambda a, b: any(a.startswith(p) for p in b))
    rule = Rule.from_dict({
        "conditions": [
            {"field": "age", "op": "gte", "value": 21},
            {"field": "premium", "op": "eq", "value": True},
            {"field": "country", "op": "one_of_prefix", "value": ["U", "C"]},
        ],
    })

    assert engine.evaluate_object(rule, Customer(age=30, premium=True, country="US")) == Result(
        matched=True, explanation="all conditions met"
    )
    assert engine.evaluate_object(rule, Customer(age=30, premium=True, country="FR")) == Result(
        matched=False, explanation='country one_of_prefix ["U", "C"] → false'
    )


def test_default_engine_object_evaluation():
    rule = Rule.from_json('{"conditions": [{"field": "age", "op": "eq", "value": 30}]}')

    result = rules_engine.evaluate_object(rule, Customer(age=30, premium=False, country="US"))

    assert result.matched is True


def test_expired_deadline():
    rule = Rule.from_json('{"conditions": [{"field": "status", "op": "eq", "value": "active"}]}')

    with pytest.raises(EvaluationCancelledError):
        rules_engine.evaluate(rule, {"status": "active"}, CancellationToken.with_timeout(0))
