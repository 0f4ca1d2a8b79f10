import pytest
from graphql import parse, validate

from graphql_cost_guardian import QueryCostValidationRule, create_cost_validation_rule
from tests.schema import schema

pytestmark = pytest.mark.unit


def _validate(query, rule):
    return validate(schema.graphql_schema, parse(query), [rule])


def test_valid_document_has_no_errors():
    rule = create_cost_validation_rule({"max_cost": 3, "max_depth": 2})
    assert _validate("query { user { name email } }", rule) == []


def test_reports_cost_error():
    rule = create_cost_validation_rule({"max_cost": 2})
    errors = _validate("query { user { name email } }", rule)

    assert len(errors) == 1
    assert errors[0].message == "Query cost 3 exceeds maximum allowed cost 2"
    assert errors[0].extensions == {"code": "COST_EXCEEDED", "cost": 3, "max_cost": 2}


def test_reports_depth_error():
    rule = create_cost_validation_rule({"maxDepth": 2})
    errors = _validate("query { user { posts { title } } }", rule)

    assert len(errors) == 1
    assert errors[0].extensions == {"code": "DEPTH_EXCEEDED", "depth": 3, "max_depth": 2}


def test_bound_rule_is_subclass():
    rule = create_cost_validation_rule({"max_cost": 2})

    assert issubclass(rule, QueryCostValidationRule)
    assert rule.cost_settings.max_cost == 2


def test_default_rule_reads_django_settings(settings):
    settings.GRAPHQL_COST_GUARDIAN = {"max_cost": 1}
    errors = _validate("query { user { name } }", QueryCostValidationRule)

    assert [error.extensions["code"] for error in errors] == ["COST_EXCEEDED"]


def test_schema_specific_rule(settings):
    settings.GRAPHQL_COST_GUARDIAN = {"max_cost": 1}
    settings.GRAPHQL_COST_GUARDIAN_SCHEMAS = {"admin": {"max_cost": 10}}
    rule = create_cost_validation_rule(schema_name="admin")

    assert _validate("query { user { name } }", rule) == []


def test_logs_rejection(caplog):
    rule = create_cost_validation_rule({"max_cost": 1})
    _validate("query { user { name } }", rule)

    assert "rejected by cost validation" in caplog.text
