"""
Integration tests enforcing cost limits on a graphene schema.
"""

import json
import types

import pytest
from django.test import RequestFactory
from graphene_django.views import GraphQLView

from graphql_cost_guardian import create_cost_validation_rule, create_graphql_cost_middleware
from tests.schema import schema

pytestmark = pytest.mark.integration


def _post(view, query):
    request = RequestFactory().post(
        "/graphql/",
        data=json.dumps({"query": query}),
        content_type="application/json",
    )
    response = view(request)
    return json.loads(response.content.decode("utf-8"))


class TestResolverMiddleware:
    def test_allowed_query_executes(self):
        context = types.SimpleNamespace()
        result = schema.execute(
            "query { users(first: 2) { name } }",
            middleware=[create_graphql_cost_middleware({"max_cost": 20})],
            context_value=context,
        )

        assert result.errors is None
        assert result.data == {"users": [{"name": "Ada"}, {"name": "Ada"}]}
        assert context.cost_analysis.cost == 11
        assert context.cost_analysis.fields == {"Query.users": 10, "Users.name": 1}

    def test_expensive_query_is_rejected(self):
        result = schema.execute(
            "query { users(first: 2) { name } }",
            middleware=[create_graphql_cost_middleware({"max_cost": 10})],
        )

        assert result.data == {"users": None}
        assert result.errors[0].message == "Query cost 11 exceeds maximum allowed cost 10"
        assert result.errors[0].extensions["code"] == "COST_EXCEEDED"

    def test_deep_mutation_is_rejected(self):
        result = schema.execute(
            'mutation { createUser(name: "ada") { user { posts { title } } } }',
            middleware=[create_graphql_cost_middleware({"max_depth": 3})],
        )

        assert result.errors[0].extensions == {
            "code": "DEPTH_EXCEEDED",
            "depth": 4,
            "max_depth": 3,
        }


class TestGraphQLView:
    def test_view_accepts_cheap_query(self):
        view = GraphQLView.as_view(
            schema=schema,
            validation_rules=(create_cost_validation_rule({"max_cost": 5}),),
        )

        payload = _post(view, "query { user { name email } }")

        assert "errors" not in payload
        assert payload["data"] == {"user": {"name": "Ada", "email": "ada@example.com"}}

    def test_view_rejects_expensive_query(self):
        view = GraphQLView.as_view(
            schema=schema,
            validation_rules=(create_cost_validation_rule({"max_cost": 2}),),
        )

        payload = _post(view, "query { user { name email } }")

        assert payload["errors"][0]["message"] == (
            "Query cost 3 exceeds maximum allowed cost 2"
        )
        assert payload["errors"][0]["extensions"] == {
            "code": "COST_EXCEEDED",
            "cost": 3,
            "max_cost": 2,
        }
