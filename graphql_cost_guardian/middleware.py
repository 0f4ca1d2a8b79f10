"""
Cost analysis middleware.

``create_cost_middleware`` binds a fixed configuration to the analyzer.
``create_graphql_cost_middleware`` builds a graphene resolver middleware that
rejects operations exceeding the configured limits before any root field
resolves.
"""

import logging
from typing import Callable, Mapping, Optional, Union

from graphql import DocumentNode, GraphQLError, GraphQLResolveInfo

from .analyzer import CostAnalysis, analyze_cost
from .config import CostAnalysisSettings
from .exceptions import QueryCostError

logger = logging.getLogger(__name__)

CostOptions = Union[CostAnalysisSettings, Mapping, None]


def create_cost_middleware(
    options: CostOptions = None,
) -> Callable[[Union[str, DocumentNode]], CostAnalysis]:
    """
    Create a reusable cost analysis function.

    Args:
        options: Cost analysis settings shared by every call

    Returns:
        A function analyzing a query with the captured settings
    """
    settings = CostAnalysisSettings.from_options(options)

    def cost_middleware(query: Union[str, DocumentNode]) -> CostAnalysis:
        return analyze_cost(query, settings)

    return cost_middleware


def _resolve_settings(
    options: CostOptions, schema_name: Optional[str]
) -> CostAnalysisSettings:
    if options is None:
        return CostAnalysisSettings.from_schema(schema_name)
    return CostAnalysisSettings.from_options(options)


def create_graphql_cost_middleware(
    options: CostOptions = None, schema_name: Optional[str] = None
):
    """
    Create a graphene resolver middleware enforcing query cost limits.

    Args:
        options: Cost analysis settings. When omitted they are read from the
            Django settings for ``schema_name``.
        schema_name: Schema used to resolve schema-specific settings

    Returns:
        Middleware function
    """
    settings = _resolve_settings(options, schema_name)

    def graphql_cost_middleware(next_middleware, root, info: GraphQLResolveInfo, **args):
        path = getattr(info, "path", None)
        is_root_field = path is None or getattr(path, "prev", None) is None
        if not is_root_field or info.operation is None:
            return next_middleware(root, info, **args)

        fragments = list((getattr(info, "fragments", None) or {}).values())
        document = DocumentNode(definitions=[info.operation] + fragments)
        try:
            analysis = analyze_cost(document, settings)
        except QueryCostError as error:
            operation_name = info.operation.name.value if info.operation.name else None
            logger.warning(
                f"GraphQL operation {operation_name or '<anonymous>'} blocked: {error}"
            )
            raise GraphQLError(
                str(error), info.field_nodes, extensions=error.extensions
            ) from error

        context = info.context
        if isinstance(context, dict):
            context["cost_analysis"] = analysis
        elif context is not None:
            try:
                context.cost_analysis = analysis
            except AttributeError:
                logger.debug("GraphQL context does not accept the cost analysis")

        return next_middleware(root, info, **args)

    return graphql_cost_middleware
