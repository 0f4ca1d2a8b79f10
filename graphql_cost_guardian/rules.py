"""
GraphQL validation rules enforcing query cost limits.
"""

import logging
from typing import Mapping, Optional, Type, Union

from graphql import DocumentNode, GraphQLError, ValidationRule

from .analyzer import analyze_cost
from .config import CostAnalysisSettings
from .exceptions import QueryCostError

logger = logging.getLogger(__name__)


class QueryCostValidationRule(ValidationRule):
    """
    Validation rule rejecting documents whose cost or depth exceeds the
    configured limits.

    The rule uses the settings resolved from Django settings. Use
    ``create_cost_validation_rule`` to bind explicit settings.
    """

    cost_settings: Optional[CostAnalysisSettings] = None
    schema_name: Optional[str] = None

    def get_cost_settings(self) -> CostAnalysisSettings:
        if self.cost_settings is not None:
            return self.cost_settings
        return CostAnalysisSettings.from_schema(self.schema_name)

    def enter_document(self, node: DocumentNode, *_):
        try:
            analyze_cost(node, self.get_cost_settings())
        except QueryCostError as error:
            logger.warning(f"GraphQL document rejected by cost validation: {error}")
            self.report_error(GraphQLError(str(error), extensions=error.extensions))
        return self.SKIP


def create_cost_validation_rule(
    options: Union[CostAnalysisSettings, Mapping, None] = None,
    schema_name: Optional[str] = None,
) -> Type[QueryCostValidationRule]:
    """
    Create a validation rule bound to the given settings.

    Args:
        options: Cost analysis settings. When omitted they are read from the
            Django settings for ``schema_name``.
        schema_name: Schema used to resolve schema-specific settings

    Returns:
        A ``QueryCostValidationRule`` subclass
    """
    if options is None:
        settings = CostAnalysisSettings.from_schema(schema_name)
    else:
        settings = CostAnalysisSettings.from_options(options)

    return type(
        "BoundQueryCostValidationRule",
        (QueryCostValidationRule,),
        {"cost_settings": settings, "schema_name": schema_name},
    )
