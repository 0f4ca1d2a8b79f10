"""
Query cost analysis for GraphQL.

Estimates the cost and nesting depth of a GraphQL query before execution and
rejects queries exceeding the configured limits.
"""

from .analyzer import CostAnalysis, analyze_cost
from .config import CostAnalysisSettings
from .defaults import LIBRARY_DEFAULTS, LIBRARY_VERSION
from .exceptions import CostExceededError, DepthExceededError, QueryCostError
from .middleware import create_cost_middleware, create_graphql_cost_middleware
from .rules import QueryCostValidationRule, create_cost_validation_rule

__version__ = LIBRARY_VERSION

__all__ = [
    "analyze_cost",
    "CostAnalysis",
    "CostAnalysisSettings",
    "LIBRARY_DEFAULTS",
    "QueryCostError",
    "CostExceededError",
    "DepthExceededError",
    "create_cost_middleware",
    "create_graphql_cost_middleware",
    "QueryCostValidationRule",
    "create_cost_validation_rule",
]
