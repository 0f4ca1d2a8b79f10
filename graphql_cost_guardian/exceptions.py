"""
Custom exceptions for query cost analysis.

These faults are raised by the analyzer when a query exceeds a configured
ceiling. They can also be constructed directly, for instance to synthesize
an equivalent failure in tests.
"""

from typing import Any, Optional, Union

Number = Union[int, float]


class QueryCostError(Exception):
    """Base exception for query cost limit violations."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message

    @property
    def extensions(self) -> dict[str, Any]:
        """Payload for the ``extensions`` entry of a GraphQL error."""
        return {"code": self.code}


class CostExceededError(QueryCostError):
    """Raised when the total query cost exceeds the configured maximum."""

    def __init__(self, cost: Number, max_cost: Number):
        super().__init__(
            f"Query cost {cost} exceeds maximum allowed cost {max_cost}",
            code="COST_EXCEEDED",
        )
        self.cost = cost
        self.max_cost = max_cost

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": self.code, "cost": self.cost, "max_cost": self.max_cost}


class DepthExceededError(QueryCostError):
    """Raised when the query nesting depth exceeds the configured maximum."""

    def __init__(self, depth: int, max_depth: Number):
        super().__init__(
            f"Query depth {depth} exceeds maximum allowed depth {max_depth}",
            code="DEPTH_EXCEEDED",
        )
        self.depth = depth
        self.max_depth = max_depth

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": self.code, "depth": self.depth, "max_depth": self.max_depth}
