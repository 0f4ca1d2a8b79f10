"""
GraphQL query cost analyzer.

The analyzer walks a parsed query document once, depth first, and weighs
every field it meets. Field costs are looked up by a qualified name
(``TypeContext.fieldName``) derived purely from the query's syntax: the
operation keyword gives the root type context and each field's capitalized
name becomes the context of its children. No schema is consulted.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union

from graphql import Visitor, parse, visit
from graphql.language.ast import (
    DocumentNode,
    FieldNode,
    OperationDefinitionNode,
    SelectionSetNode,
)

from .config import CostAnalysisSettings
from .defaults import LIST_SIZE_ARGUMENTS
from .exceptions import CostExceededError, DepthExceededError

logger = logging.getLogger(__name__)

Number = Union[int, float]

UNKNOWN_TYPE_CONTEXT = "Unknown"


@dataclass
class CostAnalysis:
    """Result of a successful cost analysis."""

    cost: Number
    depth: int
    fields: Dict[str, Number] = field(default_factory=dict)


def _capitalize(name: str) -> str:
    # str.capitalize() would lowercase the remaining characters.
    return name[:1].upper() + name[1:]


class _CostVisitor(Visitor):
    """Accumulates cost and depth for a single analysis call."""

    def __init__(self, settings: CostAnalysisSettings):
        super().__init__()
        self.settings = settings
        self.type_stack: List[str] = []
        self.current_depth = 0
        self.max_depth = 0
        self.total_cost: Number = 0
        self.fields: Dict[str, Number] = {}

    def enter_operation_definition(self, node: OperationDefinitionNode, *_):
        operation = node.operation.value if node.operation else "query"
        self.type_stack.append(_capitalize(operation))

    def leave_operation_definition(self, node: OperationDefinitionNode, *_):
        self.type_stack.pop()

    def enter_selection_set(self, node: SelectionSetNode, *_):
        self.current_depth += 1
        self.max_depth = max(self.max_depth, self.current_depth)

        max_depth = self.settings.max_depth
        if max_depth is not None and self.current_depth > max_depth:
            raise DepthExceededError(self.current_depth, max_depth)

    def leave_selection_set(self, node: SelectionSetNode, *_):
        self.current_depth -= 1

    def enter_field(self, node: FieldNode, *_):
        field_name = node.name.value
        parent_type = self.type_stack[-1] if self.type_stack else UNKNOWN_TYPE_CONTEXT
        qualified_name = f"{parent_type}.{field_name}"

        field_cost = self._field_cost(node, qualified_name)
        self.total_cost += field_cost
        self.fields[qualified_name] = self.fields.get(qualified_name, 0) + field_cost

        self.type_stack.append(_capitalize(field_name))

    def leave_field(self, node: FieldNode, *_):
        self.type_stack.pop()

    def _field_cost(self, node: FieldNode, qualified_name: str) -> Number:
        settings = self.settings

        base_cost = settings.field_costs.get(qualified_name)
        if base_cost is None:
            base_cost = settings.default_cost

        if settings.depth_cost_factor == 1:
            depth_multiplier = 1
        else:
            depth_multiplier = settings.depth_cost_factor ** self.current_depth

        list_multiplier = settings.list_cost_factor if self._has_list_argument(node) else 1

        return base_cost * depth_multiplier * list_multiplier

    @staticmethod
    def _has_list_argument(node: FieldNode) -> bool:
        return any(
            argument.name.value in LIST_SIZE_ARGUMENTS
            for argument in (node.arguments or [])
        )


def analyze_cost(
    query: Union[str, DocumentNode],
    options: Union[CostAnalysisSettings, Mapping, None] = None,
) -> CostAnalysis:
    """
    Analyze the cost of a GraphQL query.

    Args:
        query: Query text or an already parsed document
        options: Cost analysis settings, a mapping of options or None for
            the library defaults

    Returns:
        The total cost, the maximum nesting depth and the cost per
        qualified field name

    Raises:
        DepthExceededError: As soon as the nesting depth exceeds ``max_depth``
        CostExceededError: If the total cost exceeds ``max_cost``
        GraphQLSyntaxError: If the query text cannot be parsed
    """
    settings = CostAnalysisSettings.from_options(options)
    document = parse(query) if isinstance(query, str) else query
    if not isinstance(document, DocumentNode):
        raise TypeError(
            f"Expected query text or a DocumentNode, got {type(query).__name__}"
        )

    visitor = _CostVisitor(settings)
    try:
        visit(document, visitor)
    except DepthExceededError as error:
        logger.info(f"Query rejected: {error}")
        raise

    max_cost: Optional[Number] = settings.max_cost
    if max_cost is not None and visitor.total_cost > max_cost:
        error = CostExceededError(visitor.total_cost, max_cost)
        logger.info(f"Query rejected: {error}")
        raise error

    logger.debug(
        f"Query cost analysis: cost={visitor.total_cost}, depth={visitor.max_depth}, "
        f"fields={len(visitor.fields)}"
    )
    return CostAnalysis(
        cost=visitor.total_cost,
        depth=visitor.max_depth,
        fields=visitor.fields,
    )
