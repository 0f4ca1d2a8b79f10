"""
Default configuration for graphql-cost-guardian.

This module is the single source of truth for every cost analysis option the
library consumes. Django projects override these values through the
``GRAPHQL_COST_GUARDIAN`` and ``GRAPHQL_COST_GUARDIAN_SCHEMAS`` settings.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "graphql-cost-guardian"


# --------------------------------------------------------------------------- #
# Library-wide defaults
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "cost_settings": {
        "field_costs": {},
        "default_cost": 1,
        "depth_cost_factor": 1,
        "list_cost_factor": 10,
        # None leaves the limit unchecked
        "max_cost": None,
        "max_depth": None,
    },
}

# Argument names that mark a field as returning a sized list.
LIST_SIZE_ARGUMENTS = frozenset({"first", "last", "limit"})

# Alternative spellings accepted for each option key.
OPTION_ALIASES: dict[str, str] = {
    "fieldCosts": "field_costs",
    "FIELD_COSTS": "field_costs",
    "defaultCost": "default_cost",
    "DEFAULT_COST": "default_cost",
    "depthCostFactor": "depth_cost_factor",
    "DEPTH_COST_FACTOR": "depth_cost_factor",
    "listCostFactor": "list_cost_factor",
    "LIST_COST_FACTOR": "list_cost_factor",
    "maxCost": "max_cost",
    "MAX_COST": "max_cost",
    "maxDepth": "max_depth",
    "MAX_DEPTH": "max_depth",
}


# --------------------------------------------------------------------------- #
# Helper functions
# --------------------------------------------------------------------------- #
def get_default_settings() -> dict[str, Any]:
    """Return a copy of the cost analysis defaults."""
    defaults = dict(LIBRARY_DEFAULTS["cost_settings"])
    defaults["field_costs"] = dict(defaults["field_costs"])
    return defaults


def normalize_option_keys(options: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase and upper-case option names to their snake_case keys."""
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        normalized[OPTION_ALIASES.get(key, key)] = value
    return normalized


def merge_settings(*settings_dicts: dict[str, Any]) -> dict[str, Any]:
    """
    Merge multiple settings dictionaries with deep merging for nested dicts.
    Later dictionaries override earlier ones.
    """
    result: dict[str, Any] = {}
    for settings_dict in settings_dicts:
        for key, value in settings_dict.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = merge_settings(result[key], value)
            else:
                result[key] = value
    return result
