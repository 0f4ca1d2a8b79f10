"""
Cost analysis settings.

Settings are resolved in the following order, later sources taking
precedence:
1. Library defaults (``LIBRARY_DEFAULTS["cost_settings"]``)
2. Global Django settings (``GRAPHQL_COST_GUARDIAN``)
3. Schema-specific Django settings (``GRAPHQL_COST_GUARDIAN_SCHEMAS[schema_name]``)
"""

import logging
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Union

from django.conf import settings as django_settings
from django.core.exceptions import ImproperlyConfigured

from .defaults import get_default_settings, merge_settings, normalize_option_keys

logger = logging.getLogger(__name__)

Number = Union[int, float]


@dataclass(frozen=True)
class CostAnalysisSettings:
    """Settings controlling how a query's cost is computed and limited."""

    field_costs: Dict[str, Number] = field(default_factory=dict)
    default_cost: Number = 1
    depth_cost_factor: Number = 1
    list_cost_factor: Number = 10
    max_cost: Optional[Number] = None
    max_depth: Optional[Number] = None

    def __post_init__(self):
        if not isinstance(self.field_costs, Mapping):
            raise ImproperlyConfigured(
                f"field_costs must be a mapping, got {type(self.field_costs).__name__}"
            )
        # Detach from the caller's mapping.
        object.__setattr__(self, "field_costs", dict(self.field_costs))

        for name, value in self.field_costs.items():
            if value is not None and not _is_number(value):
                raise ImproperlyConfigured(
                    f"field_costs[{name!r}] must be a number, got {value!r}"
                )

        for name in ("default_cost", "depth_cost_factor", "list_cost_factor"):
            value = getattr(self, name)
            if not _is_number(value):
                raise ImproperlyConfigured(f"{name} must be a number, got {value!r}")

        for name in ("max_cost", "max_depth"):
            value = getattr(self, name)
            if value is not None and not _is_number(value):
                raise ImproperlyConfigured(
                    f"{name} must be a number or None, got {value!r}"
                )

    @classmethod
    def from_options(
        cls, options: Union["CostAnalysisSettings", Mapping, None] = None
    ) -> "CostAnalysisSettings":
        """
        Coerce analysis options into a settings instance.

        Args:
            options: A settings instance, a mapping of option keys (snake_case,
                camelCase or upper-case) or None for the defaults.

        Returns:
            The resolved settings. Unknown option keys are ignored.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise TypeError(
                f"Cost analysis options must be a mapping, got {type(options).__name__}"
            )

        normalized = normalize_option_keys(dict(options))
        valid_fields = {f.name for f in fields(cls)}
        ignored = sorted(set(normalized) - valid_fields)
        if ignored:
            logger.debug(f"Ignoring unknown cost analysis options: {', '.join(ignored)}")

        kwargs = {k: v for k, v in normalized.items() if k in valid_fields}
        if kwargs.get("field_costs") is None:
            kwargs.pop("field_costs", None)
        return cls(**kwargs)

    @classmethod
    def from_schema(cls, schema_name: Optional[str] = None) -> "CostAnalysisSettings":
        """
        Build settings from library defaults and the Django settings.

        Args:
            schema_name: Optional schema name for schema-specific overrides

        Returns:
            The merged settings
        """
        defaults = get_default_settings()
        global_settings = _get_global_settings()
        schema_settings = _get_schema_settings(schema_name)
        merged = merge_settings(defaults, global_settings, schema_settings)
        return cls.from_options(merged)

    def to_dict(self) -> dict[str, Any]:
        return {
            "field_costs": dict(self.field_costs),
            "default_cost": self.default_cost,
            "depth_cost_factor": self.depth_cost_factor,
            "list_cost_factor": self.list_cost_factor,
            "max_cost": self.max_cost,
            "max_depth": self.max_depth,
        }


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _get_global_settings() -> dict[str, Any]:
    """Get the GRAPHQL_COST_GUARDIAN block from Django settings."""
    if not django_settings.configured:
        return {}

    config = getattr(django_settings, "GRAPHQL_COST_GUARDIAN", None) or {}
    if not isinstance(config, Mapping):
        raise ImproperlyConfigured("GRAPHQL_COST_GUARDIAN must be a dictionary.")
    return normalize_option_keys(dict(config))


def _get_schema_settings(schema_name: Optional[str]) -> dict[str, Any]:
    """Get schema-specific overrides from GRAPHQL_COST_GUARDIAN_SCHEMAS."""
    if not schema_name or not django_settings.configured:
        return {}

    schemas = getattr(django_settings, "GRAPHQL_COST_GUARDIAN_SCHEMAS", None) or {}
    if not isinstance(schemas, Mapping):
        raise ImproperlyConfigured("GRAPHQL_COST_GUARDIAN_SCHEMAS must be a dictionary.")

    config = schemas.get(schema_name) or {}
    if not isinstance(config, Mapping):
        raise ImproperlyConfigured(
            f"GRAPHQL_COST_GUARDIAN_SCHEMAS[{schema_name!r}] must be a dictionary."
        )
    return normalize_option_keys(dict(config))
