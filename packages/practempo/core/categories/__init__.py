"""Built-in feature categories and default registry bootstrap."""

from __future__ import annotations

import logging

from practempo.core.categories.guitar import build_guitar_category
from practempo.core.features.registry import FeatureRegistry

logger = logging.getLogger(__name__)


def register_builtin_categories(registry: FeatureRegistry) -> FeatureRegistry:
    """Register every built-in category into ``registry`` and return it."""
    registry.register(build_guitar_category())
    return registry


def build_default_registry() -> FeatureRegistry:
    """Create, populate and freeze a registry with the built-in categories.

    Example:
        >>> registry = build_default_registry()
        >>> registry.get_feature_type_descriptor("Guitar", "Scale").display_name
        'Scale Diagram'
    """
    registry = register_builtin_categories(FeatureRegistry()).freeze()
    logger.debug(f"Default registry ready with {len(registry)} categories")
    return registry


__all__ = ["build_default_registry", "register_builtin_categories"]
