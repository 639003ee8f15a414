from __future__ import annotations

# Import and register all filters
from .base import FilterStrategy, identity
from .factory import FilterFactory
from .basic_filters import CustomFilter, MultipleFilter, RangeFilter, SingleFilter

# Pre-configured factory using unmodified filter names as query keys
factory = FilterFactory()

__all__ = [
    "CustomFilter",
    "FilterFactory",
    "FilterStrategy",
    "MultipleFilter",
    "RangeFilter",
    "SingleFilter",
    "factory",
    "identity",
]
