"""
Query Filters Service - filter state that round-trips through a query string

Supports:
- Single value, multiple value, range and custom filter strategies
- Key rewriting shared by every strategy of a factory (e.g. filter[name])
- Registry-ordered or URL-ordered serialization
- Clearing filters back to isolated copies of their defaults
- An optional apply callback, sync or async, with an in-flight flag
"""

from .models.filter_models import FilterFactoryOptions, FilterOptions, RangeValue
from .src.filters import (
    CustomFilter,
    FilterFactory,
    FilterStrategy,
    MultipleFilter,
    RangeFilter,
    SingleFilter,
    factory,
    identity,
)
from .src.registry import FilterRegistry
from .src.result import FilterSnapshot
from .src.service import QueryFilters, use_filters
from .utils.query_utils import bracket_key_transform
from .utils.validation import FilterContractError

__version__ = "1.0.0"
__author__ = "Query Lab Team"

__all__ = [
    "CustomFilter",
    "FilterContractError",
    "FilterFactory",
    "FilterFactoryOptions",
    "FilterOptions",
    "FilterRegistry",
    "FilterSnapshot",
    "FilterStrategy",
    "MultipleFilter",
    "QueryFilters",
    "RangeFilter",
    "RangeValue",
    "SingleFilter",
    "bracket_key_transform",
    "factory",
    "identity",
    "use_filters",
]
