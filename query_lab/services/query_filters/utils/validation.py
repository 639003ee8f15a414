"""
Validation utilities for filter strategies
"""

from typing import Any


REQUIRED_METHODS = ("parse", "serialize", "matches")


class FilterContractError(TypeError):
    """Raised when an object does not satisfy the filter strategy contract."""


def validate_custom_filter(candidate: Any) -> None:
    """
    Validate an object supplied to the custom filter constructor

    Args:
        candidate: Object expected to expose default_value, parse, serialize and matches

    Raises:
        FilterContractError: If an attribute is missing or a method is not callable
    """
    if not hasattr(candidate, "default_value"):
        raise FilterContractError(f"Custom filter {candidate!r} must define default_value")
    missing = [name for name in REQUIRED_METHODS if not callable(getattr(candidate, name, None))]
    if missing:
        raise FilterContractError(
            f"Custom filter {candidate!r} must implement: {', '.join(missing)}"
        )


def validate_filter_name(name: Any) -> None:
    """
    Validate a filter name used as a registry key

    Raises:
        FilterContractError: If the name is not a non-empty string
    """
    if not isinstance(name, str) or not name:
        raise FilterContractError(f"Filter names must be non-empty strings, got {name!r}")
