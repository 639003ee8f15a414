from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from ...models.filter_models import KeyTransform, Scalar
from ...utils.query_utils import clone_default


def identity(name: str) -> str:
    return name


class FilterStrategy(ABC):
    """Abstract base class for filter strategies.

    This class implements the Strategy pattern for moving one filter value
    between its query string form and its Python form. Each concrete filter
    shape should inherit from this class and implement parse, serialize and
    matches. Strategies are immutable once built and may be shared between
    any number of QueryFilters instances.
    """

    def __init__(self, default_value: Any = None, key_transform: Optional[KeyTransform] = None):
        self._default_value = default_value
        self._key_transform = key_transform or identity

    @property
    def default_value(self) -> Any:
        return self._default_value

    @property
    def key_transform(self) -> KeyTransform:
        return self._key_transform

    def transform_key(self, name: str) -> str:
        """Return the query string key for the filter registered as ``name``."""
        return self._key_transform(name)

    def fresh_default(self) -> Any:
        """Return a copy of the default that shares no mutable state with it."""
        return clone_default(self._default_value)

    @abstractmethod
    def parse(self, raw: Optional[str], delimiter: str) -> Any:
        """Convert a raw query string value into the filter value.

        Args:
            raw: The value from the query string, or None when the key is absent
            delimiter: Separator used for values holding more than one part

        Returns:
            The parsed value, or a copy of the default when raw is missing
        """
        pass

    @abstractmethod
    def serialize(self, value: Any, delimiter: str) -> Optional[str]:
        """Convert a filter value into its query string form.

        Args:
            value: The current filter value
            delimiter: Separator used to join values holding more than one part

        Returns:
            String for the query string, or None when the value is empty
        """
        pass

    @abstractmethod
    def matches(self, value: Any, candidate: Scalar) -> bool:
        """Check whether ``candidate`` is part of the filter value."""
        pass

    @classmethod
    @abstractmethod
    def filter_type(cls) -> str:
        """Return the filter type string identifier.

        The factory registers strategy classes under this name.

        Returns:
            Filter type string
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(default_value={self._default_value!r})"
