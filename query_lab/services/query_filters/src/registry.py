"""Fixed, ordered mapping of filter names to their strategies."""

from __future__ import annotations

from typing import Iterator, Mapping, Tuple

from ..utils.validation import FilterContractError, validate_filter_name
from .filters.base import FilterStrategy


class FilterRegistry(Mapping[str, FilterStrategy]):
    """Read-only registry of filter strategies keyed by filter name.

    Key order is the insertion order of the mapping supplied at construction
    and defines the default serialization order.
    """

    def __init__(self, filters: Mapping[str, FilterStrategy]) -> None:
        entries: dict[str, FilterStrategy] = {}
        for name, strategy in filters.items():
            validate_filter_name(name)
            if not isinstance(strategy, FilterStrategy):
                raise FilterContractError(
                    f"Filter '{name}' must be a FilterStrategy; wrap custom objects with factory.custom()"
                )
            entries[name] = strategy
        self._filters = entries

    def __getitem__(self, name: str) -> FilterStrategy:
        return self._filters[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def names(self) -> Tuple[str, ...]:
        """Return registered names in registry order."""

        return tuple(self._filters)

    def transformed_key(self, name: str) -> str:
        """Return the query string key for ``name``."""

        return self._filters[name].transform_key(name)

    def __repr__(self) -> str:
        return f"FilterRegistry({self._filters!r})"


__all__ = ["FilterRegistry"]
