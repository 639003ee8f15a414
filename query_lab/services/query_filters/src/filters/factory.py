from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from ...models.filter_models import FilterFactoryOptions, KeyTransform, RangeValue
from .base import FilterStrategy, identity


class FilterFactory:
    """Factory for creating filter strategy objects.

    This implements the Factory pattern for creating filter strategy instances
    based on the filter type. Strategy classes are kept in a class-level
    registry which can be extended at runtime. Every strategy created by one
    factory instance shares that instance's key transform, so building a
    second factory is the way to rewrite keys (e.g. ``filter[name]``).
    """

    _registry: Dict[str, Type[FilterStrategy]] = {}

    identity = staticmethod(identity)

    def __init__(
        self,
        key_transform: Optional[KeyTransform] = None,
        options: Optional[FilterFactoryOptions] = None,
    ):
        if key_transform is None and options is not None:
            key_transform = options.key_transform
        self._key_transform = key_transform or identity

    @classmethod
    def from_options(cls, options: Optional[FilterFactoryOptions] = None) -> "FilterFactory":
        """Build a factory from a FilterFactoryOptions record."""
        return cls(options=options)

    @property
    def key_transform(self) -> KeyTransform:
        return self._key_transform

    @classmethod
    def register(cls, filter_strategy: Type[FilterStrategy]) -> None:
        """Register a filter strategy class.

        Args:
            filter_strategy: The filter strategy class to register
        """
        filter_type = filter_strategy.filter_type()
        cls._registry[filter_type] = filter_strategy

    @classmethod
    def is_registered(cls, filter_type: str) -> bool:
        """Check if a filter type is registered.

        Args:
            filter_type: The filter type to check

        Returns:
            True if registered, False otherwise
        """
        return filter_type in cls._registry

    def create(self, filter_type: str, *args: Any) -> FilterStrategy:
        """Create a filter strategy instance sharing this factory's key transform.

        Args:
            filter_type: Registered filter type name
            *args: Positional arguments for the strategy, usually its default

        Returns:
            An instance of the appropriate filter strategy

        Raises:
            ValueError: If the filter type is not registered
        """
        if filter_type not in self._registry:
            raise ValueError(f"Filter type '{filter_type}' is not registered")

        strategy_class = self._registry[filter_type]
        return strategy_class(*args, key_transform=self._key_transform)

    def single(self, default_value: Any = None) -> FilterStrategy:
        return self.create("single", default_value)

    def multiple(self, default_value: Optional[List[Any]] = None) -> FilterStrategy:
        return self.create("multiple", default_value)

    def range(self, default_value: Optional[RangeValue] = None) -> FilterStrategy:
        return self.create("range", default_value)

    def custom(self, strategy: Any) -> FilterStrategy:
        """Wrap a caller-defined strategy and attach this factory's key transform.

        Raises:
            FilterContractError: If the object lacks part of the strategy contract
        """
        return self.create("custom", strategy)
