from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Set, Union

from starlette.datastructures import QueryParams

from ..models.filter_models import ChangeListener, FilterOptions, QueryObject, Scalar
from ..utils.query_utils import first_value, ordered_keys, resolve_query
from .filters.base import FilterStrategy
from .registry import FilterRegistry
from .result import FilterSnapshot

# Configure logging
logger = logging.getLogger(__name__)


class QueryFilters:
    """Current values of a fixed set of filters, kept convertible to a query string.

    Values are parsed once from ``location`` when the object is built. After
    that the query source is only consulted for key order by
    ``serialize_ordered``; changes to it are never read back into values.
    """

    def __init__(
        self,
        filters: Mapping[str, FilterStrategy],
        location: Any = None,
        **options: Any,
    ) -> None:
        self._registry = filters if isinstance(filters, FilterRegistry) else FilterRegistry(filters)
        self._options = FilterOptions(**options)
        self._location = location
        self._in_flight = False
        self._listeners: List[ChangeListener] = []
        self._pending: Set["asyncio.Task[Any]"] = set()

        pairs = resolve_query(location)
        self._values: Dict[str, Any] = {}
        for name, strategy in self._registry.items():
            raw = first_value(pairs, strategy.transform_key(name))
            self._values[name] = strategy.parse(raw, self._options.delimiter)

        self._has_callback = self._options.on_apply is not None
        logger.debug(f"Built filters {list(self._values)} from {len(pairs)} query parameters")

    # -- values -------------------------------------------------------------

    @property
    def registry(self) -> FilterRegistry:
        return self._registry

    @property
    def options(self) -> FilterOptions:
        return self._options

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    processing = in_flight

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        if name not in self._registry:
            raise KeyError(f"Unknown filter '{name}'")
        self._values[name] = value
        self._notify(name, value)

    def __getattr__(self, name: str) -> Any:
        values = self.__dict__.get("_values")
        if values is not None and name in values:
            return values[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_") and name in self.__dict__.get("_values", ()):
            self[name] = value
            return
        super().__setattr__(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __iter__(self) -> Iterator[str]:
        return iter(self._registry)

    def __len__(self) -> int:
        return len(self._registry)

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def data(self) -> Dict[str, Any]:
        """Return a shallow copy of the current filter values."""
        return dict(self._values)

    def snapshot(self) -> FilterSnapshot:
        return FilterSnapshot(values=self.data(), query=self.serialize(), in_flight=self._in_flight)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register ``listener(name, value)`` to run after every write or clear.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, name: str, value: Any) -> None:
        for listener in list(self._listeners):
            listener(name, value)

    # -- serialization ------------------------------------------------------

    def serialize(self, transform_keys: bool = True) -> QueryObject:
        """Serialize every filter in registry order, omitting empty values."""
        query: QueryObject = {}
        for name, strategy in self._registry.items():
            param = strategy.serialize(self._values[name], self._options.delimiter)
            if param:
                key = strategy.transform_key(name) if transform_keys else name
                query[key] = param
        return query

    def serialize_ordered(self, transform_keys: bool = True, query: Any = None) -> QueryObject:
        """Serialize filters following the key order of the current query string.

        Keys found in the query source come first, in the order they appear
        there; the rest follow in registry order.

        Args:
            transform_keys: Use transformed keys in the output
            query: Query source to take the order from; defaults to the
                location the filters were built with

        Returns:
            Same entries as ``serialize`` with a possibly different key order
        """
        serialized = self.serialize(transform_keys)
        source = self._location if query is None else query
        ordered: QueryObject = {}
        for key in ordered_keys(resolve_query(source)):
            if key in serialized:
                ordered[key] = serialized[key]
        for key, value in serialized.items():
            ordered.setdefault(key, value)
        return ordered

    def to_search_params(self) -> QueryParams:
        return QueryParams(self.serialize())

    # -- operations ---------------------------------------------------------

    def apply(self) -> Optional["asyncio.Task[Any]"]:
        """Invoke the apply callback with the serialized filters.

        ``in_flight`` is True while the callback runs. For an awaitable result
        it stays True until the awaitable settles: inside a running event loop
        a task is scheduled and returned, otherwise the awaitable is run to
        completion before returning. Overlapping calls are not serialized.
        """
        callback = self._options.on_apply
        if callback is None:
            logger.warning("Cannot apply filters - apply callback is not set")
            return None

        query = self.serialize_ordered() if self._options.preserve_url_order else self.serialize()
        self._in_flight = True
        try:
            result = callback(query)
        except Exception:
            self._in_flight = False
            raise

        if not inspect.isawaitable(result):
            self._in_flight = False
            return None

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._settle(result))
            return None
        task = asyncio.ensure_future(self._settle(result))
        self._pending.add(task)
        task.add_done_callback(self._finished)
        return task

    async def _settle(self, awaitable: Any) -> Any:
        try:
            return await awaitable
        finally:
            self._in_flight = False

    def _finished(self, task: "asyncio.Task[Any]") -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Apply callback failed: {task.exception()!r}")

    def has(self, name: str, candidate: Scalar) -> bool:
        strategy = self._registry.get(name)
        if strategy is None:
            logger.warning(f"Unknown filter '{name}' - cannot check for {candidate!r}")
            return False
        return strategy.matches(self._values[name], candidate)

    def clear(
        self, names: Union[str, Sequence[str]], trigger_apply: bool = True
    ) -> Optional["asyncio.Task[Any]"]:
        """Reset filters to fresh copies of their defaults.

        Args:
            names: A filter name or a sequence of names
            trigger_apply: Run the apply callback once after resetting

        Returns:
            The task scheduled by ``apply`` for an awaitable callback inside a
            running event loop, otherwise None
        """
        to_clear = [names] if isinstance(names, str) else list(names)
        if not to_clear:
            return None

        cleared = 0
        for name in to_clear:
            strategy = self._registry.get(name)
            if strategy is None:
                logger.warning(f"Unknown filter '{name}' - nothing to clear")
                continue
            value = strategy.fresh_default()
            self._values[name] = value
            self._notify(name, value)
            cleared += 1

        if cleared and trigger_apply and self._has_callback:
            return self.apply()
        return None

    def clear_all(self) -> Optional["asyncio.Task[Any]"]:
        return self.clear(self._registry.names(), True)

    def set_options(self, **options: Any) -> None:
        """Shallow-merge ``options`` into the current options.

        Stored values are not re-parsed; a new delimiter applies from the next
        serialization on.
        """
        merged = {name: getattr(self._options, name) for name in FilterOptions.model_fields}
        merged.update(options)
        self._options = FilterOptions(**merged)
        self._has_callback = self._options.on_apply is not None

    def __repr__(self) -> str:
        return f"QueryFilters({self._values!r})"


def use_filters(filters: Mapping[str, FilterStrategy], location: Any = None, **options: Any) -> QueryFilters:
    """Build a QueryFilters object from a filter mapping and a query source."""
    return QueryFilters(filters, location, **options)
