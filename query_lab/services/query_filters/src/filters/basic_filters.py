from __future__ import annotations

from typing import Any, List, Optional

from ...models.filter_models import KeyTransform, RangeValue, Scalar
from ...utils.validation import validate_custom_filter
from .base import FilterStrategy
from .factory import FilterFactory


class SingleFilter(FilterStrategy):
    def parse(self, raw: Optional[str], delimiter: str) -> Any:
        return raw if raw else self.fresh_default()

    def serialize(self, value: Any, delimiter: str) -> Optional[str]:
        return str(value) if value else None

    def matches(self, value: Any, candidate: Scalar) -> bool:
        return value is not None and str(value) == str(candidate)

    @classmethod
    def filter_type(cls) -> str:
        return "single"


class MultipleFilter(FilterStrategy):
    def __init__(self, default_value: Optional[List[Any]] = None, key_transform: Optional[KeyTransform] = None):
        super().__init__([] if default_value is None else list(default_value), key_transform)

    def parse(self, raw: Optional[str], delimiter: str) -> List[Any]:
        return raw.split(delimiter) if raw else self.fresh_default()

    def serialize(self, value: Any, delimiter: str) -> Optional[str]:
        if not isinstance(value, (list, tuple)) or not value:
            return None
        return delimiter.join(str(item) for item in value)

    def matches(self, value: Any, candidate: Scalar) -> bool:
        return isinstance(value, (list, tuple)) and candidate in value

    @classmethod
    def filter_type(cls) -> str:
        return "multiple"


class RangeFilter(FilterStrategy):
    """Inclusive range stored as ``{"from": ..., "to": ...}``.

    ``matches`` compares the candidate against either endpoint; values lying
    strictly between the endpoints do not match.
    """

    def __init__(self, default_value: Optional[RangeValue] = None, key_transform: Optional[KeyTransform] = None):
        if default_value is None:
            default_value = {"from": None, "to": None}
        super().__init__(
            {"from": default_value.get("from"), "to": default_value.get("to")},
            key_transform,
        )

    def parse(self, raw: Optional[str], delimiter: str) -> RangeValue:
        default = self.fresh_default()
        if not raw:
            return default
        parts = raw.split(delimiter)
        start = parts[0]
        end = parts[1] if len(parts) > 1 else None
        return {
            "from": start if start else default["from"],
            "to": end if end else default["to"],
        }

    def serialize(self, value: Any, delimiter: str) -> Optional[str]:
        if not isinstance(value, dict):
            return None
        start, end = value.get("from"), value.get("to")
        if start is None and end is None:
            return None
        return delimiter.join("" if part is None else str(part) for part in (start, end))

    def matches(self, value: Any, candidate: Scalar) -> bool:
        if not isinstance(value, dict):
            return False
        target = str(candidate)
        return any(
            value.get(end) is not None and str(value.get(end)) == target
            for end in ("from", "to")
        )

    @classmethod
    def filter_type(cls) -> str:
        return "range"


class CustomFilter(FilterStrategy):
    """Adapts a caller-supplied object that implements the strategy contract."""

    def __init__(self, strategy: Any, key_transform: Optional[KeyTransform] = None):
        validate_custom_filter(strategy)
        super().__init__(strategy.default_value, key_transform)
        self._strategy = strategy

    @property
    def wrapped(self) -> Any:
        return self._strategy

    def parse(self, raw: Optional[str], delimiter: str) -> Any:
        return self._strategy.parse(raw, delimiter)

    def serialize(self, value: Any, delimiter: str) -> Optional[str]:
        return self._strategy.serialize(value, delimiter)

    def matches(self, value: Any, candidate: Scalar) -> bool:
        return bool(self._strategy.matches(value, candidate))

    @classmethod
    def filter_type(cls) -> str:
        return "custom"


FilterFactory.register(SingleFilter)
FilterFactory.register(MultipleFilter)
FilterFactory.register(RangeFilter)
FilterFactory.register(CustomFilter)
