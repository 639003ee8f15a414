from __future__ import annotations

import pytest

from query_lab.services.query_filters import (
    FilterContractError,
    FilterFactory,
    FilterRegistry,
    bracket_key_transform,
    factory,
)


def test_registry_preserves_insertion_order() -> None:
    registry = FilterRegistry({
        "price": factory.range(),
        "category": factory.single(),
        "brands": factory.multiple(),
    })

    assert registry.names() == ("price", "category", "brands")
    assert list(registry) == ["price", "category", "brands"]
    assert len(registry) == 3
    assert "brands" in registry


def test_registry_is_read_only() -> None:
    registry = FilterRegistry({"category": factory.single()})

    with pytest.raises(TypeError):
        registry["brands"] = factory.multiple()  # type: ignore[index]


def test_registry_rejects_non_strategies() -> None:
    with pytest.raises(FilterContractError, match="factory.custom"):
        FilterRegistry({"category": object()})  # type: ignore[dict-item]


def test_registry_rejects_empty_names() -> None:
    with pytest.raises(FilterContractError):
        FilterRegistry({"": factory.single()})


def test_registry_resolves_transformed_keys() -> None:
    nested = FilterFactory(key_transform=bracket_key_transform("filter"))
    registry = FilterRegistry({"brands": nested.multiple(), "q": factory.single()})

    assert registry.transformed_key("brands") == "filter[brands]"
    assert registry.transformed_key("q") == "q"
