from __future__ import annotations

from types import SimpleNamespace
from urllib.parse import urlsplit

import pytest
from starlette.datastructures import URL, QueryParams

from query_lab.services.query_filters.utils.query_utils import (
    bracket_key_transform,
    clone_default,
    first_value,
    ordered_keys,
    resolve_query,
)


@pytest.mark.parametrize(
    "source",
    [
        "?a=1&b=2",
        "a=1&b=2",
        "https://shop.test/products?a=1&b=2",
        "/products?a=1&b=2",
        b"a=1&b=2",
        {"a": "1", "b": "2"},
        [("a", "1"), ("b", "2")],
        QueryParams("a=1&b=2"),
        URL("https://shop.test/products?a=1&b=2"),
        urlsplit("https://shop.test/products?a=1&b=2"),
        SimpleNamespace(search="?a=1&b=2"),
        lambda: "?a=1&b=2",
    ],
)
def test_resolve_query_sources(source) -> None:
    assert resolve_query(source) == [("a", "1"), ("b", "2")]


def test_resolve_query_empty_sources() -> None:
    assert resolve_query(None) == []
    assert resolve_query("") == []
    assert resolve_query("?") == []


def test_resolve_query_keeps_blank_and_repeated_values() -> None:
    pairs = resolve_query("a=&b=1&b=2")

    assert pairs == [("a", ""), ("b", "1"), ("b", "2")]
    assert first_value(pairs, "b") == "1"
    assert first_value(pairs, "c") is None
    assert ordered_keys(pairs) == ["a", "b"]


def test_resolve_query_does_not_treat_values_as_urls() -> None:
    assert resolve_query("next=https://shop.test/x") == [("next", "https://shop.test/x")]


def test_resolve_query_expands_mapping_lists() -> None:
    assert resolve_query({"b": ["1", "2"], "c": None}) == [("b", "1"), ("b", "2"), ("c", "")]


def test_clone_default() -> None:
    items = ["a"]
    bounds = {"from": ["x"], "to": None}

    cloned_items = clone_default(items)
    cloned_bounds = clone_default(bounds)

    assert cloned_items == items and cloned_items is not items
    assert cloned_bounds == bounds and cloned_bounds["from"] is not bounds["from"]
    assert clone_default("phones") == "phones"
    assert clone_default(None) is None


def test_bracket_key_transform() -> None:
    assert bracket_key_transform("filter")("brands") == "filter[brands]"
