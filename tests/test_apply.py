from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from query_lab.services.query_filters import QueryFilters, factory
from query_lab.services.query_filters.utils.http_callback import HttpApplyCallback


def catalog() -> dict:
    return {"category": factory.single(), "brands": factory.multiple()}


@pytest.mark.asyncio
async def test_async_callback_keeps_in_flight_until_settled() -> None:
    release = asyncio.Event()
    calls = []

    async def on_apply(query):
        calls.append(query)
        await release.wait()
        return "done"

    filters = QueryFilters(catalog(), "brands=a,b", on_apply=on_apply)

    task = filters.apply()
    assert task is not None
    assert filters.in_flight is True
    assert filters.processing is True

    await asyncio.sleep(0)
    assert filters.in_flight is True

    release.set()
    assert await task == "done"
    assert filters.in_flight is False
    assert calls == [{"brands": "a,b"}]


@pytest.mark.asyncio
async def test_async_callback_failure_clears_in_flight() -> None:
    async def on_apply(query):
        await asyncio.sleep(0)
        raise RuntimeError("search backend down")

    filters = QueryFilters(catalog(), "category=phones", on_apply=on_apply)

    task = filters.apply()
    assert filters.in_flight is True

    with pytest.raises(RuntimeError, match="search backend down"):
        await task
    assert filters.in_flight is False


@pytest.mark.asyncio
async def test_overlapping_applies_are_not_serialized() -> None:
    gates = [asyncio.Event(), asyncio.Event()]
    started = []

    async def on_apply(query):
        index = len(started)
        started.append(query)
        await gates[index].wait()

    filters = QueryFilters(catalog(), "category=phones", on_apply=on_apply)

    first = filters.apply()
    second = filters.apply()
    await asyncio.sleep(0)
    assert len(started) == 2

    gates[0].set()
    await first
    # The flag follows the latest settlement, even with a call outstanding.
    assert filters.in_flight is False

    gates[1].set()
    await second
    assert filters.in_flight is False


@pytest.mark.asyncio
async def test_values_can_change_while_apply_is_outstanding() -> None:
    release = asyncio.Event()
    calls = []

    async def on_apply(query):
        calls.append(query)
        await release.wait()

    filters = QueryFilters(catalog(), "", on_apply=on_apply)
    filters["category"] = "phones"
    task = filters.apply()

    filters["category"] = "tablets"
    release.set()
    await task

    assert calls == [{"category": "phones"}]
    assert filters["category"] == "tablets"


def test_async_callback_without_running_loop_completes_before_return() -> None:
    observed = []

    async def on_apply(query):
        await asyncio.sleep(0)
        observed.append(filters.in_flight)

    filters = QueryFilters(catalog(), "brands=a", on_apply=on_apply)

    assert filters.apply() is None
    assert observed == [True]
    assert filters.in_flight is False


@pytest.mark.asyncio
async def test_http_apply_callback_forwards_query() -> None:
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"total": 2})

    callback = HttpApplyCallback(
        "http://search.test/products",
        transport=httpx.MockTransport(handler),
    )
    filters = QueryFilters(catalog(), "brands=apple,samsung&category=phones", on_apply=callback)

    task = filters.apply()
    assert filters.in_flight is True

    assert await task == {"total": 2}
    assert filters.in_flight is False
    assert callback.last_result == {"total": 2}
    assert requests[0].url.params["brands"] == "apple,samsung"
    assert list(requests[0].url.params.keys()) == ["brands", "category"]


@pytest.mark.asyncio
async def test_http_apply_callback_raises_on_error_status() -> None:
    callback = HttpApplyCallback(
        "http://search.test/products",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    filters = QueryFilters(catalog(), "brands=apple", on_apply=callback)

    with pytest.raises(httpx.HTTPStatusError):
        await filters.apply()
    assert filters.in_flight is False


@pytest.mark.asyncio
async def test_clear_returns_apply_task_and_logs_failure(caplog: pytest.LogCaptureFixture) -> None:
    async def on_apply(query):
        await asyncio.sleep(0)
        raise RuntimeError("search backend down")

    filters = QueryFilters(catalog(), "brands=a&category=phones", on_apply=on_apply)

    with caplog.at_level(logging.ERROR):
        task = filters.clear("brands")
        assert task is not None
        assert filters.in_flight is True

        with pytest.raises(RuntimeError, match="search backend down"):
            await task
        await asyncio.sleep(0)

    assert filters.in_flight is False
    assert "Apply callback failed" in caplog.text


@pytest.mark.asyncio
async def test_clear_all_returns_apply_task() -> None:
    calls = []

    async def on_apply(query):
        calls.append(query)
        return len(calls)

    filters = QueryFilters(catalog(), "brands=a&category=phones", on_apply=on_apply)

    task = filters.clear_all()

    assert task is not None
    assert await task == 1
    assert calls == [{}]
    assert filters.in_flight is False
