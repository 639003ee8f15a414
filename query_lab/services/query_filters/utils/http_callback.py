"""
Apply callback that forwards serialized filters to an HTTP endpoint
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class HttpApplyCallback:
    """
    Awaitable apply callback issuing ``GET url?<filters>`` with httpx

    Passing an instance as ``on_apply`` keeps ``QueryFilters.in_flight`` set
    until the response arrives. The last decoded JSON body is kept on
    ``last_result``.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.headers = headers or {}
        self.transport = transport
        self.last_result: Any = None

    async def __call__(self, query: Dict[str, str]) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.get(self.url, params=query, headers=self.headers)
            resp.raise_for_status()
        logger.info(f"Applied filters {query} to {self.url}: HTTP {resp.status_code}")
        self.last_result = resp.json() if resp.content else None
        return self.last_result
