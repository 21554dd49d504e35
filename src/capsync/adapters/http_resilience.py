"""Rate limited async HTTP client with retries for idempotent requests."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes, TimeoutTypes, URLTypes

    from capsync.config.http_resilience import ResilienceConfig, RetryPolicy

log = getLogger(__name__)


class RequestOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    json: object
    headers: HeaderTypes | None
    timeout: TimeoutTypes


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        backoff_jitter=policy.backoff_jitter,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
    )


class ResilientClient:
    """Async client configured from a ``ResilienceConfig``.

    ``transport`` replaces the network transport underneath the retry layer,
    which lets tests plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=config.timeout_seconds,
            headers=dict(config.default_headers or {}),
            event_hooks={"response": list(config.response_hooks)},
            transport=RetryTransport(transport=transport, retry=build_retry(config.retry)),
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        log.debug("%s %s %s", self.config.name, method, url)
        if self._limiter is None:
            return await self._client.request(method, url, **kwargs)
        async with self._limiter:
            return await self._client.request(method, url, **kwargs)

    async def get(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def patch(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)
