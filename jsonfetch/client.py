"""Small JSON request helper over httpx.AsyncClient."""

import json
import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, TypeVar

import httpx

from jsonfetch.schemas.envelope import ResultEnvelope

logger = logging.getLogger(__name__)

ResponseInterceptor = Callable[[httpx.Response], object]

T = TypeVar("T")
U = TypeVar("U")


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RequestClient:
    """Composes a base URL, a bearer token supplier and static headers around
    an httpx.AsyncClient, returning every response as a ResultEnvelope."""

    def __init__(
        self,
        base_url: str,
        token: str | Callable[[], str] = "",
        headers: Mapping[str, str] | None = None,
        *,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        if isinstance(token, str):
            self._token: Callable[[], str] = lambda: token
        else:
            self._token = token
        self.headers = dict(headers or {})
        self._response_interceptors: list[ResponseInterceptor] = []
        self._owns_http = http is None
        self.http = http if http is not None else httpx.AsyncClient(timeout=None)

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> None:
        self._response_interceptors.append(interceptor)

    async def get(self, path: str) -> ResultEnvelope[T]:
        return await self._do(Method.GET, path)

    async def post(self, path: str, payload: T) -> ResultEnvelope[U]:
        return await self._do(Method.POST, path, payload)

    async def put(self, path: str, payload: T) -> ResultEnvelope[U]:
        return await self._do(Method.PUT, path, payload)

    async def delete(self, path: str) -> ResultEnvelope[T]:
        return await self._do(Method.DELETE, path)

    async def aclose(self) -> None:
        # An injected client belongs to the caller.
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "RequestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _url(self, path: str) -> str:
        return self.base_url + path

    def _build_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", **self.headers}
        token = self._token()
        if token:
            headers["Authorization"] = token
        return headers

    @staticmethod
    def _supports_body(method: Method) -> bool:
        return method in (Method.POST, Method.PUT)

    def _call_response_interceptors(self, resp: httpx.Response) -> None:
        for interceptor in self._response_interceptors:
            interceptor(resp)

    async def _do(self, method: Method, path: str, payload: Any = None) -> ResultEnvelope[Any]:
        url = self._url(path)
        content = None
        if self._supports_body(method):
            content = json.dumps(payload, separators=(",", ":"), allow_nan=False)

        logger.debug("%s %s", method.value, url)
        try:
            resp = await self.http.request(
                method.value,
                url,
                headers=self._build_headers(),
                content=content,
            )
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method.value, url, e)
            raise
        logger.debug("%s %s -> %d", method.value, url, resp.status_code)

        self._call_response_interceptors(resp)

        return ResultEnvelope(
            status=resp.status_code,
            error=not resp.is_success,
            data=await self._decode(resp),
            raw_response=resp,
        )

    @staticmethod
    async def _decode(resp: httpx.Response) -> Any:
        if resp.status_code == 204:
            return {}
        await resp.aread()
        try:
            return resp.json()
        except ValueError:
            return {}
