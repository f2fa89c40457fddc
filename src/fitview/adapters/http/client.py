"""HTTP adapter – ApiClient and ApiClientBuilder.

Each :class:`ApiClient` owns one ``httpx.AsyncClient`` whose request and
response hooks are attached when the client is built, so a client never
carries duplicate hooks no matter how many views share it.
"""
from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Union

import httpx

from fitview.kernel.errors import (
    BaseError,
    ExternalServiceError,
    ForbiddenError,
    TimeoutError as AppTimeoutError,
    UnauthorizedError,
)
from fitview.observability.logging import get_logger

logger = get_logger(__name__)

TokenProvider = Callable[[], Union[str, None, Awaitable[Union[str, None]]]]
StatusCallback = Callable[[], Union[None, Awaitable[None]]]


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _decode(response: httpx.Response, url: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ExternalServiceError(service=url, message=f"Invalid JSON from {url}").with_detail(
            url=url, status=response.status_code
        ) from exc


class ApiClient:
    """Thin async httpx wrapper with bearer-token injection and error mapping.

    Build instances with :class:`ApiClientBuilder`.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        *,
        token_provider: TokenProvider | None = None,
        on_unauthorized: StatusCallback | None = None,
        on_forbidden: StatusCallback | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized
        self._on_forbidden = on_forbidden
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [self._attach_token], "response": [self._dispatch_status]},
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def __aenter__(self) -> "ApiClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def _attach_token(self, request: httpx.Request) -> None:
        if self._token_provider is None or "Authorization" in request.headers:
            return
        token = await _resolve(self._token_provider())
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _dispatch_status(self, response: httpx.Response) -> None:
        status = response.status_code
        if status == 401:
            callback = self._on_unauthorized
        elif status == 403:
            callback = self._on_forbidden
        else:
            return
        if callback is None:
            return
        try:
            await _resolve(callback())
        except Exception:
            logger.exception("status_callback_failed", status=status, url=str(response.request.url))

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("POST", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("DELETE", url, **kwargs)

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        return _decode(await self.get(url, **kwargs), url)

    async def post_json(self, url: str, **kwargs: Any) -> Any:
        response = await self.post(url, **kwargs)
        return _decode(response, url) if response.content else None

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.TimeoutException as exc:
            raise AppTimeoutError(f"HTTP request timed out: {method} {url}").with_detail(method=method, url=url) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.info("api_error_response", method=method, url=url, status=status)
            error: BaseError
            if status == 401:
                error = UnauthorizedError(f"Session expired: {method} {url}", cause=exc)
            elif status == 403:
                error = ForbiddenError(f"Access denied: {method} {url}", cause=exc)
            else:
                error = ExternalServiceError(
                    service=url,
                    message=f"HTTP {status} from {method} {url}",
                    status_code=status,
                )
            raise error.with_detail(method=method, url=url, status=status) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=url, message=str(exc)) from exc


class ApiClientBuilder:
    """Collects client configuration, then builds independent clients.

    Example::

        client = (
            ApiClientBuilder.from_settings(settings)
            .with_token_provider(session.access_token)
            .on_unauthorized(session.sign_out)
            .on_forbidden(router.show_forbidden)
            .build()
        )
    """

    def __init__(self, base_url: str = "http://localhost:3000", timeout: float = 10.0) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._token_provider: TokenProvider | None = None
        self._on_unauthorized: StatusCallback | None = None
        self._on_forbidden: StatusCallback | None = None
        self._transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> "ApiClientBuilder":
        return cls(base_url=settings.api_base_url, timeout=settings.request_timeout)

    def with_token_provider(self, provider: TokenProvider) -> "ApiClientBuilder":
        self._token_provider = provider
        return self

    def on_unauthorized(self, callback: StatusCallback) -> "ApiClientBuilder":
        self._on_unauthorized = callback
        return self

    def on_forbidden(self, callback: StatusCallback) -> "ApiClientBuilder":
        self._on_forbidden = callback
        return self

    def with_transport(self, transport: httpx.AsyncBaseTransport) -> "ApiClientBuilder":
        self._transport = transport
        return self

    def build(self) -> ApiClient:
        return ApiClient(
            self._base_url,
            self._timeout,
            token_provider=self._token_provider,
            on_unauthorized=self._on_unauthorized,
            on_forbidden=self._on_forbidden,
            transport=self._transport,
        )


__all__ = ["ApiClient", "ApiClientBuilder", "StatusCallback", "TokenProvider"]
