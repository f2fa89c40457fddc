"""Unit tests – ApiClient hooks, error mapping and the builder."""
from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest
import respx

from fitview.adapters.http import ApiClient, ApiClientBuilder
from fitview.config.settings import FitviewSettings
from fitview.kernel.errors import (
    ExternalServiceError,
    ForbiddenError,
    TimeoutError,
    UnauthorizedError,
)

BASE = "http://api.test"


def _builder() -> ApiClientBuilder:
    return ApiClientBuilder(base_url=BASE, timeout=5.0)


async def _get(client: ApiClient, path: str) -> httpx.Response:
    async with client:
        return await client.get(path)


# ---------------------------------------------------------------------------
# Bearer token injection
# ---------------------------------------------------------------------------


class TestTokenInjection:
    @respx.mock
    def test_sync_provider(self) -> None:
        route = respx.get(f"{BASE}/classes").mock(return_value=httpx.Response(200, json=[]))
        client = _builder().with_token_provider(lambda: "abc").build()
        asyncio.run(_get(client, "/classes"))
        assert route.calls.last.request.headers["Authorization"] == "Bearer abc"

    @respx.mock
    def test_async_provider(self) -> None:
        route = respx.get(f"{BASE}/classes").mock(return_value=httpx.Response(200, json=[]))

        async def token() -> str:
            return "xyz"

        client = _builder().with_token_provider(token).build()
        asyncio.run(_get(client, "/classes"))
        assert route.calls.last.request.headers["Authorization"] == "Bearer xyz"

    @respx.mock
    def test_no_token_no_header(self) -> None:
        route = respx.get(f"{BASE}/classes").mock(return_value=httpx.Response(200, json=[]))
        client = _builder().with_token_provider(lambda: None).build()
        asyncio.run(_get(client, "/classes"))
        assert "Authorization" not in route.calls.last.request.headers

    @respx.mock
    def test_explicit_header_is_kept(self) -> None:
        route = respx.get(f"{BASE}/classes").mock(return_value=httpx.Response(200, json=[]))
        client = _builder().with_token_provider(lambda: "abc").build()

        async def run() -> None:
            async with client:
                await client.get("/classes", headers={"Authorization": "Bearer other"})

        asyncio.run(run())
        assert route.calls.last.request.headers["Authorization"] == "Bearer other"


# ---------------------------------------------------------------------------
# Status callbacks and error mapping
# ---------------------------------------------------------------------------


class TestStatusHandling:
    @respx.mock
    def test_unauthorized_runs_callback_then_raises(self) -> None:
        respx.get(f"{BASE}/bookings").mock(return_value=httpx.Response(401))
        calls: list[str] = []
        client = _builder().on_unauthorized(lambda: calls.append("signed_out")).build()
        with pytest.raises(UnauthorizedError):
            asyncio.run(_get(client, "/bookings"))
        assert calls == ["signed_out"]

    @respx.mock
    def test_forbidden_runs_async_callback(self) -> None:
        respx.get(f"{BASE}/newsletter").mock(return_value=httpx.Response(403))
        calls: list[str] = []

        async def forbidden() -> None:
            calls.append("forbidden")

        client = _builder().on_forbidden(forbidden).build()
        with pytest.raises(ForbiddenError):
            asyncio.run(_get(client, "/newsletter"))
        assert calls == ["forbidden"]

    @respx.mock
    def test_failing_callback_does_not_mask_error(self) -> None:
        respx.get(f"{BASE}/bookings").mock(return_value=httpx.Response(401))

        def broken() -> None:
            raise RuntimeError("router gone")

        client = _builder().on_unauthorized(broken).build()
        with pytest.raises(UnauthorizedError):
            asyncio.run(_get(client, "/bookings"))

    @respx.mock
    def test_other_status_skips_callbacks(self) -> None:
        respx.get(f"{BASE}/classes").mock(return_value=httpx.Response(500))
        calls: list[str] = []
        client = (
            _builder()
            .on_unauthorized(lambda: calls.append("401"))
            .on_forbidden(lambda: calls.append("403"))
            .build()
        )
        with pytest.raises(ExternalServiceError) as excinfo:
            asyncio.run(_get(client, "/classes"))
        assert excinfo.value.status_code == 500
        assert excinfo.value.detail == {"method": "GET", "url": "/classes", "status": 500}
        assert calls == []

    @respx.mock
    def test_timeout(self) -> None:
        respx.get(f"{BASE}/classes").mock(side_effect=httpx.ReadTimeout("slow"))
        with pytest.raises(TimeoutError):
            asyncio.run(_get(_builder().build(), "/classes"))

    @respx.mock
    def test_connection_error(self) -> None:
        respx.get(f"{BASE}/classes").mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(ExternalServiceError) as excinfo:
            asyncio.run(_get(_builder().build(), "/classes"))
        assert excinfo.value.status_code is None


# ---------------------------------------------------------------------------
# JSON decoding
# ---------------------------------------------------------------------------


class TestJsonDecoding:
    @respx.mock
    def test_get_json_parses_body(self) -> None:
        respx.get(f"{BASE}/classes").mock(return_value=httpx.Response(200, json=[{"_id": "c1"}]))

        async def run() -> Any:
            async with _builder().build() as client:
                return await client.get_json("/classes")

        assert asyncio.run(run()) == [{"_id": "c1"}]

    @respx.mock
    def test_html_body_maps_to_external_service_error(self) -> None:
        respx.get(f"{BASE}/classes").mock(
            return_value=httpx.Response(
                200, text="<html>maintenance</html>", headers={"Content-Type": "text/html"}
            )
        )

        async def run() -> Any:
            async with _builder().build() as client:
                return await client.get_json("/classes")

        with pytest.raises(ExternalServiceError) as excinfo:
            asyncio.run(run())
        assert excinfo.value.detail == {"url": "/classes", "status": 200}

    @respx.mock
    def test_post_json_empty_body_is_none(self) -> None:
        respx.post(f"{BASE}/community/c1/comments").mock(return_value=httpx.Response(201))

        async def run() -> Any:
            async with _builder().build() as client:
                return await client.post_json("/community/c1/comments", json={"commentText": "hi"})

        assert asyncio.run(run()) is None


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class TestApiClientBuilder:
    def test_from_settings(self) -> None:
        client = ApiClientBuilder.from_settings(FitviewSettings(api_base_url="https://api.gym.io")).build()
        assert client.base_url == "https://api.gym.io/"

    @respx.mock
    def test_each_client_fires_callback_once(self) -> None:
        respx.get(f"{BASE}/bookings").mock(return_value=httpx.Response(401))
        calls: list[int] = []
        builder = _builder().on_unauthorized(lambda: calls.append(1))
        clients = [builder.build() for _ in range(3)]

        async def run() -> None:
            for client in clients:
                with pytest.raises(UnauthorizedError):
                    await _get(client, "/bookings")

        asyncio.run(run())
        assert calls == [1, 1, 1]

    def test_transport_is_used(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"ok": True})

        client = _builder().with_transport(httpx.MockTransport(handler)).build()

        async def run() -> Any:
            async with client:
                return await client.get_json("/ping")

        assert asyncio.run(run()) == {"ok": True}
        assert seen == ["/ping"]
