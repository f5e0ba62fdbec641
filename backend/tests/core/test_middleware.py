from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from catalog.core.logging import get_request_id
from catalog.core.middleware import AccessLogMiddleware, RequestIDMiddleware
from catalog.main import app


def _echo_app() -> FastAPI:
    echo = FastAPI()

    @echo.get("/echo")
    async def read_request_id() -> dict[str, str | None]:
        return {"request_id": get_request_id()}

    echo.add_middleware(AccessLogMiddleware)
    echo.add_middleware(RequestIDMiddleware)
    return echo


@pytest.mark.asyncio
async def test_request_id_is_generated_and_bound() -> None:
    transport = ASGITransport(app=_echo_app())
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/echo")

    request_id = response.headers["X-Request-ID"]
    assert len(request_id) == 32
    assert response.json() == {"request_id": request_id}
    assert get_request_id() is None


@pytest.mark.asyncio
async def test_incoming_request_id_is_reused() -> None:
    transport = ASGITransport(app=_echo_app())
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/echo", headers={"X-Request-ID": "upstream-1"})

    assert response.headers["X-Request-ID"] == "upstream-1"
    assert response.json() == {"request_id": "upstream-1"}


@pytest.mark.asyncio
async def test_access_log_records_status_and_duration(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="catalog.access")

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/health")

    assert "X-Request-ID" in response.headers
    records = [record for record in caplog.records if record.name == "catalog.access"]
    assert len(records) == 1
    assert records[0].http_path == "/health"
    assert records[0].status_code == 200
    assert records[0].duration_ms >= 0
