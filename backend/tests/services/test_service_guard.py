"""Failure translation at the domain-service boundary."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from catalog.clients.base import PeerTransportError
from catalog.exceptions.service_error import (
    CategoryServiceException,
    Database,
    ExternalService,
    NotFound,
    ProductServiceException,
    Unknown,
)
from catalog.services.base import DomainService


class GuardedService(DomainService):
    exception_type = ProductServiceException


@pytest.fixture()
def repository() -> AsyncMock:
    return AsyncMock()


@pytest.fixture()
def service(repository: AsyncMock) -> GuardedService:
    return GuardedService(repository)


@pytest.mark.asyncio
async def test_store_error_becomes_database_and_rolls_back_writes(
    service: GuardedService,
    repository: AsyncMock,
) -> None:
    with pytest.raises(ProductServiceException) as exc_info:
        async with service._guard("save product", write=True):
            raise IntegrityError("INSERT", {}, Exception("constraint failed"))

    error = exc_info.value.error
    assert isinstance(error, Database)
    assert error.operation == "save product"
    assert "constraint failed" in error.cause
    repository.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_reads_do_not_roll_back(service: GuardedService, repository: AsyncMock) -> None:
    with pytest.raises(ProductServiceException):
        async with service._guard("read product"):
            raise IntegrityError("SELECT", {}, Exception("odd"))

    repository.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_peer_error_becomes_external_service(service: GuardedService) -> None:
    with pytest.raises(ProductServiceException) as exc_info:
        async with service._guard("call peer"):
            raise PeerTransportError("inventory-service", "get status", "Read timeout")

    assert exc_info.value.error == ExternalService(
        service="inventory-service",
        operation="get status",
        cause="Read timeout",
    )


@pytest.mark.asyncio
async def test_domain_exceptions_pass_through_unchanged(service: GuardedService) -> None:
    original = CategoryServiceException(NotFound("Category", "c1"))

    with pytest.raises(CategoryServiceException) as exc_info:
        async with service._guard("lookup"):
            raise original

    assert exc_info.value is original


@pytest.mark.asyncio
async def test_anything_else_becomes_unknown(service: GuardedService) -> None:
    with pytest.raises(ProductServiceException) as exc_info:
        async with service._guard("compute"):
            raise ZeroDivisionError("division by zero")

    assert exc_info.value.error == Unknown(cause="division by zero")
    assert isinstance(exc_info.value.__cause__, ZeroDivisionError)


@pytest.mark.asyncio
async def test_cancellation_is_not_translated(
    service: GuardedService,
    repository: AsyncMock,
) -> None:
    with pytest.raises(asyncio.CancelledError):
        async with service._guard("slow write", write=True):
            raise asyncio.CancelledError()

    repository.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_completed_operations_are_timed(
    service: GuardedService,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger="catalog.services")

    async with service._guard("load product"):
        pass

    timed = [record for record in caplog.records if record.message == "Operation completed"]
    assert len(timed) == 1
    assert timed[0].operation == "load product"
    assert timed[0].duration_ms >= 0
