"""Failure translation shared by the catalog domain services."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, ClassVar

from sqlalchemy.exc import SQLAlchemyError

from catalog.clients.base import PeerServiceError
from catalog.exceptions.service_error import (
    Database,
    DomainServiceException,
    Unknown,
)
from catalog.repositories.base import BaseRepository

logger = logging.getLogger("catalog.services")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DomainService:
    """
    Base for services whose failures must leave as one exception type.

    Every store or peer interaction runs inside ``_guard`` so that nothing but
    ``exception_type`` crosses the service boundary.
    """

    exception_type: ClassVar[type[DomainServiceException]]

    def __init__(self, repository: BaseRepository[Any]) -> None:
        self.repository = repository

    def _fail(self, error: Any) -> DomainServiceException:
        return self.exception_type(error)

    @asynccontextmanager
    async def _guard(self, operation: str, *, write: bool = False) -> AsyncIterator[None]:
        """
        Translate failures raised in the block.

        Domain exceptions pass through, store errors become ``Database``,
        peer errors become ``ExternalService`` and anything else ``Unknown``.
        Write blocks roll the session back before re-raising. Completed
        blocks are logged at debug level with their duration.
        """
        start = time.perf_counter()
        try:
            yield
        except DomainServiceException:
            if write:
                await self.repository.rollback()
            raise
        except SQLAlchemyError as exc:
            if write:
                await self.repository.rollback()
            logger.error(
                "Store operation failed",
                extra={"operation": operation, "error_type": type(exc).__name__},
            )
            raise self._fail(Database(operation=operation, cause=str(exc))) from exc
        except PeerServiceError as exc:
            raise self._fail(exc.to_service_error()) from exc
        except Exception as exc:
            if write:
                await self.repository.rollback()
            logger.exception("Unexpected failure", extra={"operation": operation})
            raise self._fail(Unknown(cause=str(exc))) from exc
        else:
            logger.debug(
                "Operation completed",
                extra={
                    "operation": operation,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )


__all__ = ["DomainService", "utcnow"]
