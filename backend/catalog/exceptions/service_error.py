"""Closed error taxonomy shared by the catalog domain services.

Every failure leaving a domain service is exactly one of the variants below,
wrapped in the domain's exception type. Callers decide behaviour from the
variant and its fields only, never from message text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, TypeAlias


@dataclass(frozen=True, slots=True)
class NotFound:
    kind: ClassVar[str] = "not_found"

    entity: str
    id: str

    @property
    def message(self) -> str:
        return f"{self.entity} not found with id: {self.id}"


@dataclass(frozen=True, slots=True)
class Validation:
    kind: ClassVar[str] = "validation"

    field: str
    reason: str

    @property
    def message(self) -> str:
        return f"Validation error for field '{self.field}': {self.reason}"


@dataclass(frozen=True, slots=True)
class BusinessRule:
    kind: ClassVar[str] = "business_rule"

    rule: str
    details: str

    @property
    def message(self) -> str:
        return f"Business rule violation: {self.rule} - {self.details}"


@dataclass(frozen=True, slots=True)
class Database:
    kind: ClassVar[str] = "database"

    operation: str
    cause: str

    @property
    def message(self) -> str:
        return f"Database error during {self.operation}: {self.cause}"


@dataclass(frozen=True, slots=True)
class ExternalService:
    kind: ClassVar[str] = "external_service"

    service: str
    operation: str
    cause: str

    @property
    def message(self) -> str:
        return f"Error calling {self.service} during {self.operation}: {self.cause}"


@dataclass(frozen=True, slots=True)
class Unknown:
    kind: ClassVar[str] = "unknown"

    cause: str

    @property
    def message(self) -> str:
        return f"Unknown error: {self.cause}"


ServiceError: TypeAlias = (
    NotFound | Validation | BusinessRule | Database | ExternalService | Unknown
)


class DomainServiceException(Exception):
    """Single exception type crossing a domain-service boundary."""

    def __init__(self, error: ServiceError) -> None:
        super().__init__(error.message)
        self.error = error

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.error!r})"


class ProductServiceException(DomainServiceException):
    """Failure raised by the product domain service."""


class CategoryServiceException(DomainServiceException):
    """Failure raised by the category domain service."""


__all__ = [
    "BusinessRule",
    "CategoryServiceException",
    "Database",
    "DomainServiceException",
    "ExternalService",
    "NotFound",
    "ProductServiceException",
    "ServiceError",
    "Unknown",
    "Validation",
]
