"""Domain error taxonomy."""

from catalog.exceptions.service_error import (
    BusinessRule,
    CategoryServiceException,
    Database,
    DomainServiceException,
    ExternalService,
    NotFound,
    ProductServiceException,
    ServiceError,
    Unknown,
    Validation,
)

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
