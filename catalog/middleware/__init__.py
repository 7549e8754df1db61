"""Middleware module"""

from catalog.middleware.error_handler import (
    catalog_error_handler,
    database_error_handler,
    http_error_handler,
    validation_error_handler,
)

__all__ = [
    "catalog_error_handler",
    "database_error_handler",
    "http_error_handler",
    "validation_error_handler",
]
