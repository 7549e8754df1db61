# catalog/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.api.v1.api import api_router
from catalog.core.config import settings
from catalog.core.exceptions import CatalogError
from catalog.core.logging import setup_logging
from catalog.middleware import (
    catalog_error_handler,
    database_error_handler,
    http_error_handler,
    validation_error_handler,
)

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Catalog service starting up (env={settings.ENV})")
    yield
    logger.info("Catalog service shutting down")


app = FastAPI(
    title="Property Catalog Service",
    version="1.0.0",
    description="""
        **Property Catalog Schema Manager**

        Admin API for the property catalog schema.

        ## Features

        * **Attributes**: Global, typed characteristics with enum options
        * **Property Types**: Categories such as Villa or Apartment
        * **Type Scope**: The ordered set of attributes each type exposes
        * **Value Validation**: Typed checking of a property's attribute payload

        ## Authentication

        All `/api/v1` endpoints require an admin JWT via the `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Exception handlers
app.add_exception_handler(CatalogError, catalog_error_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(SQLAlchemyError, database_error_handler)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
def health():
    """Health check endpoint"""
    return {"status": "healthy", "service": "property-catalog-service"}
