# catalog/api/v1/api.py

from fastapi import APIRouter
from catalog.api.v1.endpoints import (
    attributes,
    properties,
    property_types,
)

api_router = APIRouter()

api_router.include_router(property_types.router)
api_router.include_router(attributes.router)
api_router.include_router(properties.router)
