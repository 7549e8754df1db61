# catalog/schemas/property_type.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from catalog.schemas.attribute import AttributeResponse


class PropertyTypeCreate(BaseModel):
    name: str
    description: Optional[str] = None


class PropertyTypeUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class PropertyTypeResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    attributes: List[AttributeResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# --- Scope replacement ---

class TypeScopeSet(BaseModel):
    """Complete ordered list of attribute ids; position becomes sort_order."""

    attribute_ids: List[str]
