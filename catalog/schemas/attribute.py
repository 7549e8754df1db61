# catalog/schemas/attribute.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from catalog.models.attribute import AttributeDataType


class AttributeCreate(BaseModel):
    name: str
    data_type: AttributeDataType
    is_filterable: bool = False
    unit: Optional[str] = None
    options: List[str] = Field(default_factory=list)


class AttributeUpdate(BaseModel):
    name: Optional[str] = None
    data_type: Optional[AttributeDataType] = None
    is_filterable: Optional[bool] = None
    unit: Optional[str] = None
    options: Optional[List[str]] = None


class AttributeResponse(BaseModel):
    id: str
    name: str
    data_type: AttributeDataType
    is_filterable: bool = False
    unit: Optional[str] = None
    # ORM objects expose ordered option strings as `option_values`
    options: List[str] = Field(default_factory=list, validation_alias="option_values")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "populate_by_name": True}


class AttributeUpdateResponse(AttributeResponse):
    warnings: List[str] = Field(default_factory=list)


# --- Usage report ---

class TypeReference(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class AttributeUsage(BaseModel):
    attribute_id: str
    linked_types: List[TypeReference] = Field(default_factory=list)
    stored_value_count: int = 0
    in_use: bool = False
