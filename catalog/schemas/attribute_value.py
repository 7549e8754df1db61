# catalog/schemas/attribute_value.py
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, Field


class StringValue(BaseModel):
    kind: Literal["string"] = "string"
    attribute_id: str
    value: str


class IntegerValue(BaseModel):
    kind: Literal["integer"] = "integer"
    attribute_id: str
    value: int


class DecimalValue(BaseModel):
    kind: Literal["decimal"] = "decimal"
    attribute_id: str
    value: Decimal


class BooleanValue(BaseModel):
    kind: Literal["boolean"] = "boolean"
    attribute_id: str
    value: bool


class EnumValue(BaseModel):
    kind: Literal["enum"] = "enum"
    attribute_id: str
    value: str


AttributeValue = Annotated[
    Union[StringValue, IntegerValue, DecimalValue, BooleanValue, EnumValue],
    Field(discriminator="kind"),
]


class AttributeValuesIn(BaseModel):
    """Dynamic attribute payload keyed by attribute id."""

    attributes: Dict[str, Any] = Field(default_factory=dict)


class AttributeValuesOut(BaseModel):
    type_id: str
    attributes: List[AttributeValue] = Field(default_factory=list)


class PropertyAttributeValuesOut(AttributeValuesOut):
    property_id: str
