# catalog/models/__init__.py
# Import all models so SQLAlchemy can resolve string-based relationships
# and Base.metadata knows every table.

from catalog.db.base_class import Base
from catalog.models.attribute import Attribute, AttributeDataType
from catalog.models.attribute_option import AttributeOption
from catalog.models.property_type import PropertyType
from catalog.models.property_type_attribute import PropertyTypeAttribute
from catalog.models.property import Property, PropertyAttributeValue

__all__ = [
    "Base",
    "Attribute",
    "AttributeDataType",
    "AttributeOption",
    "PropertyType",
    "PropertyTypeAttribute",
    "Property",
    "PropertyAttributeValue",
]
