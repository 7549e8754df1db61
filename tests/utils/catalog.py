from typing import List, Optional

from sqlalchemy.orm import Session

from catalog.crud import attribute as crud_attribute
from catalog.crud import property_type as crud_property_type
from catalog.models.attribute import Attribute
from catalog.models.property import Property
from catalog.models.property_type import PropertyType
from catalog.schemas.attribute import AttributeCreate
from catalog.schemas.property_type import PropertyTypeCreate


def create_attribute(
    db: Session,
    name: str,
    data_type: str = "string",
    options: Optional[List[str]] = None,
    is_filterable: bool = False,
) -> Attribute:
    attribute_in = AttributeCreate(
        name=name,
        data_type=data_type,
        is_filterable=is_filterable,
        options=options or [],
    )
    return crud_attribute.create(db, obj_in=attribute_in)


def create_property_type(db: Session, name: str = "Villa") -> PropertyType:
    return crud_property_type.create(db, obj_in=PropertyTypeCreate(name=name))


def create_property(db: Session, type_id: str, title: str = "Test listing") -> Property:
    """
    Properties belong to the listing service; tests insert the row directly.
    """
    prop = Property(type_id=type_id, title=title)
    db.add(prop)
    db.commit()
    db.refresh(prop)
    return prop
