# catalog/api/v1/endpoints/properties.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from catalog.api import deps
from catalog.crud.crud_property_value import property_value as crud_value
from catalog.db.session import get_db
from catalog.schemas.attribute_value import (
    AttributeValuesIn,
    PropertyAttributeValuesOut,
)
from catalog.schemas.token import TokenPayload

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get("/{propertyId}/attributes", response_model=PropertyAttributeValuesOut)
def get_property_attributes(
    propertyId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    prop = crud_value.get_property_or_404(db, id=propertyId)
    values = crud_value.get_values(db, property_id=propertyId)
    return PropertyAttributeValuesOut(
        property_id=propertyId, type_id=prop.type_id, attributes=values
    )


@router.put("/{propertyId}/attributes", response_model=PropertyAttributeValuesOut)
def set_property_attributes(
    propertyId: str,
    values_in: AttributeValuesIn,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Replace a property's attribute values after validating them against its type."""
    values = crud_value.set_values(db, property_id=propertyId, payload=values_in.attributes)
    prop = crud_value.get_property_or_404(db, id=propertyId)
    return PropertyAttributeValuesOut(
        property_id=propertyId, type_id=prop.type_id, attributes=values
    )
