# catalog/api/v1/endpoints/attributes.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from catalog.api import deps
from catalog.crud.crud_attribute import attribute as crud_attribute
from catalog.db.session import get_db
from catalog.schemas.attribute import (
    AttributeCreate,
    AttributeResponse,
    AttributeUpdate,
    AttributeUpdateResponse,
    AttributeUsage,
)
from catalog.schemas.token import TokenPayload

router = APIRouter(prefix="/attributes", tags=["Attributes"])


@router.get("", response_model=List[AttributeResponse])
def list_attributes(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Flat list of all attributes with their options, ordered by name."""
    return crud_attribute.get_multi(db)


@router.get("/{attributeId}", response_model=AttributeResponse)
def get_attribute(
    attributeId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    return crud_attribute.get_or_404(db, id=attributeId)


@router.get("/{attributeId}/usage", response_model=AttributeUsage)
def get_attribute_usage(
    attributeId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Types using the attribute and the number of stored property values."""
    return crud_attribute.get_usage(db, id=attributeId)


@router.post(
    "", response_model=AttributeResponse, status_code=status.HTTP_201_CREATED
)
def create_attribute(
    attribute_in: AttributeCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    return crud_attribute.create(db, obj_in=attribute_in)


@router.put("/{attributeId}", response_model=AttributeUpdateResponse)
def update_attribute(
    attributeId: str,
    attribute_in: AttributeUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Update an attribute; hazards for stored property values come back as `warnings`."""
    db_obj, warnings = crud_attribute.update(db, id=attributeId, obj_in=attribute_in)
    response = AttributeUpdateResponse.model_validate(db_obj)
    response.warnings = warnings
    return response


@router.delete("/{attributeId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_attribute(
    attributeId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Delete an unused attribute; 409 with the reason while it is in use."""
    crud_attribute.delete(db, id=attributeId)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
