# catalog/api/v1/endpoints/property_types.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from catalog.api import deps
from catalog.crud.crud_property_type import property_type as crud_type
from catalog.crud.crud_property_value import property_value as crud_value
from catalog.crud.crud_type_scope import type_scope as crud_scope
from catalog.db.session import get_db
from catalog.schemas.attribute_value import AttributeValuesIn, AttributeValuesOut
from catalog.schemas.property_type import (
    PropertyTypeCreate,
    PropertyTypeResponse,
    PropertyTypeUpdate,
    TypeScopeSet,
)
from catalog.schemas.token import TokenPayload

router = APIRouter(prefix="/types", tags=["Property Types"])


@router.get("", response_model=List[PropertyTypeResponse])
def list_types(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """List all property types, each with its ordered attributes."""
    return crud_type.get_multi(db)


@router.get("/{typeId}", response_model=PropertyTypeResponse)
def get_type(
    typeId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    return crud_type.get_or_404(db, id=typeId)


@router.post(
    "", response_model=PropertyTypeResponse, status_code=status.HTTP_201_CREATED
)
def create_type(
    type_in: PropertyTypeCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    return crud_type.create(db, obj_in=type_in)


@router.put("/{typeId}", response_model=PropertyTypeResponse)
def update_type(
    typeId: str,
    type_in: PropertyTypeUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    return crud_type.update(db, id=typeId, obj_in=type_in)


@router.delete("/{typeId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_type(
    typeId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Delete a type and its attribute links. The attributes are kept."""
    crud_type.delete(db, id=typeId)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{typeId}/scope", response_model=PropertyTypeResponse)
def set_type_scope(
    typeId: str,
    scope_in: TypeScopeSet,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Replace the type's attribute list; list position becomes display order (idempotent)."""
    return crud_scope.set_scope(db, type_id=typeId, attribute_ids=scope_in.attribute_ids)


@router.put("/{typeId}/attributes/{attributeId}", response_model=PropertyTypeResponse)
def add_type_attribute(
    typeId: str,
    attributeId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    return crud_scope.add_attribute(db, type_id=typeId, attribute_id=attributeId)


@router.delete("/{typeId}/attributes/{attributeId}", response_model=PropertyTypeResponse)
def remove_type_attribute(
    typeId: str,
    attributeId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    return crud_scope.remove_attribute(db, type_id=typeId, attribute_id=attributeId)


@router.post("/{typeId}/validate", response_model=AttributeValuesOut)
def validate_attribute_values(
    typeId: str,
    values_in: AttributeValuesIn,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Check a property's dynamic attributes against the type and normalize them."""
    values = crud_value.validate_for_type(db, type_id=typeId, payload=values_in.attributes)
    return AttributeValuesOut(type_id=typeId, attributes=values)
