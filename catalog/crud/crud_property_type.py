# catalog/crud/crud_property_type.py
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.core.exceptions import ConflictError, NotFoundError
from catalog.crud.crud_attribute import clean_name
from catalog.models.property import Property
from catalog.models.property_type import PropertyType
from catalog.schemas.property_type import PropertyTypeCreate, PropertyTypeUpdate

logger = logging.getLogger(__name__)


class CRUDPropertyType:
    def get(self, db: Session, *, id: str) -> Optional[PropertyType]:
        return db.query(PropertyType).filter(PropertyType.id == id).first()

    def get_or_404(self, db: Session, *, id: str) -> PropertyType:
        obj = self.get(db, id=id)
        if obj is None:
            raise NotFoundError(f"Property type {id} not found", resource="property_type")
        return obj

    def get_multi(self, db: Session) -> List[PropertyType]:
        return (
            db.query(PropertyType)
            .order_by(func.lower(PropertyType.name), PropertyType.id)
            .all()
        )

    def _ensure_unique_name(
        self, db: Session, name: str, exclude_id: Optional[str] = None
    ) -> None:
        query = db.query(PropertyType).filter(
            func.lower(PropertyType.name) == name.lower()
        )
        if exclude_id:
            query = query.filter(PropertyType.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(
                f"A property type named '{name}' already exists",
                details={"field": "name"},
            )

    def _commit(self, db: Session, name: str) -> None:
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError(
                f"A property type named '{name}' already exists",
                details={"field": "name"},
            ) from exc

    def create(self, db: Session, *, obj_in: PropertyTypeCreate) -> PropertyType:
        name = clean_name(obj_in.name, "Property type")
        self._ensure_unique_name(db, name)
        db_obj = PropertyType(name=name, description=obj_in.description)
        db.add(db_obj)
        self._commit(db, name)
        db.refresh(db_obj)
        logger.info(f"Created property type {db_obj.id} '{name}'")
        return db_obj

    def update(
        self, db: Session, *, id: str, obj_in: PropertyTypeUpdate
    ) -> PropertyType:
        db_obj = self.get_or_404(db, id=id)
        if obj_in.name is not None:
            name = clean_name(obj_in.name, "Property type")
            if name.lower() != db_obj.name.lower():
                self._ensure_unique_name(db, name, exclude_id=id)
            db_obj.name = name
        if obj_in.description is not None:
            db_obj.description = obj_in.description
        db.add(db_obj)
        self._commit(db, db_obj.name)
        db.refresh(db_obj)
        return db_obj

    def count_properties(self, db: Session, *, id: str) -> int:
        return db.query(Property).filter(Property.type_id == id).count()

    def delete(self, db: Session, *, id: str) -> None:
        """Delete a type and its attribute links; attributes themselves survive."""
        db_obj = self.get_or_404(db, id=id)
        in_use = self.count_properties(db, id=id)
        if in_use:
            raise ConflictError(
                f"Cannot delete property type '{db_obj.name}': "
                f"it is used by {in_use} propert{'y' if in_use == 1 else 'ies'}.",
                details={"property_count": in_use},
            )
        db.delete(db_obj)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError(
                f"Cannot delete property type '{db_obj.name}': it is still referenced."
            ) from exc
        logger.info(f"Deleted property type {id}")


property_type = CRUDPropertyType()
