# catalog/crud/crud_attribute.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.core.exceptions import ConflictError, NotFoundError, ValidationError
from catalog.models.attribute import Attribute, AttributeDataType
from catalog.models.attribute_option import AttributeOption
from catalog.models.property import PropertyAttributeValue
from catalog.models.property_type import PropertyType
from catalog.models.property_type_attribute import PropertyTypeAttribute
from catalog.schemas.attribute import (
    AttributeCreate,
    AttributeUpdate,
    AttributeUsage,
    TypeReference,
)

logger = logging.getLogger(__name__)


def clean_name(name: Optional[str], label: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} name is required", field="name")
    return cleaned


def clean_options(data_type: AttributeDataType, options: Optional[List[str]]) -> List[str]:
    """Trim enum options and enforce: enum => at least one distinct value, else none."""
    options = options or []
    if data_type is not AttributeDataType.enum:
        if options:
            raise ValidationError(
                "Options are only allowed for attributes of type 'enum'",
                field="options",
            )
        return []

    cleaned: List[str] = []
    for raw in options:
        value = (raw or "").strip()
        if not value:
            raise ValidationError("Enum options cannot be empty", field="options")
        if value in cleaned:
            raise ValidationError(f"Duplicate enum option '{value}'", field="options")
        cleaned.append(value)
    if not cleaned:
        raise ValidationError(
            "An attribute of type 'enum' needs at least one option", field="options"
        )
    return cleaned


class CRUDAttribute:
    def get(self, db: Session, *, id: str) -> Optional[Attribute]:
        return db.query(Attribute).filter(Attribute.id == id).first()

    def get_or_404(self, db: Session, *, id: str) -> Attribute:
        obj = self.get(db, id=id)
        if obj is None:
            raise NotFoundError(f"Attribute {id} not found", resource="attribute")
        return obj

    def get_multi(self, db: Session) -> List[Attribute]:
        return db.query(Attribute).order_by(func.lower(Attribute.name), Attribute.id).all()

    def _ensure_unique_name(
        self, db: Session, name: str, exclude_id: Optional[str] = None
    ) -> None:
        query = db.query(Attribute).filter(func.lower(Attribute.name) == name.lower())
        if exclude_id:
            query = query.filter(Attribute.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(
                f"An attribute named '{name}' already exists",
                details={"field": "name"},
            )

    def _sync_options(self, db_obj: Attribute, values: List[str]) -> None:
        # Retained values keep their row; leftovers become orphans and are deleted
        existing = {opt.option_value: opt for opt in db_obj.options}
        new_options = []
        for position, value in enumerate(values):
            opt = existing.pop(value, None) or AttributeOption(option_value=value)
            opt.sort_order = position
            new_options.append(opt)
        db_obj.options = new_options

    def _commit(self, db: Session, name: str) -> None:
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            logger.warning(f"Integrity error while saving attribute '{name}': {exc.orig}")
            raise ConflictError(
                f"An attribute named '{name}' already exists",
                details={"field": "name"},
            ) from exc

    def create(self, db: Session, *, obj_in: AttributeCreate) -> Attribute:
        name = clean_name(obj_in.name, "Attribute")
        data_type = AttributeDataType(obj_in.data_type)
        options = clean_options(data_type, obj_in.options)
        self._ensure_unique_name(db, name)

        db_obj = Attribute(
            name=name,
            data_type=data_type.value,
            is_filterable=obj_in.is_filterable,
            unit=(obj_in.unit or "").strip() or None,
        )
        db_obj.options = [
            AttributeOption(option_value=value, sort_order=position)
            for position, value in enumerate(options)
        ]
        db.add(db_obj)
        self._commit(db, name)
        db.refresh(db_obj)
        logger.info(f"Created attribute {db_obj.id} '{name}' ({data_type.value})")
        return db_obj

    def count_stored_values(self, db: Session, *, id: str) -> int:
        return (
            db.query(func.count(PropertyAttributeValue.property_id))
            .filter(PropertyAttributeValue.attribute_id == id)
            .scalar()
            or 0
        )

    def _stored_enum_values(self, db: Session, *, id: str) -> set:
        rows = (
            db.query(PropertyAttributeValue.string_value)
            .filter(
                PropertyAttributeValue.attribute_id == id,
                PropertyAttributeValue.value_kind == AttributeDataType.enum.value,
            )
            .distinct()
            .all()
        )
        return {row[0] for row in rows}

    def update(
        self, db: Session, *, id: str, obj_in: AttributeUpdate
    ) -> Tuple[Attribute, List[str]]:
        """
        Update an attribute in place.

        Returns the attribute and a list of warnings. Renaming, retyping or
        dropping enum options while property values are stored under the
        attribute is allowed, but each such hazard is reported back.
        """
        db_obj = self.get_or_404(db, id=id)
        old_name = db_obj.name
        old_type = AttributeDataType(db_obj.data_type)

        name = clean_name(obj_in.name, "Attribute") if obj_in.name is not None else old_name
        data_type = (
            AttributeDataType(obj_in.data_type) if obj_in.data_type is not None else old_type
        )

        if obj_in.options is not None:
            options = clean_options(data_type, obj_in.options)
        elif data_type is AttributeDataType.enum:
            # Keep the current options; switching to enum requires new ones
            current = db_obj.option_values if old_type is AttributeDataType.enum else []
            options = clean_options(data_type, current)
        else:
            options = []

        if name.lower() != old_name.lower():
            self._ensure_unique_name(db, name, exclude_id=id)

        warnings: List[str] = []
        stored = self.count_stored_values(db, id=id)
        if stored:
            if name != old_name:
                warnings.append(
                    f"Attribute '{old_name}' is renamed to '{name}' while {stored} "
                    f"property value(s) are stored under it."
                )
            if data_type is not old_type:
                warnings.append(
                    f"Data type of '{name}' changed from {old_type.value} to "
                    f"{data_type.value}; {stored} stored property value(s) were "
                    f"written under the old type and need migrating."
                )
            elif data_type is AttributeDataType.enum:
                dropped = sorted(self._stored_enum_values(db, id=id) - set(options))
                if dropped:
                    warnings.append(
                        f"Options removed from '{name}' are still stored on "
                        f"properties: {', '.join(dropped)}."
                    )

        db_obj.name = name
        db_obj.data_type = data_type.value
        if obj_in.is_filterable is not None:
            db_obj.is_filterable = obj_in.is_filterable
        if obj_in.unit is not None:
            db_obj.unit = obj_in.unit.strip() or None
        self._sync_options(db_obj, options)

        db.add(db_obj)
        self._commit(db, name)
        db.refresh(db_obj)

        for warning in warnings:
            logger.warning(f"Attribute {id}: {warning}")
        logger.info(f"Updated attribute {id} '{name}'")
        return db_obj, warnings

    def get_usage(self, db: Session, *, id: str) -> AttributeUsage:
        self.get_or_404(db, id=id)
        linked = (
            db.query(PropertyType)
            .join(PropertyTypeAttribute, PropertyTypeAttribute.type_id == PropertyType.id)
            .filter(PropertyTypeAttribute.attribute_id == id)
            .order_by(PropertyType.name)
            .all()
        )
        stored = self.count_stored_values(db, id=id)
        return AttributeUsage(
            attribute_id=id,
            linked_types=[TypeReference.model_validate(t) for t in linked],
            stored_value_count=stored,
            in_use=bool(linked) or stored > 0,
        )

    def delete(self, db: Session, *, id: str) -> None:
        db_obj = self.get_or_404(db, id=id)
        usage = self.get_usage(db, id=id)
        if usage.in_use:
            reasons = []
            if usage.linked_types:
                names = ", ".join(t.name for t in usage.linked_types)
                reasons.append(f"it is configured on property type(s) {names}")
            if usage.stored_value_count:
                reasons.append(
                    f"{usage.stored_value_count} property value(s) are stored under it"
                )
            raise ConflictError(
                f"Cannot delete attribute '{db_obj.name}': {' and '.join(reasons)}.",
                details={
                    "linked_types": [t.id for t in usage.linked_types],
                    "stored_value_count": usage.stored_value_count,
                },
            )

        db.delete(db_obj)
        try:
            db.commit()
        except IntegrityError as exc:
            # A link or value appeared between the check and the delete
            db.rollback()
            raise ConflictError(
                f"Cannot delete attribute '{db_obj.name}': it is still referenced."
            ) from exc
        logger.info(f"Deleted attribute {id}")


attribute = CRUDAttribute()
