# catalog/crud/crud_property_value.py
import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.core.exceptions import NotFoundError, TransactionError
from catalog.crud.crud_property_type import property_type as crud_property_type
from catalog.models.property import Property
from catalog.schemas.attribute_value import AttributeValue
from catalog.services import attribute_values

logger = logging.getLogger(__name__)


class CRUDPropertyValue:
    def validate_for_type(
        self, db: Session, *, type_id: str, payload: Dict[str, Any]
    ) -> List[AttributeValue]:
        type_obj = crud_property_type.get_or_404(db, id=type_id)
        return attribute_values.validate_payload(type_obj.attributes, payload)

    def get_property_or_404(self, db: Session, *, id: str) -> Property:
        obj = db.query(Property).filter(Property.id == id).first()
        if obj is None:
            raise NotFoundError(f"Property {id} not found", resource="property")
        return obj

    def get_values(self, db: Session, *, property_id: str) -> List[AttributeValue]:
        prop = self.get_property_or_404(db, id=property_id)
        order = {attr.id: i for i, attr in enumerate(prop.property_type.attributes)}
        rows = sorted(
            prop.attribute_values,
            key=lambda row: (order.get(row.attribute_id, len(order)), row.attribute_id),
        )
        return [attribute_values.from_row(row) for row in rows]

    def set_values(
        self, db: Session, *, property_id: str, payload: Dict[str, Any]
    ) -> List[AttributeValue]:
        """Validate ``payload`` against the property's type and replace its stored values."""
        prop = self.get_property_or_404(db, id=property_id)
        values = attribute_values.validate_payload(prop.property_type.attributes, payload)

        existing = {row.attribute_id: row for row in prop.attribute_values}
        rows = []
        for value in values:
            row = existing.pop(value.attribute_id, None)
            if row is None:
                rows.append(attribute_values.to_row(property_id, value))
            else:
                rows.append(attribute_values.apply_to_row(row, value))

        try:
            prop.attribute_values = rows
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception(f"Failed to store attribute values for property {property_id}")
            raise TransactionError(
                "Could not store the attribute values; no changes were applied.",
                details={"property_id": property_id},
            ) from exc

        logger.info(f"Stored {len(values)} attribute value(s) for property {property_id}")
        return values


property_value = CRUDPropertyValue()
