# catalog/crud/crud_type_scope.py
import logging
from typing import List

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.core.config import settings
from catalog.core.exceptions import (
    CatalogError,
    NotFoundError,
    TransactionError,
    ValidationError,
)
from catalog.models.attribute import Attribute
from catalog.models.property_type import PropertyType
from catalog.models.property_type_attribute import PropertyTypeAttribute

logger = logging.getLogger(__name__)


class CRUDTypeScope:
    """
    Ordered attribute links of a property type.

    Every mutation locks the parent ``property_types`` row first, so concurrent
    saves for one type run one after the other and readers never observe a
    half-applied replacement.
    """

    def _lock_type(self, db: Session, type_id: str) -> PropertyType:
        if db.get_bind().dialect.name == "postgresql":
            # SET LOCAL does not accept bind parameters
            timeout_ms = int(settings.SCOPE_LOCK_TIMEOUT_MS)
            db.execute(text(f"SET LOCAL lock_timeout = {timeout_ms}"))
        type_obj = (
            db.query(PropertyType)
            .filter(PropertyType.id == type_id)
            .populate_existing()
            .with_for_update()
            .first()
        )
        if type_obj is None:
            raise NotFoundError(f"Property type {type_id} not found", resource="property_type")
        return type_obj

    def _validate_ids(self, db: Session, attribute_ids: List[str]) -> None:
        seen = set()
        duplicates = []
        for attribute_id in attribute_ids:
            if attribute_id in seen and attribute_id not in duplicates:
                duplicates.append(attribute_id)
            seen.add(attribute_id)
        if duplicates:
            raise ValidationError(
                f"Duplicate attribute ids in scope: {', '.join(duplicates)}",
                field="attribute_ids",
            )

        if not attribute_ids:
            return
        found = {
            row[0]
            for row in db.query(Attribute.id).filter(Attribute.id.in_(attribute_ids)).all()
        }
        missing = [attribute_id for attribute_id in attribute_ids if attribute_id not in found]
        if missing:
            raise ValidationError(
                f"Unknown attribute ids: {', '.join(missing)}",
                field="attribute_ids",
            )

    def _run(self, db: Session, type_id: str, action: str, mutate) -> PropertyType:
        try:
            type_obj = self._lock_type(db, type_id)
            mutate(type_obj)
            db.commit()
        except CatalogError:
            db.rollback()
            raise
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception(f"Failed to {action} for property type {type_id}")
            raise TransactionError(
                f"Could not {action} for this property type; no changes were applied.",
                details={"type_id": type_id},
            ) from exc
        db.refresh(type_obj)
        return type_obj

    def set_scope(
        self, db: Session, *, type_id: str, attribute_ids: List[str]
    ) -> PropertyType:
        """
        Replace the full ordered attribute list of a type.

        Position in ``attribute_ids`` becomes ``sort_order``. Calling this twice
        with the same list leaves the same rows behind.
        """
        if db.query(PropertyType.id).filter(PropertyType.id == type_id).first() is None:
            raise NotFoundError(f"Property type {type_id} not found", resource="property_type")
        self._validate_ids(db, attribute_ids)
        wanted = {attribute_id: position for position, attribute_id in enumerate(attribute_ids)}

        def replace(type_obj: PropertyType) -> None:
            retained = [link for link in type_obj.attribute_links if link.attribute_id in wanted]
            for link in list(type_obj.attribute_links):
                if link.attribute_id not in wanted:
                    type_obj.attribute_links.remove(link)
            db.flush()

            # Move retained links clear of the final positions before reusing them
            top = max((link.sort_order for link in retained), default=-1)
            base = max(top + 1, len(attribute_ids))
            for offset, link in enumerate(retained):
                link.sort_order = base + offset
            db.flush()

            linked = {link.attribute_id: link for link in retained}
            for attribute_id, position in wanted.items():
                link = linked.get(attribute_id)
                if link is None:
                    type_obj.attribute_links.append(
                        PropertyTypeAttribute(attribute_id=attribute_id, sort_order=position)
                    )
                else:
                    link.sort_order = position
            db.flush()

        type_obj = self._run(db, type_id, "save the attribute scope", replace)
        logger.info(
            f"Set scope of property type {type_id} to {len(attribute_ids)} attribute(s)"
        )
        return type_obj

    def add_attribute(self, db: Session, *, type_id: str, attribute_id: str) -> PropertyType:
        """Append one attribute after the current last one; no-op if already linked."""
        if db.query(Attribute.id).filter(Attribute.id == attribute_id).first() is None:
            raise NotFoundError(f"Attribute {attribute_id} not found", resource="attribute")

        def append(type_obj: PropertyType) -> None:
            if any(link.attribute_id == attribute_id for link in type_obj.attribute_links):
                return
            last = max((link.sort_order for link in type_obj.attribute_links), default=-1)
            type_obj.attribute_links.append(
                PropertyTypeAttribute(attribute_id=attribute_id, sort_order=last + 1)
            )
            db.flush()

        type_obj = self._run(db, type_id, "add the attribute", append)
        logger.info(f"Linked attribute {attribute_id} to property type {type_id}")
        return type_obj

    def remove_attribute(
        self, db: Session, *, type_id: str, attribute_id: str
    ) -> PropertyType:
        def unlink(type_obj: PropertyType) -> None:
            link = next(
                (candidate for candidate in type_obj.attribute_links
                 if candidate.attribute_id == attribute_id),
                None,
            )
            if link is None:
                raise NotFoundError(
                    f"Attribute {attribute_id} is not configured on property type {type_id}",
                    resource="attribute",
                )
            type_obj.attribute_links.remove(link)
            db.flush()

        type_obj = self._run(db, type_id, "remove the attribute", unlink)
        logger.info(f"Unlinked attribute {attribute_id} from property type {type_id}")
        return type_obj


type_scope = CRUDTypeScope()
