# catalog/models/property_type.py
import uuid

from sqlalchemy import Column, DateTime, Index, String, Text, func
from sqlalchemy.orm import relationship

from catalog.db.base_class import Base


class PropertyType(Base):
    __tablename__ = "property_types"

    id = Column(
        String, primary_key=True, default=lambda: f"ptype_{uuid.uuid4().hex[:12]}"
    )
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Deleting a type removes its links, never the attributes themselves
    attribute_links = relationship(
        "PropertyTypeAttribute",
        back_populates="property_type",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[PropertyTypeAttribute.sort_order, PropertyTypeAttribute.attribute_id]",
        lazy="selectin",
    )

    @property
    def attributes(self) -> list:
        """Linked attributes in display order (sort_order, then attribute id)."""
        links = sorted(
            self.attribute_links, key=lambda link: (link.sort_order, link.attribute_id)
        )
        return [link.attribute for link in links]

    def __repr__(self) -> str:
        return f"<PropertyType {self.id} {self.name!r}>"


Index("uq_property_types_name_lower", func.lower(PropertyType.name), unique=True)
