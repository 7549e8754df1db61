# catalog/models/property_type_attribute.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from catalog.db.base_class import Base


class PropertyTypeAttribute(Base):
    """Ordered link between a property type and one global attribute."""

    __tablename__ = "property_type_attributes"
    __table_args__ = (
        UniqueConstraint("type_id", "sort_order", name="uq_type_attribute_sort_order"),
        CheckConstraint("sort_order >= 0", name="ck_type_attribute_sort_order"),
    )

    type_id = Column(
        String,
        ForeignKey("property_types.id", ondelete="CASCADE"),
        primary_key=True,
    )
    attribute_id = Column(
        String,
        ForeignKey("attributes.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    )
    sort_order = Column(Integer, nullable=False)

    # Relationships
    property_type = relationship("PropertyType", back_populates="attribute_links")
    attribute = relationship("Attribute", lazy="joined")
