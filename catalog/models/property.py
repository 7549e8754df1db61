# catalog/models/property.py
import uuid

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from catalog.db.base_class import Base


class Property(Base):
    """Listing row owned by the listing service; read here for integrity checks."""

    __tablename__ = "properties"

    id = Column(
        String, primary_key=True, default=lambda: f"prop_{uuid.uuid4().hex[:12]}"
    )
    type_id = Column(
        String,
        ForeignKey("property_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    title = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    property_type = relationship("PropertyType")
    attribute_values = relationship(
        "PropertyAttributeValue",
        back_populates="property",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class PropertyAttributeValue(Base):
    """One typed value per (property, attribute); exactly one value column is set."""

    __tablename__ = "property_attribute_values"

    property_id = Column(
        String,
        ForeignKey("properties.id", ondelete="CASCADE"),
        primary_key=True,
    )
    attribute_id = Column(
        String,
        ForeignKey("attributes.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    )
    value_kind = Column(String, nullable=False)
    string_value = Column(Text, nullable=True)  # string and enum kinds
    integer_value = Column(BigInteger, nullable=True)
    decimal_value = Column(Numeric(18, 4), nullable=True)
    boolean_value = Column(Boolean, nullable=True)

    property = relationship("Property", back_populates="attribute_values")
    attribute = relationship("Attribute")
