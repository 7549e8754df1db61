# catalog/models/attribute.py
import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Index, String, false, func
from sqlalchemy.orm import relationship

from catalog.db.base_class import Base


class AttributeDataType(str, enum.Enum):
    string = "string"
    integer = "integer"
    decimal = "decimal"
    boolean = "boolean"
    enum = "enum"


class Attribute(Base):
    __tablename__ = "attributes"

    id = Column(
        String, primary_key=True, default=lambda: f"attr_{uuid.uuid4().hex[:12]}"
    )
    name = Column(String, nullable=False)
    data_type = Column(String, nullable=False)
    is_filterable = Column(Boolean, nullable=False, default=False, server_default=false())
    unit = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    options = relationship(
        "AttributeOption",
        back_populates="attribute",
        cascade="all, delete-orphan",
        order_by="AttributeOption.sort_order",
        lazy="selectin",
    )

    @property
    def option_values(self) -> list[str]:
        return [opt.option_value for opt in self.options]

    def __repr__(self) -> str:
        return f"<Attribute {self.id} {self.name!r} ({self.data_type})>"


# Names are unique regardless of case ("Pool" and "pool" collide)
Index("uq_attributes_name_lower", func.lower(Attribute.name), unique=True)
