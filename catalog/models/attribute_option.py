# catalog/models/attribute_option.py
import uuid

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from catalog.db.base_class import Base


class AttributeOption(Base):
    __tablename__ = "attribute_options"
    __table_args__ = (
        UniqueConstraint(
            "attribute_id", "option_value", name="uq_attribute_options_value"
        ),
    )

    id = Column(
        String, primary_key=True, default=lambda: f"aopt_{uuid.uuid4().hex[:12]}"
    )
    attribute_id = Column(
        String,
        ForeignKey("attributes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    option_value = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, server_default="0")

    attribute = relationship("Attribute", back_populates="options")
