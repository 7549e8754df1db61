# tests/crud/test_property_value.py

from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.core.exceptions import NotFoundError, TransactionError, ValidationError
from catalog.crud import property_value as crud_value
from catalog.crud import type_scope as crud_scope
from catalog.models.property import PropertyAttributeValue
from catalog.schemas.attribute_value import (
    BooleanValue,
    DecimalValue,
    EnumValue,
    IntegerValue,
)
from tests.utils.catalog import create_attribute, create_property, create_property_type


@pytest.fixture
def villa_schema(db: Session):
    pool = create_attribute(db, "Pool", "boolean")
    surface = create_attribute(db, "Surface", "decimal")
    color = create_attribute(db, "Color", "enum", options=["red", "blue"])
    villa = create_property_type(db, "Villa")
    crud_scope.set_scope(db, type_id=villa.id, attribute_ids=[surface.id, pool.id, color.id])
    return villa, pool, surface, color


def test_validate_for_type_follows_scope_order(db: Session, villa_schema):
    villa, pool, surface, color = villa_schema

    values = crud_value.validate_for_type(
        db,
        type_id=villa.id,
        payload={color.id: "blue", pool.id: "yes", surface.id: "120.5"},
    )

    assert values == [
        DecimalValue(attribute_id=surface.id, value=Decimal("120.5")),
        BooleanValue(attribute_id=pool.id, value=True),
        EnumValue(attribute_id=color.id, value="blue"),
    ]


def test_validate_rejects_attribute_outside_scope(db: Session, villa_schema):
    villa, *_ = villa_schema
    other = create_attribute(db, "Elevator", "boolean")

    with pytest.raises(ValidationError) as exc_info:
        crud_value.validate_for_type(db, type_id=villa.id, payload={other.id: True})

    assert other.id in exc_info.value.message


def test_validate_unknown_type(db: Session):
    with pytest.raises(NotFoundError):
        crud_value.validate_for_type(db, type_id="ptype_missing", payload={})


def test_set_values_replaces_stored_values(db: Session, villa_schema):
    villa, pool, surface, color = villa_schema
    prop = create_property(db, villa.id)

    crud_value.set_values(db, property_id=prop.id, payload={pool.id: True, color.id: "red"})
    crud_value.set_values(db, property_id=prop.id, payload={surface.id: 99, color.id: "blue"})

    rows = {
        row.attribute_id: row
        for row in db.query(PropertyAttributeValue)
        .filter(PropertyAttributeValue.property_id == prop.id)
        .all()
    }
    assert set(rows) == {surface.id, color.id}
    assert rows[color.id].value_kind == "enum"
    assert rows[color.id].string_value == "blue"
    assert rows[surface.id].decimal_value == Decimal("99")

    values = crud_value.get_values(db, property_id=prop.id)
    assert [v.attribute_id for v in values] == [surface.id, color.id]


def test_invalid_payload_keeps_previous_values(db: Session, villa_schema):
    villa, pool, surface, color = villa_schema
    prop = create_property(db, villa.id)
    crud_value.set_values(db, property_id=prop.id, payload={pool.id: False})

    with pytest.raises(ValidationError):
        crud_value.set_values(db, property_id=prop.id, payload={color.id: "green"})

    values = crud_value.get_values(db, property_id=prop.id)
    assert values == [BooleanValue(attribute_id=pool.id, value=False)]


def test_set_values_unknown_property(db: Session):
    with pytest.raises(NotFoundError):
        crud_value.set_values(db, property_id="prop_missing", payload={})


def test_stored_values_read_back_unchanged(db: Session):
    rooms = create_attribute(db, "Rooms", "integer")
    surface = create_attribute(db, "Surface", "decimal")
    villa = create_property_type(db, "Villa")
    crud_scope.set_scope(db, type_id=villa.id, attribute_ids=[rooms.id, surface.id])
    prop = create_property(db, villa.id)

    written = crud_value.set_values(
        db,
        property_id=prop.id,
        payload={rooms.id: 2 ** 63 - 1, surface.id: "1234.5678"},
    )

    assert crud_value.get_values(db, property_id=prop.id) == written


def test_out_of_range_values_are_rejected_before_writing(db: Session):
    rooms = create_attribute(db, "Rooms", "integer")
    surface = create_attribute(db, "Surface", "decimal")
    villa = create_property_type(db, "Villa")
    crud_scope.set_scope(db, type_id=villa.id, attribute_ids=[rooms.id, surface.id])
    prop = create_property(db, villa.id)
    crud_value.set_values(db, property_id=prop.id, payload={rooms.id: 3})

    with pytest.raises(ValidationError):
        crud_value.set_values(db, property_id=prop.id, payload={rooms.id: 10 ** 20})
    with pytest.raises(ValidationError):
        crud_value.set_values(db, property_id=prop.id, payload={surface.id: "1.123456789"})

    assert crud_value.get_values(db, property_id=prop.id) == [
        IntegerValue(attribute_id=rooms.id, value=3)
    ]


def test_failed_write_rolls_back_values(db: Session, villa_schema, monkeypatch):
    villa, pool, surface, color = villa_schema
    prop = create_property(db, villa.id)
    crud_value.set_values(db, property_id=prop.id, payload={pool.id: True})
    prop_id = prop.id

    def failing_flush(*args, **kwargs):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(db, "flush", failing_flush)
    with pytest.raises(TransactionError) as exc_info:
        crud_value.set_values(db, property_id=prop_id, payload={color.id: "red"})
    monkeypatch.undo()

    assert exc_info.value.status_code == 500
    assert crud_value.get_values(db, property_id=prop_id) == [
        BooleanValue(attribute_id=pool.id, value=True)
    ]
