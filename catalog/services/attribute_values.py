"""
Typed attribute values.

Property records carry a dynamic ``attributes`` payload keyed by attribute id.
This module checks such a payload against a property type's scope and turns
each raw JSON value into one member of the ``AttributeValue`` tagged union,
according to the attribute's declared ``data_type``.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List

from catalog.core.exceptions import ValidationError
from catalog.models.attribute import Attribute, AttributeDataType
from catalog.models.property import PropertyAttributeValue
from catalog.schemas.attribute_value import (
    AttributeValue,
    BooleanValue,
    DecimalValue,
    EnumValue,
    IntegerValue,
    StringValue,
)


_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}

# Storage limits: BIGINT and NUMERIC(18, 4)
INTEGER_MIN = -(2 ** 63)
INTEGER_MAX = 2 ** 63 - 1
DECIMAL_SCALE = 4
DECIMAL_MAX_INTEGER_DIGITS = 14


def _invalid(attribute: Attribute, raw: Any, expected: str) -> ValidationError:
    return ValidationError(
        f"Invalid value {raw!r} for attribute '{attribute.name}': expected {expected}",
        field=attribute.id,
    )


def _parse_integer(attribute: Attribute, raw: Any) -> int:
    if isinstance(raw, bool):
        raise _invalid(attribute, raw, "an integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise _invalid(attribute, raw, "an integer")


def _coerce_integer(attribute: Attribute, raw: Any) -> int:
    value = _parse_integer(attribute, raw)
    if not INTEGER_MIN <= value <= INTEGER_MAX:
        raise _invalid(
            attribute, raw, f"an integer between {INTEGER_MIN} and {INTEGER_MAX}"
        )
    return value


def _coerce_decimal(attribute: Attribute, raw: Any) -> Decimal:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise _invalid(attribute, raw, "a decimal number")
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        raise _invalid(attribute, raw, "a decimal number")
    if not value.is_finite():
        raise _invalid(attribute, raw, "a finite decimal number")
    if abs(value) >= Decimal(10) ** DECIMAL_MAX_INTEGER_DIGITS:
        raise _invalid(
            attribute,
            raw,
            f"a decimal number below 10^{DECIMAL_MAX_INTEGER_DIGITS} in magnitude",
        )
    if value != value.quantize(Decimal(1).scaleb(-DECIMAL_SCALE)):
        raise _invalid(
            attribute, raw, f"a decimal number with at most {DECIMAL_SCALE} decimal places"
        )
    return value


def _coerce_boolean(attribute: Attribute, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise _invalid(attribute, raw, "a boolean")


def coerce_value(attribute: Attribute, raw: Any) -> AttributeValue:
    """Validate one raw value against ``attribute`` and wrap it in its tagged type."""
    data_type = AttributeDataType(attribute.data_type)

    if data_type is AttributeDataType.string:
        if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
            raise _invalid(attribute, raw, "a text value")
        return StringValue(attribute_id=attribute.id, value=str(raw).strip())

    if data_type is AttributeDataType.integer:
        return IntegerValue(attribute_id=attribute.id, value=_coerce_integer(attribute, raw))

    if data_type is AttributeDataType.decimal:
        return DecimalValue(attribute_id=attribute.id, value=_coerce_decimal(attribute, raw))

    if data_type is AttributeDataType.boolean:
        return BooleanValue(attribute_id=attribute.id, value=_coerce_boolean(attribute, raw))

    # enum
    options = attribute.option_values
    choice = raw.strip() if isinstance(raw, str) else raw
    if choice not in options:
        raise _invalid(attribute, raw, f"one of {', '.join(options)}")
    return EnumValue(attribute_id=attribute.id, value=choice)


def validate_payload(
    scope: Iterable[Attribute], payload: Dict[str, Any]
) -> List[AttributeValue]:
    """
    Check a dynamic attributes payload against a type's ordered scope.

    Keys must be ids of attributes in the scope; ``None`` values are dropped.
    The result follows the scope order, not the payload order.
    """
    ordered = list(scope)
    by_id = {attribute.id: attribute for attribute in ordered}

    unknown = sorted(key for key in payload if key not in by_id)
    if unknown:
        raise ValidationError(
            f"Attributes not configured for this property type: {', '.join(unknown)}",
            field="attributes",
        )

    values: List[AttributeValue] = []
    for attribute in ordered:
        raw = payload.get(attribute.id)
        if raw is None:
            continue
        values.append(coerce_value(attribute, raw))
    return values


def apply_to_row(row: PropertyAttributeValue, value: AttributeValue) -> PropertyAttributeValue:
    """Write one tagged value into a storage row; exactly one value column is set."""
    row.value_kind = value.kind
    row.string_value = None
    row.integer_value = None
    row.decimal_value = None
    row.boolean_value = None
    if isinstance(value, (StringValue, EnumValue)):
        row.string_value = value.value
    elif isinstance(value, IntegerValue):
        row.integer_value = value.value
    elif isinstance(value, DecimalValue):
        row.decimal_value = value.value
    else:
        row.boolean_value = value.value
    return row


def to_row(property_id: str, value: AttributeValue) -> PropertyAttributeValue:
    row = PropertyAttributeValue(property_id=property_id, attribute_id=value.attribute_id)
    return apply_to_row(row, value)


def from_row(row: PropertyAttributeValue) -> AttributeValue:
    kind = row.value_kind
    if kind == AttributeDataType.string.value:
        return StringValue(attribute_id=row.attribute_id, value=row.string_value)
    if kind == AttributeDataType.enum.value:
        return EnumValue(attribute_id=row.attribute_id, value=row.string_value)
    if kind == AttributeDataType.integer.value:
        return IntegerValue(attribute_id=row.attribute_id, value=row.integer_value)
    if kind == AttributeDataType.decimal.value:
        return DecimalValue(attribute_id=row.attribute_id, value=row.decimal_value)
    return BooleanValue(attribute_id=row.attribute_id, value=row.boolean_value)
