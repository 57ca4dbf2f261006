from typing import Any, Callable, Dict, Mapping

from .contract import (
    COLUMN_ID,
    COLUMN_IMAGE,
    COLUMN_NAME,
    COLUMN_PRICE,
    COLUMN_QUANTITY,
    COLUMN_SUPPLIER_EMAIL,
    COLUMN_SUPPLIER_NAME,
    COLUMN_SUPPLIER_PHONE,
    REQUIRED_TEXT_COLUMNS,
    SQLITE_MAX_INTEGER,
    VALUE_COLUMNS,
)
from .exceptions import InvalidArgument

MISSING = object()

_REQUIRED_TEXT_MESSAGES = {
    COLUMN_NAME: "Item requires a name",
    COLUMN_PRICE: "Item requires a price",
    COLUMN_SUPPLIER_NAME: "Item requires a supplier name",
    COLUMN_SUPPLIER_EMAIL: "Item requires a supplier email",
    COLUMN_SUPPLIER_PHONE: "Item requires a supplier phone number",
}


def _required_text(field: str, message: str) -> Callable[[Any], str]:
    def check(value):
        if value is None or value is MISSING:
            raise InvalidArgument(field, message)
        return value if isinstance(value, str) else str(value)
    return check


def _quantity(value):
    if value is MISSING:
        return 0
    if isinstance(value, bool):
        raise InvalidArgument(COLUMN_QUANTITY, "Item requires valid quantity")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidArgument(COLUMN_QUANTITY, "Item requires valid quantity") from None
    if not isinstance(value, int) or not 0 <= value <= SQLITE_MAX_INTEGER:
        raise InvalidArgument(COLUMN_QUANTITY, "Item requires valid quantity")
    return value


def _image(value):
    # Any value is valid, including none at all
    return None if value is MISSING else value


FIELD_VALIDATORS: Dict[str, Callable[[Any], Any]] = {
    field: _required_text(field, _REQUIRED_TEXT_MESSAGES[field]) for field in REQUIRED_TEXT_COLUMNS
}
FIELD_VALIDATORS[COLUMN_QUANTITY] = _quantity
FIELD_VALIDATORS[COLUMN_IMAGE] = _image


def validate_values(values: Mapping[str, Any], partial: bool = False) -> Dict[str, Any]:
    """Validate item field values and return the cleaned mapping.

    With ``partial=False`` every field is checked in column order and absent
    optional fields get their defaults. With ``partial=True`` only the supplied
    fields are checked and nothing is added.
    """
    values = dict(values or {})
    if COLUMN_ID in values:
        raise InvalidArgument(COLUMN_ID, "Item id is assigned by the store and cannot be written")
    unknown = [key for key in values if key not in FIELD_VALIDATORS]
    if unknown:
        raise InvalidArgument(unknown[0], f"Unknown item field {unknown[0]!r}")

    cleaned = {}
    for field in VALUE_COLUMNS:
        if partial and field not in values:
            continue
        cleaned[field] = FIELD_VALIDATORS[field](values.get(field, MISSING))
    return cleaned
