"""Five synchronized number base fields: binary, octal, decimal, hex, custom."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace

from pydevutils._constants import DEFAULT_CUSTOM_BASE
from pydevutils._utils import is_valid_for_base, validate_base
from pydevutils.radix import convert_base

logger = logging.getLogger(__name__)


class FieldKey(enum.StrEnum):
    BINARY = "2"
    OCTAL = "8"
    DECIMAL = "10"
    HEX = "16"
    CUSTOM = "custom"


FIXED_FIELDS = (FieldKey.BINARY, FieldKey.OCTAL, FieldKey.DECIMAL, FieldKey.HEX)

FIELD_LABELS: dict[FieldKey, str] = {
    FieldKey.BINARY: "Base 2 (Binary)",
    FieldKey.OCTAL: "Base 8 (Octal)",
    FieldKey.DECIMAL: "Base 10 (Decimal)",
    FieldKey.HEX: "Base 16 (Hex)",
    FieldKey.CUSTOM: "Select base",
}

FIELD_PLACEHOLDERS: dict[FieldKey, str] = {
    FieldKey.BINARY: "10101",
    FieldKey.OCTAL: "124753",
    FieldKey.DECIMAL: "149281002",
    FieldKey.HEX: "1a2b549f",
    FieldKey.CUSTOM: "",
}

_ATTRS: dict[FieldKey, str] = {
    FieldKey.BINARY: "binary",
    FieldKey.OCTAL: "octal",
    FieldKey.DECIMAL: "decimal",
    FieldKey.HEX: "hexadecimal",
    FieldKey.CUSTOM: "custom",
}


@dataclass(frozen=True)
class BaseValues:
    """One numeric quantity rendered in five bases."""

    binary: str = ""
    octal: str = ""
    decimal: str = ""
    hexadecimal: str = ""
    custom: str = ""
    custom_base: int = DEFAULT_CUSTOM_BASE

    def __post_init__(self) -> None:
        validate_base(self.custom_base)

    def get(self, key: FieldKey | str) -> str:
        return getattr(self, _ATTRS[FieldKey(key)])

    def effective_base(self, key: FieldKey | str) -> int:
        key = FieldKey(key)
        if key is FieldKey.CUSTOM:
            return self.custom_base
        return int(key.value)

    def as_dict(self) -> dict[FieldKey, str]:
        return {key: self.get(key) for key in FieldKey}

    @property
    def is_empty(self) -> bool:
        return not any(self.get(key) for key in FieldKey)


def apply_edit(state: BaseValues, key: FieldKey | str, text: str) -> BaseValues:
    """Apply an edit of one field and recompute the others from it.

    Invalid text for the field's base is ignored and ``state`` is
    returned unchanged. Clearing a field clears all five.
    """
    key = FieldKey(key)
    from_base = state.effective_base(key)
    if not is_valid_for_base(text, from_base):
        logger.debug("rejected edit %r for base %d field", text, from_base)
        return state

    if not text:
        return clear_values(state)

    updates: dict[str, str] = {_ATTRS[key]: text}
    for target in FieldKey:
        if target is key:
            continue
        to_base = state.effective_base(target)
        if target is FieldKey.CUSTOM and to_base == from_base:
            continue
        updates[_ATTRS[target]] = convert_base(text, from_base, to_base)
    return replace(state, **updates)


def change_custom_base(state: BaseValues, new_base: int) -> BaseValues:
    """Select a new radix for the custom field and refill it.

    The first non-empty fixed field (in order 2, 8, 10, 16) is the source.
    When all fixed fields are empty the custom value is converted in place.
    Fixed fields are never modified.
    """
    validate_base(new_base)
    for key in FIXED_FIELDS:
        value = state.get(key)
        if value:
            custom = convert_base(value, state.effective_base(key), new_base)
            return replace(state, custom=custom, custom_base=new_base)

    custom = state.custom
    if custom:
        if is_valid_for_base(custom, state.custom_base):
            custom = convert_base(custom, state.custom_base, new_base)
        else:
            logger.debug(
                "dropping custom value %r not valid in base %d",
                custom,
                state.custom_base,
            )
            custom = ""
    return replace(state, custom=custom, custom_base=new_base)


def clear_values(state: BaseValues) -> BaseValues:
    """Clear every field, keeping the selected custom base."""
    return BaseValues(custom_base=state.custom_base)
