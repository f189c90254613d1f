"""Typed dataclasses describing section types and their field schemas."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class RegistryError(ValueError):
    """Raised when packaged section type or preset data is inconsistent."""


class FieldKind(str, enum.Enum):
    """Semantic kind of a section field, used by editors and validation."""

    TEXT = "text"
    TEXTAREA = "textarea"
    COLOR = "color"
    NUMBER = "number"
    TOGGLE = "toggle"
    SELECT = "select"
    IMAGE = "image"
    LINK_LIST = "link_list"
    ITEM_LIST = "item_list"
    PRODUCT_SELECT = "product_select"


@dc.dataclass(frozen=True, slots=True)
class SelectOption:
    """One choice offered by a ``select`` field."""

    value: str
    label: str


@dc.dataclass(frozen=True, slots=True)
class FieldDefinition:
    """Schema entry for a single section setting."""

    key: str
    kind: FieldKind
    default: typ.Any
    label: str = ""
    options: tuple[SelectOption, ...] = ()

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-serialisable view of the field."""
        payload: dict[str, typ.Any] = {
            "key": self.key,
            "label": self.label,
            "type": self.kind.value,
            "default": self.default,
        }
        if self.options:
            payload["options"] = [
                {"value": option.value, "label": option.label}
                for option in self.options
            ]
        return payload


@dc.dataclass(frozen=True, slots=True)
class SectionTypeDefinition:
    """A registered section type with its ordered field schema."""

    slug: str
    label: str
    icon: str
    has_ai: bool
    fields: tuple[FieldDefinition, ...]

    def defaults(self) -> dict[str, typ.Any]:
        """Return a fresh mapping of field keys to default values."""
        return {field.key: _copy_default(field.default) for field in self.fields}

    def field(self, key: str) -> FieldDefinition | None:
        """Return the field named ``key`` or ``None``."""
        return next((field for field in self.fields if field.key == key), None)


def _copy_default(value: typ.Any) -> typ.Any:
    # Link lists are stored as tuples of mappings; hand callers mutable copies.
    match value:
        case tuple() | list():
            return [dict(item) if isinstance(item, dict) else item for item in value]
        case _:
            return value


__all__ = [
    "FieldDefinition",
    "FieldKind",
    "RegistryError",
    "SectionTypeDefinition",
    "SelectOption",
]
