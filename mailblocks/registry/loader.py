"""Load packaged section type and preset YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import (
    FieldDefinition,
    FieldKind,
    RegistryError,
    SectionTypeDefinition,
    SelectOption,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DATA_DIR = Path(__file__).parent / "data"
SECTION_TYPES_PATH = DATA_DIR / "section_types.yaml"
SECTION_PRESETS_PATH = DATA_DIR / "section_presets.yaml"

_TEXT_KINDS = frozenset(
    {
        FieldKind.TEXT,
        FieldKind.TEXTAREA,
        FieldKind.COLOR,
        FieldKind.IMAGE,
        FieldKind.SELECT,
    }
)


def read_yaml_mapping(path: Path) -> dict[str, typ.Any]:
    """Read ``path`` as YAML 1.2 and return its top-level mapping.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    TypeError
        If the document is not a mapping.
    """
    if not path.exists():
        msg = f"Data file '{path}' not found."
        raise FileNotFoundError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


def load_section_types(
    path: Path = SECTION_TYPES_PATH,
) -> dict[str, SectionTypeDefinition]:
    """Parse the section type table at ``path``.

    Parameters
    ----------
    path : Path, optional
        YAML file with a ``types`` mapping of slug to definition. Defaults to
        the table shipped with the package.

    Returns
    -------
    dict[str, SectionTypeDefinition]
        Definitions keyed by slug, in file order.

    Raises
    ------
    RegistryError
        If a type has no fields, repeats a field key, uses an unknown field
        kind, or declares a default that does not fit its kind.
    """
    raw = read_yaml_mapping(path)
    types_raw = raw.get("types") or {}
    if not isinstance(types_raw, dict) or not types_raw:
        msg = f"No section types defined in '{path}'."
        raise RegistryError(msg)

    types: dict[str, SectionTypeDefinition] = {}
    for slug, payload in types_raw.items():
        match payload:
            case dict():
                types[str(slug)] = _build_section_type(str(slug), payload)
            case _:
                msg = f"Section type '{slug}' must be a mapping."
                raise RegistryError(msg)
    return types


def _build_section_type(
    slug: str, payload: cabc.Mapping[str, typ.Any]
) -> SectionTypeDefinition:
    fields_raw = payload.get("fields") or []
    if not isinstance(fields_raw, list) or not fields_raw:
        msg = f"Section type '{slug}' declares no fields."
        raise RegistryError(msg)
    fields: list[FieldDefinition] = []
    seen: set[str] = set()
    for entry in fields_raw:
        field = _build_field(slug, entry)
        if field.key in seen:
            msg = f"Section type '{slug}' repeats field key '{field.key}'."
            raise RegistryError(msg)
        seen.add(field.key)
        fields.append(field)
    return SectionTypeDefinition(
        slug=slug,
        label=str(payload.get("label", slug)),
        icon=str(payload.get("icon", "")),
        has_ai=bool(payload.get("has_ai", False)),
        fields=tuple(fields),
    )


def _build_field(slug: str, entry: object) -> FieldDefinition:
    if not isinstance(entry, dict) or "key" not in entry:
        msg = f"Section type '{slug}' has a field without a key."
        raise RegistryError(msg)
    key = str(entry["key"])
    try:
        kind = FieldKind(entry.get("kind", "text"))
    except ValueError as exc:
        msg = f"Field '{slug}.{key}' has unknown kind {entry.get('kind')!r}."
        raise RegistryError(msg) from exc
    options = tuple(
        SelectOption(value=str(option["value"]), label=str(option.get("label", "")))
        for option in entry.get("options") or []
    )
    if kind is FieldKind.SELECT and not options:
        msg = f"Select field '{slug}.{key}' declares no options."
        raise RegistryError(msg)
    field = FieldDefinition(
        key=key,
        kind=kind,
        default=_freeze(entry.get("default", "")),
        label=str(entry.get("label", key)),
        options=options,
    )
    check_value(field, field.default, where=f"default of '{slug}.{key}'")
    return field


def _freeze(value: typ.Any) -> typ.Any:
    if isinstance(value, list):
        return tuple(dict(item) if isinstance(item, dict) else item for item in value)
    return value


def check_value(field: FieldDefinition, value: typ.Any, *, where: str) -> None:
    """Raise ``RegistryError`` unless ``value`` is assignable to ``field``.

    Parameters
    ----------
    field : FieldDefinition
        Field whose kind constrains the value.
    value : Any
        Default or preset value to check.
    where : str
        Human-readable location used in the error message.
    """
    kind = field.kind
    if kind in _TEXT_KINDS:
        valid = isinstance(value, str)
        if valid and kind is FieldKind.SELECT:
            valid = value in {option.value for option in field.options}
    elif kind is FieldKind.NUMBER:
        valid = isinstance(value, int) and not isinstance(value, bool)
    elif kind is FieldKind.TOGGLE:
        valid = isinstance(value, bool)
    elif kind is FieldKind.LINK_LIST:
        valid = isinstance(value, list | tuple) and all(
            isinstance(item, dict) and "label" in item for item in value
        )
    else:
        valid = isinstance(value, str | list | tuple)
    if not valid:
        msg = f"Invalid {where}: {value!r} is not a valid {kind.value} value."
        raise RegistryError(msg)


__all__ = [
    "SECTION_PRESETS_PATH",
    "SECTION_TYPES_PATH",
    "check_value",
    "load_section_types",
    "read_yaml_mapping",
]
