# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Typed marker arguments derived from the fields of an output model."""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Any, Protocol, Union, get_args, get_origin, runtime_checkable

from pydantic.fields import FieldInfo

from markerscan.marker.errors import DefinitionError, UnmarshalError, WrongTypeError

# ###############
# Public Interface
# ###############

OPTIONAL_OPTION = "optional"


@runtime_checkable
class MarkerArgUnmarshaler(Protocol):
    """A type that builds itself from the string form of a marker literal."""

    @classmethod
    def unmarshal_marker_arg(cls, value: str) -> Any: ...


@dataclass
class Argument:
    """One argument of a marker schema.

    Attributes:
        name: The name used in marker text, e.g. ``collectionField``.
        field_name: The attribute name on the output model, e.g. ``collection_field``.
        type: The declared type; for the pointer form this is the wrapped type.
        optional: Whether the argument may be left unset.
        pointer: Whether the field was declared ``T | None``; implies optional.
        value: The bound value.
        is_set: Whether a value has been bound.
    """

    name: str
    field_name: str
    type: Any
    optional: bool = False
    pointer: bool = False
    value: Any = None
    is_set: bool = False

    def __str__(self) -> str:
        if self.optional:
            return f"<optional arg {_type_name(self.type)}>"
        return f"<arg {_type_name(self.type)}>"

    def set_value(self, value: Any) -> None:
        """Convert ``value`` to the declared type and bind it.

        Raises:
            UnmarshalError: If the declared type's ``unmarshal_marker_arg`` rejects the value.
            WrongTypeError: If the value is not convertible to the declared type.
        """
        self.value = _convert(self.type, value)
        self.is_set = True

    def zero_value(self) -> Any:
        """Return the value an unset optional argument inflates to."""
        if self.pointer:
            return None
        if self.type in _ZERO_VALUES:
            return _ZERO_VALUES[self.type]()
        return None


def argument_from_field(field_name: str, info: FieldInfo) -> Argument:
    """Build an argument from a model field.

    The external name is the lower camel case form of the field name unless the
    field carries a ``marker`` tag, e.g. ``Field(json_schema_extra={"marker": "name,optional"})``.

    Raises:
        DefinitionError: If the field's type cannot be bound from a marker literal.
    """
    declared, pointer = _unwrap_optional(info.annotation)
    _check_supported(field_name, declared)

    arg = Argument(
        name=lower_camel_case(field_name),
        field_name=field_name,
        type=declared,
        optional=pointer,
        pointer=pointer,
    )

    tag = _marker_tag(info)
    if tag is not None:
        name, *options = tag.split(",")
        if name:
            arg.name = name
        if OPTIONAL_OPTION in (opt.strip() for opt in options):
            arg.optional = True

    return arg


def lower_camel_case(name: str) -> str:
    """Convert a snake_case attribute name to lowerCamelCase."""
    head, *rest = name.split("_")
    return head[:1].lower() + head[1:] + "".join(part[:1].upper() + part[1:] for part in rest)


# ################
# Implementation
# ################

_SCALAR_TYPES = (bool, int, float, str)

_ZERO_VALUES: dict[Any, Any] = {bool: bool, int: int, float: float, str: str}


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Return the wrapped type and True for ``T | None``, else the annotation and False."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = get_args(annotation)
        others = [a for a in args if a is not type(None)]
        if len(others) == 1 and len(args) == 2:
            return others[0], True
    return annotation, False


def _check_supported(field_name: str, declared: Any) -> None:
    if declared is Any or declared in _SCALAR_TYPES or _is_unmarshaler(declared):
        return
    raise DefinitionError(f"unable to extract type information for field {field_name!r}: unsupported type {declared!r}")


def _is_unmarshaler(declared: Any) -> bool:
    return isinstance(declared, type) and callable(getattr(declared, "unmarshal_marker_arg", None))


def _marker_tag(info: FieldInfo) -> str | None:
    extra = info.json_schema_extra
    if isinstance(extra, dict):
        tag = extra.get("marker")
        if isinstance(tag, str):
            return tag
    return None


def _convert(declared: Any, value: Any) -> Any:
    if _is_unmarshaler(declared):
        if not isinstance(value, str):
            raise UnmarshalError(f"unable to unmarshal arg value, cannot convert {value!r} to string")
        try:
            return declared.unmarshal_marker_arg(value)
        except ValueError as exc:
            raise UnmarshalError(f"unable to unmarshal arg value {value!r}, {exc}") from exc

    if declared is Any:
        return value
    if declared is bool and isinstance(value, bool):
        return value
    if declared is int and isinstance(value, int) and not isinstance(value, bool):
        return value
    if declared is float and isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if declared is str and isinstance(value, str):
        return value

    raise WrongTypeError(f"incorrect type, wanted {_type_name(declared)!r} but received {_type_name(type(value))!r}")


def _type_name(declared: Any) -> str:
    return getattr(declared, "__name__", repr(declared))
