# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Marker schemas: a scope name bound to a pydantic output model."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from markerscan.marker.argument import Argument, argument_from_field
from markerscan.marker.errors import (
    ArgumentNotFoundError,
    DefinitionError,
    MarkerError,
    MissingArgumentsError,
    WrongTypeError,
)

# ###############
# Public Interface
# ###############


@dataclass
class Definition:
    """A named marker schema.

    Attributes:
        name: The scope prefix that selects this schema, e.g. ``+operator-builder:field``.
        output: The model class inflated from the bound arguments.
        fields: Arguments keyed by their external name.
    """

    name: str
    output: type[BaseModel]
    fields: dict[str, Argument] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.name

    def lookup_argument(self, name: str) -> bool:
        """Return True if the schema declares an argument called ``name``."""
        return name in self.fields

    def set_argument(self, name: str, value: Any) -> None:
        """Bind ``value`` to the argument called ``name``.

        Raises:
            ArgumentNotFoundError: If the schema has no such argument.
            WrongTypeError: If the value does not fit the argument's type.
            UnmarshalError: If the argument's type rejects the value.
        """
        arg = self.fields.get(name)
        if arg is None:
            raise ArgumentNotFoundError(f"argument not found {name!r} for marker {self.name}")
        try:
            arg.set_value(value)
        except WrongTypeError as exc:
            raise WrongTypeError(f"{exc} on arg {name}") from exc

    def inflate_object(self) -> BaseModel:
        """Build an instance of the output model from the bound arguments.

        Unset optional arguments take the model field's default when it has one,
        otherwise the zero value of their type (None for the pointer form).

        Raises:
            MissingArgumentsError: If a required argument was never bound.
            MarkerError: If the model rejects the collected values.
        """
        values: dict[str, Any] = {}
        missing: list[str] = []

        for name, arg in self.fields.items():
            if arg.is_set:
                values[arg.field_name] = arg.value
            elif not arg.optional:
                missing.append(name)
            elif self.output.model_fields[arg.field_name].is_required():
                values[arg.field_name] = arg.zero_value()

        if missing:
            raise MissingArgumentsError(missing)

        try:
            return self.output.model_validate(values)
        except ValidationError as exc:
            raise MarkerError(f"unable to build {self.output.__name__} for marker {self.name}: {exc}") from exc

    def copy(self) -> Definition:
        """Return a copy whose arguments can be bound without touching this schema."""
        return dataclasses.replace(
            self,
            fields={name: dataclasses.replace(arg) for name, arg in self.fields.items()},
        )


def define(name: str, output: type[BaseModel]) -> Definition:
    """Create a marker schema for the model class ``output``.

    Every public model field becomes an argument; private attributes are skipped.

    Raises:
        DefinitionError: If ``output`` is not a pydantic model class, or one of its
            fields has a type that cannot be bound from a marker literal.
    """
    if not (isinstance(output, type) and issubclass(output, BaseModel)):
        raise DefinitionError(f"type must be a model class, got {output!r}")

    definition = Definition(name=name, output=output)
    for field_name, info in output.model_fields.items():
        arg = argument_from_field(field_name, info)
        definition.fields[arg.name] = arg

    return definition
