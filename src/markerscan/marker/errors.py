# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised while defining marker schemas and binding their arguments."""

# ###############
# Public Interface
# ###############


class MarkerError(Exception):
    """Base class for marker schema and argument binding errors."""


class DefinitionError(MarkerError):
    """Raised when an output shape cannot be turned into a marker schema."""


class WrongTypeError(MarkerError):
    """Raised when a literal's type is not convertible to the declared argument type."""


class UnmarshalError(MarkerError):
    """Raised when a type's ``unmarshal_marker_arg`` rejects a literal."""


class ArgumentNotFoundError(MarkerError):
    """Raised when binding an argument the schema does not declare."""


class MissingArgumentsError(MarkerError):
    """Raised by inflation when required arguments were never bound.

    Attributes:
        missing: Names of the unset required arguments.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"missing arguments: {missing!r}")
