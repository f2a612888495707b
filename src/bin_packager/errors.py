"""Errors raised by the bin packager on invalid caller input."""

from __future__ import annotations


class PackingError(Exception):
    """Base class for packer errors. ``code`` is a stable machine-readable tag."""

    code = "PACKING_ERROR"


class DuplicateIdentifier(PackingError):
    code = "DUPLICATE_IDENTIFIER"


class InvalidDimension(PackingError):
    code = "INVALID_DIMENSION"


class InvalidWeight(PackingError):
    code = "INVALID_WEIGHT"


class TypeMismatch(PackingError):
    code = "TYPE_MISMATCH"
