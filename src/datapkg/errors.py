"""Exceptions raised by datapkg.

Absence (an unknown resource name) is never an error; everything else
that can go wrong while building or mutating a package derives from
``PackageError``.
"""

from __future__ import annotations


class PackageError(Exception):
    pass


class DescriptorError(PackageError):
    """The descriptor is structurally wrong (not about a single resource's content)."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class DescriptorSyntaxError(DescriptorError):
    """The input could not be decoded as JSON (or YAML) at all."""

    def __init__(self, message: str, lineno: int | None = None, colno: int | None = None):
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno


class ResourceError(PackageError):
    def __init__(self, message: str, index: int | None = None, name: str | None = None):
        super().__init__(message)
        self.index = index
        self.name = name


class FactoryNotConfiguredError(PackageError):
    pass
