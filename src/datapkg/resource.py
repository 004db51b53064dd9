"""Resources and the factories that build them from raw descriptors.

A resource factory is any callable taking a raw resource descriptor
(a ``dict``) and returning an object that satisfies ``ResourceLike``.
Factories reject a descriptor by raising; the package never sees a
half-built resource.

Two factories ship with the library:

    new_resource            validates against the data-resource profile
    new_unchecked_resource  accepts any mapping as-is
"""

from __future__ import annotations

import copy
import re
from typing import Any, Callable, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from datapkg.errors import ResourceError

NAME_PATTERN = re.compile(r"^[-a-z0-9._/]+$")
DEFAULT_PROFILE = "data-resource"


@runtime_checkable
class ResourceLike(Protocol):
    @property
    def name(self) -> str: ...

    def descriptor(self) -> dict[str, Any]: ...


ResourceFactory = Callable[[dict], ResourceLike]


class ResourceDescriptor(BaseModel):
    """Schema a resource descriptor must satisfy to be accepted by ``new_resource``.

    Unknown properties are allowed and carried through untouched.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    profile: str = DEFAULT_PROFILE
    path: str | list[str] | None = None
    data: Any = None
    title: str = ""
    description: str = ""
    format: str | None = None
    mediatype: str | None = None
    encoding: str | None = None
    bytes_: int | None = Field(default=None, alias="bytes", ge=0)
    hash_: str | None = Field(default=None, alias="hash")
    schema_: dict[str, Any] | str | None = Field(default=None, alias="schema")
    sources: list[dict[str, Any]] = Field(default_factory=list)
    licenses: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not NAME_PATTERN.match(v):
            raise ValueError(
                f"invalid resource name {v!r}: use lowercase letters, digits, '-', '_', '.' or '/'"
            )
        return v

    @field_validator("path")
    @classmethod
    def _check_path(cls, v: str | list[str] | None) -> str | list[str] | None:
        if isinstance(v, list) and not v:
            raise ValueError("path list must not be empty")
        return v

    @model_validator(mode="after")
    def _path_xor_data(self) -> "ResourceDescriptor":
        has_path = self.path is not None
        has_data = "data" in self.model_fields_set
        if has_path == has_data:
            raise ValueError("a resource needs exactly one of 'path' or 'data'")
        return self


class Resource:
    """A resource backed by its raw descriptor mapping.

    The mapping is held by reference, so the package's descriptor and the
    resource agree on its contents.
    """

    def __init__(self, descriptor: dict[str, Any]):
        self._descriptor = descriptor

    @property
    def name(self) -> str:
        name = self._descriptor.get("name", "")
        return name if isinstance(name, str) else ""

    @property
    def path(self) -> str | list[str] | None:
        return self._descriptor.get("path")

    @property
    def data(self) -> Any:
        return self._descriptor.get("data")

    @property
    def profile(self) -> str:
        return self._descriptor.get("profile", DEFAULT_PROFILE)

    def descriptor(self) -> dict[str, Any]:
        return copy.deepcopy(self._descriptor)

    def set_property(self, key: str, value: Any) -> None:
        self._descriptor[key] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self._descriptor == other._descriptor

    # Mutable, compared by descriptor.
    __hash__ = None

    def __repr__(self) -> str:
        return f"Resource(name={self.name!r})"


def new_resource(raw: dict) -> Resource:
    """Validate ``raw`` as a data resource and wrap it."""
    if not isinstance(raw, dict):
        raise ResourceError(f"resource descriptor must be an object, got {type(raw).__name__}")
    try:
        ResourceDescriptor.model_validate(raw)
    except ValidationError as e:
        name = raw.get("name") if isinstance(raw.get("name"), str) else None
        raise ResourceError(f"invalid resource descriptor: {e}", name=name) from e
    return Resource(raw)


def new_unchecked_resource(raw: dict) -> Resource:
    if not isinstance(raw, dict):
        raise ResourceError(f"resource descriptor must be an object, got {type(raw).__name__}")
    return Resource(raw)


_FACTORIES: dict[str, ResourceFactory] = {
    "validated": new_resource,
    "unchecked": new_unchecked_resource,
}


def get_factory(name: str) -> ResourceFactory:
    try:
        return _FACTORIES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"unknown resource factory {name!r}; choose one of {sorted(_FACTORIES)}"
        ) from None
