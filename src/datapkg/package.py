"""Package — a data package descriptor kept in lockstep with its resources.

A package holds two views of the same data:

  * the raw descriptor, a plain ``dict`` that round-trips through JSON and
    keeps every property it was given, and
  * an ordered list of resources built from ``descriptor["resources"]`` by
    the package's resource factory.

Every mutation goes through ``Package`` so that, for each index ``i``,
``resources[i]`` was built from ``descriptor["resources"][i]``.

Usage:
    from datapkg import Package, new_resource

    pkg = Package.from_json('{"resources": [{"name": "res", "path": "foo.csv"}]}')
    pkg.add_resource({"name": "more", "path": "more.csv"})
    pkg.remove_resource("res")
    print(pkg.to_json())
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import IO, Any, Iterator

import yaml

from datapkg.errors import (
    DescriptorError,
    DescriptorSyntaxError,
    FactoryNotConfiguredError,
    PackageError,
    ResourceError,
)
from datapkg.resource import ResourceFactory, ResourceLike, new_resource, new_unchecked_resource

logger = logging.getLogger(__name__)

RESOURCES = "resources"
YAML_SUFFIXES = (".yaml", ".yml")
YAML_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _DescriptorLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as plain strings, as JSON would."""


_DescriptorLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != YAML_TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _make_resource(factory: ResourceFactory, raw: dict, index: int | None = None) -> ResourceLike:
    where = f"resources[{index}]" if index is not None else "resource"
    try:
        resource = factory(raw)
    except Exception as e:
        name = raw.get("name") if isinstance(raw.get("name"), str) else None
        raise ResourceError(f"{where} rejected: {e}", index=index, name=name) from e
    if not isinstance(resource, ResourceLike):
        raise ResourceError(
            f"{where} rejected: factory returned {type(resource).__name__}, not a resource", index=index
        )
    return resource


def _build_resources(descriptor: Any, factory: ResourceFactory | None) -> list[ResourceLike]:
    """Check the structure of ``descriptor`` and build one resource per entry.

    Raises on the first problem found; never touches ``descriptor``.
    """
    if not isinstance(descriptor, dict):
        raise DescriptorError(f"package descriptor must be an object, got {type(descriptor).__name__}")
    if RESOURCES not in descriptor:
        raise DescriptorError("package descriptor has no 'resources' property")
    raw_resources = descriptor[RESOURCES]
    if not isinstance(raw_resources, list):
        raise DescriptorError(f"'resources' must be a list, got {type(raw_resources).__name__}")
    if not raw_resources:
        raise DescriptorError("'resources' must contain at least one resource")
    if factory is None:
        raise FactoryNotConfiguredError("no resource factory configured")

    resources: list[ResourceLike] = []
    for i, raw in enumerate(raw_resources):
        if not isinstance(raw, dict):
            raise DescriptorError(
                f"resources[{i}] must be an object, got {type(raw).__name__}", index=i
            )
        resources.append(_make_resource(factory, raw, i))
    return resources


def valid(descriptor: Any, resource_factory: ResourceFactory | None) -> bool:
    """True when ``descriptor`` would build a package with ``resource_factory``."""
    try:
        _build_resources(descriptor, resource_factory)
    except PackageError:
        return False
    return True


def _decode_json(text: str | bytes) -> dict:
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        raise DescriptorSyntaxError(f"invalid JSON: {e}", lineno=e.lineno, colno=e.colno) from e
    except UnicodeDecodeError as e:
        raise DescriptorSyntaxError(f"invalid JSON: {e}") from e
    if not isinstance(decoded, dict):
        raise DescriptorError(f"package descriptor must be a JSON object, got {type(decoded).__name__}")
    return decoded


class Package:
    """A data package: a descriptor plus the resources built from it.

    Args:
        descriptor: Package descriptor. Kept by reference, not copied.
            ``None`` starts an empty package that grows through
            ``add_resource``.
        resource_factory: Callable turning a raw resource descriptor into a
            resource. Required for anything that builds resources.
    """

    def __init__(
        self,
        descriptor: dict[str, Any] | None = None,
        resource_factory: ResourceFactory | None = None,
    ):
        self.resource_factory = resource_factory
        self._descriptor: dict[str, Any] = {}
        self._resources: list[ResourceLike] = []
        if descriptor is not None:
            self._resources = _build_resources(descriptor, resource_factory)
            self._descriptor = descriptor

    # ── Construction ──

    @classmethod
    def from_json(
        cls,
        data: str | bytes,
        resource_factory: ResourceFactory = new_unchecked_resource,
    ) -> "Package":
        return cls(_decode_json(data), resource_factory)

    # ── Lookup ──

    @property
    def resources(self) -> tuple[ResourceLike, ...]:
        return tuple(self._resources)

    def get_resource(self, name: str) -> ResourceLike | None:
        for r in self._resources:
            if r.name == name:
                return r
        return None

    def resource_names(self) -> list[str]:
        return [r.name for r in self._resources]

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[ResourceLike]:
        return iter(tuple(self._resources))

    def __contains__(self, name: object) -> bool:
        return any(r.name == name for r in self._resources)

    # ── Mutation ──

    def add_resource(self, raw: dict[str, Any]) -> ResourceLike:
        """Build a resource from ``raw`` and append it to the package.

        The package is left untouched if the factory rejects ``raw``.
        Duplicate names are allowed.
        """
        if self.resource_factory is None:
            raise FactoryNotConfiguredError("no resource factory configured")
        if not isinstance(raw, dict):
            raise DescriptorError(f"resource descriptor must be an object, got {type(raw).__name__}")
        resource = _make_resource(self.resource_factory, raw, len(self._resources))
        self._descriptor.setdefault(RESOURCES, []).append(raw)
        self._resources.append(resource)
        logger.debug("added resource %r (%d total)", resource.name, len(self._resources))
        return resource

    def remove_resource(self, name: str) -> ResourceLike | None:
        """Remove the first resource called ``name``; a missing name is a no-op."""
        for i, r in enumerate(self._resources):
            if r.name == name:
                del self._resources[i]
                del self._descriptor[RESOURCES][i]
                logger.debug("removed resource %r at index %d", name, i)
                return r
        return None

    def update(self, descriptor: dict[str, Any]) -> None:
        """Replace the whole package with ``descriptor``.

        The new resources are built before anything is swapped in, so a
        failure leaves the package as it was.
        """
        resources = _build_resources(descriptor, self.resource_factory)
        self._descriptor = descriptor
        self._resources = resources
        logger.debug("package updated (%d resources)", len(resources))

    # ── Serialisation ──

    def descriptor(self) -> dict[str, Any]:
        """Current descriptor, with each resource entry taken from the resource itself."""
        out: dict[str, Any] = {}
        for key, value in self._descriptor.items():
            if key == RESOURCES:
                out[key] = [r.descriptor() for r in self._resources]
            else:
                out[key] = copy.deepcopy(value)
        return out

    def to_json(self, indent: int | None = None) -> str:
        if indent is None:
            return json.dumps(self.descriptor(), separators=(",", ":"), sort_keys=True, ensure_ascii=False)
        return json.dumps(self.descriptor(), indent=indent, ensure_ascii=False)

    def save_descriptor(self, path: str | Path, indent: int = 2) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() in YAML_SUFFIXES:
            text = yaml.safe_dump(self.descriptor(), sort_keys=False, allow_unicode=True)
        else:
            text = self.to_json(indent=indent) + "\n"
        path.write_text(text, encoding="utf-8")
        logger.debug("saved descriptor to %s", path)
        return path

    def __repr__(self) -> str:
        return f"Package(resources={self.resource_names()!r})"


def from_descriptor(descriptor: dict[str, Any], resource_factory: ResourceFactory) -> Package:
    return Package(descriptor, resource_factory)


def from_reader(reader: IO[str] | IO[bytes], resource_factory: ResourceFactory) -> Package:
    """Read all of ``reader`` as a JSON package descriptor."""
    return Package(_decode_json(reader.read()), resource_factory)


def loads(data: str | bytes, resource_factory: ResourceFactory = new_unchecked_resource) -> Package:
    return Package.from_json(data, resource_factory)


def dumps(package: Package, indent: int | None = None) -> str:
    return package.to_json(indent=indent)


def load(path: str | Path, resource_factory: ResourceFactory = new_resource) -> Package:
    """Load a package from a local ``.json``, ``.yaml`` or ``.yml`` descriptor file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Descriptor not found: {path}")
    logger.debug("loading package descriptor from %s", path)
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.load(path.read_text(encoding="utf-8"), Loader=_DescriptorLoader)
        except UnicodeDecodeError as e:
            raise DescriptorSyntaxError(f"invalid YAML in {path}: {e}") from e
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            raise DescriptorSyntaxError(
                f"invalid YAML in {path}: {e}",
                lineno=mark.line + 1 if mark else None,
                colno=mark.column + 1 if mark else None,
            ) from e
        if not isinstance(data, dict):
            raise DescriptorError(f"package descriptor must be a mapping, got {type(data).__name__}")
        return Package(data, resource_factory)
    with path.open("rb") as f:
        return from_reader(f, resource_factory)
