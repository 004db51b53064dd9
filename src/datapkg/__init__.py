"""datapkg — data package descriptors kept in sync with their resources."""

from datapkg.errors import (
    DescriptorError,
    DescriptorSyntaxError,
    FactoryNotConfiguredError,
    PackageError,
    ResourceError,
)
from datapkg.package import Package, dumps, from_descriptor, from_reader, load, loads, valid
from datapkg.resource import (
    Resource,
    ResourceDescriptor,
    ResourceFactory,
    ResourceLike,
    get_factory,
    new_resource,
    new_unchecked_resource,
)

__version__ = "0.1.0"

__all__ = [
    "DescriptorError",
    "DescriptorSyntaxError",
    "FactoryNotConfiguredError",
    "PackageError",
    "ResourceError",
    "Package",
    "dumps",
    "from_descriptor",
    "from_reader",
    "load",
    "loads",
    "valid",
    "Resource",
    "ResourceDescriptor",
    "ResourceFactory",
    "ResourceLike",
    "get_factory",
    "new_resource",
    "new_unchecked_resource",
]
