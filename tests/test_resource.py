import pytest
from pydantic import ValidationError

from datapkg.errors import ResourceError
from datapkg.resource import (
    Resource,
    ResourceDescriptor,
    ResourceLike,
    get_factory,
    new_resource,
    new_unchecked_resource,
)


def test_resource_wraps_descriptor():
    raw = {"name": "res", "path": "res.csv", "custom": {"a": 1}}
    r = Resource(raw)
    assert r.name == "res"
    assert r.path == "res.csv"
    assert r.data is None
    assert r.profile == "data-resource"
    assert r.descriptor() == raw
    assert r.descriptor() is not raw
    assert isinstance(r, ResourceLike)


def test_resource_without_name():
    assert Resource({}).name == ""
    assert Resource({"name": 3}).name == ""


def test_set_property_updates_descriptor():
    r = Resource({"name": "res", "path": "a.csv"})
    r.set_property("path", "b.csv")
    assert r.path == "b.csv"
    assert r.descriptor()["path"] == "b.csv"


def test_resource_equality():
    assert Resource({"name": "a"}) == Resource({"name": "a"})
    assert Resource({"name": "a"}) != Resource({"name": "b"})


def test_new_resource_accepts_path_or_data():
    assert new_resource({"name": "res", "path": "res.csv"}).name == "res"
    assert new_resource({"name": "res", "path": ["a.csv", "b.csv"]}).path == ["a.csv", "b.csv"]
    assert new_resource({"name": "inline", "data": [{"a": 1}]}).data == [{"a": 1}]


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"path": "res.csv"},
        {"name": "", "path": "res.csv"},
        {"name": "Bad Name", "path": "res.csv"},
        {"name": "res"},
        {"name": "res", "path": "res.csv", "data": []},
        {"name": "res", "path": []},
        {"name": "res", "path": "res.csv", "bytes": -1},
    ],
    ids=["empty", "no-name", "blank-name", "bad-name", "no-path-or-data", "path-and-data", "empty-path", "negative-bytes"],
)
def test_new_resource_rejects(raw):
    with pytest.raises(ResourceError) as exc:
        new_resource(raw)
    assert isinstance(exc.value.__cause__, ValidationError)


def test_new_resource_rejects_non_mapping():
    with pytest.raises(ResourceError):
        new_resource(["res"])


def test_resource_descriptor_aliases_and_extras():
    model = ResourceDescriptor.model_validate(
        {"name": "res", "path": "res.csv", "schema": {"fields": []}, "hash": "abc", "x-note": "kept"}
    )
    assert model.schema_ == {"fields": []}
    assert model.hash_ == "abc"
    assert model.model_extra == {"x-note": "kept"}


def test_new_unchecked_resource():
    r = new_unchecked_resource({"anything": True})
    assert r.name == ""
    with pytest.raises(ResourceError):
        new_unchecked_resource("res")


def test_get_factory():
    assert get_factory("validated") is new_resource
    assert get_factory(" Unchecked ") is new_unchecked_resource
    with pytest.raises(ValueError):
        get_factory("strict")


def test_resource_is_unhashable():
    with pytest.raises(TypeError):
        hash(Resource({"name": "a"}))
