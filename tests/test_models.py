"""Tests for docsite.models ingestion."""

from __future__ import annotations

from docsite.models import Doclet, Tutorial


def test_doclet_from_dict_coerces_nested_records() -> None:
    doclet = Doclet.from_dict(
        {
            "longname": "Widget#resize",
            "name": "resize",
            "kind": "function",
            "memberof": "Widget",
            "scope": "instance",
            "async": True,
            "params": [
                {"name": "width", "type": {"names": ["number"]}, "optional": True},
                "not-a-param",
            ],
            "returns": [{"type": {"names": ["Widget"]}, "nullable": False}],
            "examples": "resize(10);",
            "meta": {"filename": "widget.js", "path": "/repo/src", "lineno": 12},
        }
    )

    assert doclet is not None
    assert doclet.is_async is True
    assert [param.name for param in doclet.params] == ["width"]
    assert doclet.params[0].optional is True
    assert doclet.params[0].type is not None and doclet.params[0].type.names == ["number"]
    assert doclet.returns[0].nullable is False
    assert doclet.examples == ["resize(10);"]
    assert doclet.meta is not None and doclet.meta.lineno == 12
    assert doclet.signature is None
    assert doclet.ancestors == []


def test_doclet_from_dict_rejects_missing_longname() -> None:
    assert Doclet.from_dict({"name": "orphan"}) is None
    assert Doclet.from_dict({"longname": ""}) is None


def test_doclet_from_dict_ignores_malformed_fields() -> None:
    doclet = Doclet.from_dict(
        {"longname": "x", "type": {"names": "string"}, "meta": "oops", "nullable": "yes"}
    )

    assert doclet is not None
    assert doclet.type is None
    assert doclet.meta is None
    assert doclet.nullable is None


def test_container_kinds() -> None:
    assert Doclet(longname="A", kind="class").is_container
    assert Doclet(longname="module:a", kind="module").is_container
    assert not Doclet(longname="a", kind="function").is_container


def test_tutorial_longname() -> None:
    assert Tutorial(name="intro").longname == "tutorial:intro"
    assert Tutorial().longname is None


def test_module_exports_detection() -> None:
    exported = Doclet.from_dict({"longname": "module:foo", "name": "module:foo", "kind": "function"})
    module = Doclet.from_dict({"longname": "module:foo", "name": "foo", "kind": "module"})
    member = Doclet.from_dict({"longname": "module:foo.bar", "name": "bar", "kind": "function"})

    assert exported is not None and exported.is_module_exports
    assert module is not None and not module.is_module_exports
    assert member is not None and not member.is_module_exports
