"""Tests for docsite.signature."""

from __future__ import annotations

from typing import Callable

import pytest

from docsite.linking import LinkRegistry
from docsite.models import Doclet
from docsite.signature import SignatureBuilder, get_attribs, has_signature


@pytest.fixture
def builder(registry: LinkRegistry) -> SignatureBuilder:
    return SignatureBuilder(registry)


@pytest.mark.parametrize(
    ("record", "expected"),
    [
        ({"kind": "function"}, True),
        ({"kind": "class"}, True),
        ({"kind": "typedef", "type": {"names": ["Function"]}}, True),
        ({"kind": "typedef", "type": {"names": ["Object"]}}, False),
        ({"kind": "typedef"}, False),
        ({"kind": "member"}, False),
    ],
)
def test_has_signature(make_doclet: Callable[..., Doclet], record: dict, expected: bool) -> None:
    assert has_signature(make_doclet(**record)) is expected


def test_params_drop_dotted_and_empty_names(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(
        name="configure",
        kind="function",
        params=[{"name": "a"}, {"name": "opts.b"}, {"name": ""}],
    )

    assert builder.format_params(doclet.params) == ["a"]
    assert '<span class="signature">configure(a)</span>' in (
        builder.build_signature(doclet).signature or ""
    )


def test_param_markers_and_variadic_prefix(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(
        kind="function",
        params=[
            {"name": "x", "optional": True, "nullable": True},
            {"name": "y", "nullable": False},
            {"name": "rest", "variable": True},
            {"name": "plain", "nullable": None},
        ],
    )

    assert builder.format_params(doclet.params) == [
        'x<span class="signature-attributes">opt, nullable</span>',
        'y<span class="signature-attributes">non-null</span>',
        "…rest",
        "plain",
    ]


def test_zero_params_render_empty_parentheses(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(name="go", kind="function")

    assert builder.build_signature(doclet).signature == (
        '<span class="signature">go()</span><span class="type-signature"></span>'
    )


def test_return_type_without_badges(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(kind="function", returns=[{"type": {"names": ["string"]}}])

    assert builder.format_returns(doclet) == " → {string}"


def test_return_badges_are_deduplicated_in_order(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(
        kind="function",
        returns=[
            {"type": {"names": ["string"]}, "nullable": True},
            {"type": {"names": ["number"]}, "nullable": False},
            {"type": {"names": ["boolean"]}, "nullable": True},
        ],
    )

    assert builder.format_returns(doclet) == (
        ' → <span class="signature-attributes">nullable, non-null</span> {string|number|boolean}'
    )


def test_yields_take_precedence_over_returns(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(
        kind="function",
        generator=True,
        returns=[{"type": {"names": ["Iterator"]}}],
        yields=[{"type": {"names": ["number"]}}],
    )

    assert builder.format_returns(doclet) == " → {number}"


def test_returns_without_types_render_nothing(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(kind="function", returns=[{"description": "something"}])

    assert builder.format_returns(doclet) == ""


def test_return_types_link_registered_symbols(
    registry: LinkRegistry, builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    registry.register_link("Widget", "Widget.html")
    doclet = make_doclet(kind="function", returns=[{"type": {"names": ["Widget", "null"]}}])

    assert builder.format_returns(doclet) == ' → {<a href="Widget.html">Widget</a>|null}'


def test_build_signature_is_idempotent_and_pure(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(
        name="run",
        kind="function",
        scope="static",
        params=[{"name": "a", "optional": True}],
        returns=[{"type": {"names": ["Promise"]}}],
    )

    first = builder.build_signature(doclet)
    second = builder.build_signature(doclet)

    assert first.signature == second.signature
    assert first.attribs == second.attribs
    assert doclet.signature is None
    assert doclet.attribs is None


def test_get_attribs_collects_flags(make_doclet: Callable[..., Doclet]) -> None:
    method = make_doclet(kind="function", scope="static", access="private", virtual=True)
    method.is_async = True
    readonly = make_doclet(kind="member", readonly=True, nullable=False, scope="instance")
    constant = make_doclet(kind="constant", scope="global")

    assert get_attribs(method) == ["async", "abstract", "private", "static"]
    assert get_attribs(readonly) == ["readonly", "non-null"]
    assert get_attribs(constant) == ["constant"]
    assert get_attribs(make_doclet(kind="class", scope="static")) == []


def test_add_attribs_property_wraps_badges(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(kind="member", scope="static")

    assert builder.add_attribs_property(doclet).attribs == (
        '<span class="type-signature"><span class="signature-attributes">static</span></span>'
    )
    assert builder.add_attribs_property(make_doclet(kind="member")).attribs == (
        '<span class="type-signature"></span>'
    )


def test_build_type_signature_folds_declared_types(
    builder: SignatureBuilder, make_doclet: Callable[..., Doclet]
) -> None:
    doclet = make_doclet(name="size", kind="member", type={"names": ["number", "string"]})

    assert builder.build_type_signature(doclet).signature == (
        '<span class="signature">size</span><span class="type-signature"> :number|string</span>'
    )
