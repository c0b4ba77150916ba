# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for record validation and implementation block assembly."""

import pytest

from gusket import (
    DirectiveMarker,
    FieldDescriptor,
    GenericParam,
    Location,
    RecordDescriptor,
    UnsupportedDirectiveError,
    UnsupportedShapeError,
    Visibility,
    container_defaults,
    process,
)

PUB = Visibility("pub")


def _field(ident: str | None, ty: str, *markers: str, docs: tuple[str, ...] = ()) -> FieldDescriptor:
    return FieldDescriptor(
        ident=ident,
        ty=ty,
        docs=docs,
        location=Location(path="a.rs", line=10),
        markers=tuple(DirectiveMarker(arguments=text) for text in markers),
    )


def _record(
    *fields: FieldDescriptor,
    markers: tuple[str, ...] = (),
    shape: str = "named",
    visibility: Visibility = PUB,
) -> RecordDescriptor:
    return RecordDescriptor(
        ident="Alpha",
        shape=shape,  # type: ignore[arg-type]
        visibility=visibility,
        fields=fields,
        markers=tuple(DirectiveMarker(arguments=text) for text in markers),
        location=Location(path="a.rs", line=1),
        shape_location=Location(path="a.rs", line=1, column=4),
    )


def _signatures(record: RecordDescriptor) -> list[tuple[str, str, str | None, str]]:
    return [
        (method.name, method.receiver, method.return_type, method.visibility.text)
        for method in process(record).methods
    ]


def test_drv_101_scenario_marked_field_gets_trio_with_record_visibility() -> None:
    assert _signatures(_record(_field("foo", "Bar", ""))) == [
        ("foo", "ref", "&Bar", "pub"),
        ("foo_mut", "mut_ref", "&mut Bar", "pub"),
        ("set_foo", "mut_ref", None, "pub"),
    ]


def test_drv_102_scenario_immutable_container_yields_getter_only() -> None:
    record = _record(_field("foo", "Bar", ""), markers=("immut",))

    assert [name for name, *_ in _signatures(record)] == ["foo"]


def test_drv_103_scenario_skip_under_derive_all_yields_nothing() -> None:
    record = _record(_field("foo", "String"), _field("bar", "u32", "skip"), markers=("all",))

    names = [name for name, *_ in _signatures(record)]
    assert names == ["foo", "foo_mut", "set_foo"]


def test_drv_104_scenario_copy_returns_getter_by_value() -> None:
    methods = process(_record(_field("foo", "Bar", "copy"))).methods

    assert methods[0].return_type == "Bar"
    assert methods[0].body == "self.foo"
    assert methods[1].return_type == "&mut Bar"
    assert methods[2].params[0].ty == "Bar"


def test_drv_105_scenario_unmarked_sibling_produces_nothing() -> None:
    record = _record(_field("foo", "Bar", ""), _field("grault", "Option<u32>"))

    assert {name for name, *_ in _signatures(record)} == {"foo", "foo_mut", "set_foo"}


@pytest.mark.parametrize("shape", ["enum", "union", "tuple", "unit"])
def test_drv_106_scenario_unsupported_shapes_fail_without_output(shape: str) -> None:
    record = _record(_field("foo", "Bar", ""), shape=shape)

    with pytest.raises(UnsupportedShapeError) as excinfo:
        process(record)

    assert excinfo.value.location == Location(path="a.rs", line=1, column=4)


def test_drv_107_positional_field_in_named_record_is_rejected() -> None:
    positional = FieldDescriptor(ident=None, ty="u32", location=Location(path="a.rs", line=3))
    record = _record(_field("foo", "Bar", ""), positional)

    with pytest.raises(UnsupportedShapeError) as excinfo:
        process(record)

    assert excinfo.value.location.line == 3


def test_drv_108_no_container_directive_and_no_markers_yields_empty_block() -> None:
    block = process(_record(_field("foo", "Bar"), _field("bar", "u32")))

    assert block.methods == ()


def test_drv_109_empty_named_record_is_accepted() -> None:
    assert process(_record()).methods == ()


def test_drv_110_bad_field_directive_aborts_whole_record() -> None:
    record = _record(_field("foo", "Bar", ""), _field("bar", "u32", "copyy"))

    with pytest.raises(UnsupportedDirectiveError):
        process(record)


def test_drv_111_bad_container_directive_aborts_record() -> None:
    with pytest.raises(UnsupportedDirectiveError):
        process(_record(_field("foo", "Bar", ""), markers=("everything",)))


def test_drv_112_generics_and_where_clause_are_carried_verbatim() -> None:
    record = RecordDescriptor(
        ident="Beta",
        visibility=PUB,
        generics=(
            GenericParam(kind="lifetime", declaration="'a", usage="'a"),
            GenericParam(kind="type", declaration="T: Clone", usage="T"),
            GenericParam(kind="const", declaration="const N: usize", usage="N"),
        ),
        where_clause="where T: Default",
        fields=(_field("items", "&'a [T; N]", ""),),
    )

    block = process(record)

    assert block.record_ident == "Beta"
    assert block.generics_decl == "<'a, T: Clone, const N: usize>"
    assert block.generics_usage == "<'a, T, N>"
    assert block.where_clause == "where T: Default"


def test_drv_113_container_defaults_start_from_record_visibility() -> None:
    defaults = container_defaults(_record(visibility=Visibility("pub(crate)")))

    assert defaults.visibility == Visibility("pub(crate)")
    assert defaults.mutable is True
    assert defaults.derive_all is False


def test_drv_114_mixed_field_settings_under_immutable_container() -> None:
    record = _record(
        _field("foo", "String", ""),
        _field("bar", "u32", "copy"),
        _field("qux", "i32", "copy, mut"),
        _field("corge", "Vec<u32>", "mut, vis = pub(self)"),
        _field("grault", "Option<u32>"),
        markers=("immut",),
    )

    assert _signatures(record) == [
        ("foo", "ref", "&String", "pub"),
        ("bar", "ref", "u32", "pub"),
        ("qux", "ref", "i32", "pub"),
        ("qux_mut", "mut_ref", "&mut i32", "pub"),
        ("set_qux", "mut_ref", None, "pub"),
        ("corge", "ref", "&Vec<u32>", "pub(self)"),
        ("corge_mut", "mut_ref", "&mut Vec<u32>", "pub(self)"),
        ("set_corge", "mut_ref", None, "pub(self)"),
    ]


def test_drv_115_processing_is_repeatable() -> None:
    record = _record(_field("foo", "Bar", "copy"), markers=("all", "vis = pub(crate)"))

    assert process(record) == process(record)


def test_drv_116_empty_container_marker_leaves_defaults_unchanged() -> None:
    # A bare container marker is accepted as a no-op rather than rejected.
    record = _record(_field("foo", "Bar", ""), markers=("",))

    assert container_defaults(record) == container_defaults(_record())
    assert [name for name, *_ in _signatures(record)] == ["foo", "foo_mut", "set_foo"]
