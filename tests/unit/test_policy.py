# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for container defaults and per-field policy resolution."""

from gusket import (
    ContainerDefaults,
    Directive,
    DirectiveMarker,
    FieldDescriptor,
    FieldOptions,
    Location,
    Visibility,
    build_container_defaults,
    parse_directives,
    parse_field_options,
    resolve,
)

PUB = Visibility("pub")


def _directives(text: str, scope: str = "field") -> list[Directive]:
    return parse_directives(DirectiveMarker(arguments=text), scope=scope)  # type: ignore[arg-type]


def _options(*markers: str) -> FieldOptions:
    field = FieldDescriptor(
        ident="foo",
        ty="Bar",
        markers=tuple(DirectiveMarker(arguments=text) for text in markers),
    )
    return parse_field_options(field)


def test_pol_101_implicit_container_defaults() -> None:
    defaults = build_container_defaults(PUB, [])

    assert defaults == ContainerDefaults(visibility=PUB, mutable=True, derive_all=False)


def test_pol_102_container_directives_override_defaults() -> None:
    defaults = build_container_defaults(
        PUB, _directives("all, immut, vis = pub(crate)", scope="container")
    )

    assert defaults.derive_all is True
    assert defaults.mutable is False
    assert defaults.visibility == Visibility("pub(crate)")


def test_pol_103_unmarked_field_without_derive_all_is_not_derived() -> None:
    policy = resolve(ContainerDefaults(visibility=PUB), _options())

    assert policy.derive is False


def test_pol_104_empty_marker_opts_field_in() -> None:
    policy = resolve(ContainerDefaults(visibility=PUB), _options(""))

    assert policy.derive is True
    assert policy.visibility == PUB
    assert policy.mutable is True
    assert policy.by_value is False


def test_pol_105_derive_all_opts_unmarked_field_in() -> None:
    policy = resolve(ContainerDefaults(visibility=PUB, derive_all=True), _options())

    assert policy.derive is True


def test_pol_106_skip_wins_over_derive_all() -> None:
    defaults = ContainerDefaults(visibility=PUB, derive_all=True)

    assert resolve(defaults, _options("skip")).derive is False
    assert resolve(defaults, _options("copy, mut, skip, vis = pub(crate)")).derive is False


def test_pol_107_field_vis_overrides_container_vis_and_last_wins() -> None:
    defaults = ContainerDefaults(visibility=Visibility("pub(crate)"))

    assert resolve(defaults, _options("vis = pub(self)")).visibility == Visibility("pub(self)")
    policy = resolve(defaults, _options("vis = pub(self), vis = pub"))
    assert policy.visibility == PUB


def test_pol_108_last_directive_wins_across_markers() -> None:
    policy = resolve(ContainerDefaults(visibility=PUB), _options("vis = pub(super)", "vis ="))

    assert policy.visibility.is_inherited


def test_pol_109_mutability_overrides_follow_directive_order() -> None:
    immutable = ContainerDefaults(visibility=PUB, mutable=False)
    mutable = ContainerDefaults(visibility=PUB, mutable=True)

    assert resolve(immutable, _options("")).mutable is False
    assert resolve(immutable, _options("mut")).mutable is True
    assert resolve(mutable, _options("immut")).mutable is False
    assert resolve(mutable, _options("immut, mut")).mutable is True
    assert resolve(mutable, _options("mut, immut")).mutable is False


def test_pol_110_copy_only_sets_by_value() -> None:
    plain = resolve(ContainerDefaults(visibility=PUB), _options(""))
    copied = resolve(ContainerDefaults(visibility=PUB), _options("copy"))

    assert copied.by_value is True
    assert (copied.derive, copied.visibility, copied.mutable) == (
        plain.derive,
        plain.visibility,
        plain.mutable,
    )


def test_pol_111_locations_do_not_influence_policy() -> None:
    near = FieldDescriptor(
        ident="foo",
        ty="Bar",
        markers=(DirectiveMarker(arguments="copy", location=Location(line=1)),),
    )
    far = FieldDescriptor(
        ident="foo",
        ty="Bar",
        location=Location(path="other.rs", line=99, column=4),
        markers=(DirectiveMarker(arguments="copy", location=Location(line=500)),),
    )
    defaults = ContainerDefaults(visibility=PUB)

    assert resolve(defaults, parse_field_options(near)) == resolve(
        defaults, parse_field_options(far)
    )
