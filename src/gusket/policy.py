# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Merge container defaults with field directives into per-field policies."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from gusket.directives import Directive, FieldOptions
from gusket.model import Visibility

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerDefaults:
    """Defaults established by a record's own directives.

    Attributes:
        visibility: Default accessor visibility.
        mutable: Whether mutable getters and setters are generated by default.
        derive_all: Whether fields without markers are opted in.
    """

    visibility: Visibility
    mutable: bool = True
    derive_all: bool = False


@dataclass(frozen=True)
class ResolvedPolicy:
    """Final accessor decision for one field."""

    derive: bool
    visibility: Visibility
    mutable: bool
    by_value: bool


def build_container_defaults(
    visibility: Visibility, directives: Iterable[Directive]
) -> ContainerDefaults:
    """Apply container-level directives on top of the implicit defaults.

    Args:
        visibility: Declared visibility of the record.
        directives: Parsed container-level directives, in order.

    Returns:
        Container defaults for every field of the record.
    """
    defaults = ContainerDefaults(visibility=visibility)
    for directive in directives:
        if directive.kind == "vis" and directive.visibility is not None:
            defaults = replace(defaults, visibility=directive.visibility)
        elif directive.kind == "immut":
            defaults = replace(defaults, mutable=False)
        elif directive.kind == "all":
            defaults = replace(defaults, derive_all=True)
    return defaults


def resolve(defaults: ContainerDefaults, options: FieldOptions) -> ResolvedPolicy:
    """Resolve the accessor policy of one field.

    Container defaults apply first. Any field marker, even an empty one, opts
    the field in; the field's directives are then applied in order so the
    last directive for a concern wins.

    Args:
        defaults: Record-level defaults.
        options: Parsed field directives.

    Returns:
        Resolved policy for the field.
    """
    derive = defaults.derive_all or options.marked
    visibility = defaults.visibility
    mutable = defaults.mutable
    by_value = False

    for directive in options.directives:
        if directive.kind == "vis" and directive.visibility is not None:
            visibility = directive.visibility
        elif directive.kind == "immut":
            mutable = False
        elif directive.kind == "mut":
            mutable = True
        elif directive.kind == "copy":
            by_value = True
        elif directive.kind == "skip":
            derive = False

    return ResolvedPolicy(
        derive=derive, visibility=visibility, mutable=mutable, by_value=by_value
    )
