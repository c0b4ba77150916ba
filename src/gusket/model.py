# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Structural descriptions of records consumed by the engine."""

from dataclasses import dataclass, field
from typing import Literal

RecordShape = Literal["named", "tuple", "unit", "enum", "union"]
GenericKind = Literal["type", "lifetime", "const"]


@dataclass(frozen=True)
class Location:
    """Opaque source position used only for diagnostics.

    Attributes:
        path: Source file the construct came from, if known.
        line: 1-based line number; 0 when unknown.
        column: 0-based column offset.
    """

    path: str | None = None
    line: int = 0
    column: int = 0

    def shifted(self, offset: int) -> "Location":
        return Location(path=self.path, line=self.line, column=self.column + offset)

    def __str__(self) -> str:
        return f"{self.path or '<input>'}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Visibility:
    """Visibility qualifier as written in source.

    An empty ``text`` is the inherited (private) visibility.
    """

    text: str = ""

    @property
    def is_inherited(self) -> bool:
        return not self.text


@dataclass(frozen=True)
class GenericParam:
    """One generic parameter of a record.

    Attributes:
        kind: Parameter category.
        declaration: Full declaration form, e.g. ``T: Clone``.
        usage: Bare usage form, e.g. ``T``.
    """

    kind: GenericKind
    declaration: str
    usage: str


@dataclass(frozen=True)
class DirectiveMarker:
    """One directive marker attached to a record or field.

    Attributes:
        arguments: Directive list text; empty for a bare marker.
        location: Location of the first character of ``arguments``.
    """

    arguments: str = ""
    location: Location = field(default_factory=Location)


@dataclass(frozen=True)
class FieldDescriptor:
    """Describe one record field.

    Attributes:
        ident: Field name; ``None`` for positional fields.
        ty: Field type as written in source.
        docs: Documentation lines, in declaration order.
        location: Field location.
        markers: Field-level directive markers, possibly empty.
    """

    ident: str | None
    ty: str
    docs: tuple[str, ...] = ()
    location: Location = field(default_factory=Location)
    markers: tuple[DirectiveMarker, ...] = ()


@dataclass(frozen=True)
class RecordDescriptor:
    """Describe the record under processing.

    Attributes:
        ident: Record name.
        shape: Record body shape.
        visibility: Declared record visibility.
        fields: Fields in declaration order.
        generics: Generic parameter list.
        where_clause: Optional bound clause, kept verbatim.
        markers: Container-level directive markers.
        location: Record location.
        shape_location: Location of the token that determines ``shape``.
    """

    ident: str
    shape: RecordShape = "named"
    visibility: Visibility = field(default_factory=Visibility)
    fields: tuple[FieldDescriptor, ...] = ()
    generics: tuple[GenericParam, ...] = ()
    where_clause: str | None = None
    markers: tuple[DirectiveMarker, ...] = ()
    location: Location = field(default_factory=Location)
    shape_location: Location | None = None
