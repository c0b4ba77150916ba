# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Validate records and assemble their accessor implementation blocks."""

import logging
from dataclasses import dataclass

from gusket.directives import Directive, parse_directives, parse_field_options
from gusket.errors import UnsupportedShapeError
from gusket.model import GenericParam, RecordDescriptor
from gusket.policy import ContainerDefaults, build_container_defaults, resolve
from gusket.synthesizer import MethodDefinition, synthesize

logger = logging.getLogger(__name__)

_SHAPE_MESSAGES: dict[str, str] = {
    "enum": "Enums are not supported",
    "union": "Unions are not supported",
    "tuple": "Tuple structs are not supported",
    "unit": "Unit structs are not supported",
}


@dataclass(frozen=True)
class ImplBlock:
    """Implementation scope holding the accessors of one record.

    Attributes:
        record_ident: Name of the record the block implements.
        generics_decl: Generic parameter declaration list, e.g. ``<'a, T: Clone>``.
        generics_usage: Generic parameter usage list, e.g. ``<'a, T>``.
        where_clause: Bound clause copied verbatim from the record.
        methods: Accessor methods in field declaration order.
    """

    record_ident: str
    generics_decl: str
    generics_usage: str
    where_clause: str | None
    methods: tuple[MethodDefinition, ...]


def process(record: RecordDescriptor) -> ImplBlock:
    """Generate the accessor implementation block of a record.

    Args:
        record: Structural description of the record.

    Returns:
        Implementation block; it holds no methods when no field opted in.

    Raises:
        UnsupportedShapeError: If the record is an enum, a union, a tuple
            struct or a unit struct.
        UnsupportedDirectiveError: If any directive of the record or its
            fields is unknown or malformed.
    """
    _validate_shape(record)
    defaults = container_defaults(record)

    methods: list[MethodDefinition] = []
    for field in record.fields:
        policy = resolve(defaults, parse_field_options(field))
        if not policy.derive:
            logger.debug(
                "Field not derived",
                extra={"record": record.ident, "field": field.ident},
            )
            continue
        methods.extend(synthesize(field, policy))

    decl, usage = _generics(record.generics)
    logger.info(
        f"Generated accessors (record={record.ident} fields={len(record.fields)} methods={len(methods)})"
    )
    return ImplBlock(
        record_ident=record.ident,
        generics_decl=decl,
        generics_usage=usage,
        where_clause=record.where_clause,
        methods=tuple(methods),
    )


def container_defaults(record: RecordDescriptor) -> ContainerDefaults:
    """Build the container defaults from a record's own directives.

    Args:
        record: Record descriptor.

    Returns:
        Defaults inherited by every field of the record.
    """
    directives: list[Directive] = []
    for marker in record.markers:
        directives.extend(parse_directives(marker, scope="container"))
    return build_container_defaults(record.visibility, directives)


def _validate_shape(record: RecordDescriptor) -> None:
    if record.shape != "named":
        raise UnsupportedShapeError(
            f"{_SHAPE_MESSAGES[record.shape]} (record={record.ident})",
            record.shape_location or record.location,
        )
    for field in record.fields:
        if field.ident is None:
            raise UnsupportedShapeError(
                f"{_SHAPE_MESSAGES['tuple']} (record={record.ident})", field.location
            )


def _generics(params: tuple[GenericParam, ...]) -> tuple[str, str]:
    if not params:
        return "", ""
    decl = ", ".join(param.declaration for param in params)
    usage = ", ".join(param.usage for param in params)
    return f"<{decl}>", f"<{usage}>"
