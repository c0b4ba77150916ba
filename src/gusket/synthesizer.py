# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Synthesize accessor method definitions for one field."""

import logging
from dataclasses import dataclass
from typing import Literal

from gusket.model import FieldDescriptor, Location, Visibility
from gusket.policy import ResolvedPolicy

logger = logging.getLogger(__name__)

Receiver = Literal["ref", "mut_ref"]

GETTER_ATTRIBUTES: tuple[str, ...] = (
    '#[must_use = "Getters have no side effect"]',
    "#[inline(always)]",
)
MUT_GETTER_ATTRIBUTES: tuple[str, ...] = (
    '#[must_use = "Mutable getters have no side effect"]',
    "#[inline(always)]",
)
SETTER_ATTRIBUTES: tuple[str, ...] = ("#[inline(always)]",)


@dataclass(frozen=True)
class Parameter:
    """One non-receiver method parameter."""

    name: str
    ty: str


@dataclass(frozen=True)
class MethodDefinition:
    """Fully specified accessor method, ready for emission.

    Attributes:
        name: Method name.
        visibility: Method visibility.
        docs: Documentation lines copied from the field.
        attributes: Extra attributes, written as source text.
        receiver: How the record is borrowed.
        params: Parameters after the receiver.
        return_type: Return type; ``None`` for methods returning nothing.
        body: Body statement or expression.
        location: Location of the field the method was generated for.
    """

    name: str
    visibility: Visibility
    docs: tuple[str, ...]
    attributes: tuple[str, ...]
    receiver: Receiver
    params: tuple[Parameter, ...]
    return_type: str | None
    body: str
    location: Location


def synthesize(field: FieldDescriptor, policy: ResolvedPolicy) -> list[MethodDefinition]:
    """Build the accessor methods requested by a resolved policy.

    Args:
        field: Named field descriptor.
        policy: Resolved policy of the field.

    Returns:
        No methods when the field is not derived, the getter alone for
        immutable fields, or getter, mutable getter and setter otherwise.
    """
    if not policy.derive:
        return []
    if field.ident is None:
        raise ValueError("Accessors require a named field")

    ident = field.ident
    ref_op = "" if policy.by_value else "&"
    methods = [
        MethodDefinition(
            name=ident,
            visibility=policy.visibility,
            docs=field.docs,
            attributes=GETTER_ATTRIBUTES,
            receiver="ref",
            params=(),
            return_type=f"{ref_op}{field.ty}",
            body=f"{ref_op}self.{ident}",
            location=field.location,
        )
    ]

    if policy.mutable:
        methods.append(
            MethodDefinition(
                name=f"{ident}_mut",
                visibility=policy.visibility,
                docs=field.docs,
                attributes=MUT_GETTER_ATTRIBUTES,
                receiver="mut_ref",
                params=(),
                return_type=f"&mut {field.ty}",
                body=f"&mut self.{ident}",
                location=field.location,
            )
        )
        methods.append(
            MethodDefinition(
                name=f"set_{ident}",
                visibility=policy.visibility,
                docs=field.docs,
                attributes=SETTER_ATTRIBUTES,
                receiver="mut_ref",
                params=(Parameter(name=ident, ty=field.ty),),
                return_type=None,
                body=f"self.{ident} = {ident};",
                location=field.location,
            )
        )

    logger.debug(
        "Synthesized accessors",
        extra={"field": ident, "count": len(methods), "by_value": policy.by_value},
    )
    return methods
