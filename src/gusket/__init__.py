# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for accessor generation."""

from gusket.directives import Directive, FieldOptions, parse_directives, parse_field_options
from gusket.driver import ImplBlock, container_defaults, process
from gusket.emit import render_impl
from gusket.errors import DiagnosticError, UnsupportedDirectiveError, UnsupportedShapeError
from gusket.loader import DescriptorError, load_records, parse_document
from gusket.model import (
    DirectiveMarker,
    FieldDescriptor,
    GenericParam,
    Location,
    RecordDescriptor,
    Visibility,
)
from gusket.policy import ContainerDefaults, ResolvedPolicy, build_container_defaults, resolve
from gusket.synthesizer import MethodDefinition, Parameter, synthesize

__all__ = [
    "ContainerDefaults",
    "DescriptorError",
    "DiagnosticError",
    "Directive",
    "DirectiveMarker",
    "FieldDescriptor",
    "FieldOptions",
    "GenericParam",
    "ImplBlock",
    "Location",
    "MethodDefinition",
    "Parameter",
    "RecordDescriptor",
    "ResolvedPolicy",
    "UnsupportedDirectiveError",
    "UnsupportedShapeError",
    "Visibility",
    "build_container_defaults",
    "container_defaults",
    "load_records",
    "parse_directives",
    "parse_document",
    "parse_field_options",
    "process",
    "render_impl",
    "resolve",
    "synthesize",
]
