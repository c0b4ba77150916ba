# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Render implementation blocks as Rust source text."""

from gusket.driver import ImplBlock
from gusket.synthesizer import MethodDefinition

_INDENT = "    "
_RECEIVERS = {"ref": "&self", "mut_ref": "&mut self"}


def render_impl(block: ImplBlock) -> str:
    """Render one implementation block.

    Args:
        block: Implementation block produced by the driver.

    Returns:
        Source text of the block, terminated by a newline.
    """
    header = f"impl{block.generics_decl} {block.record_ident}{block.generics_usage}"
    if block.where_clause:
        header += f" {block.where_clause}"
    lines = [header + " {"]
    for index, method in enumerate(block.methods):
        if index:
            lines.append("")
        lines.extend(_INDENT + line for line in render_method(method))
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_method(method: MethodDefinition) -> list[str]:
    """Render one method definition as source lines without indentation."""
    lines = [f"/// {doc}".rstrip() for doc in method.docs]
    lines.extend(method.attributes)

    params = [_RECEIVERS[method.receiver]]
    params.extend(f"{param.name}: {param.ty}" for param in method.params)
    signature = f"fn {method.name}({', '.join(params)})"
    if method.return_type is not None:
        signature += f" -> {method.return_type}"
    if not method.visibility.is_inherited:
        signature = f"{method.visibility.text} {signature}"

    lines.append(signature + " {")
    lines.append(_INDENT + method.body)
    lines.append("}")
    return lines
