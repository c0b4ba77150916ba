# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Load record descriptors from JSON documents."""

import json
import logging
from pathlib import Path
from typing import Any, cast

import pathspec

from gusket.directives import parse_visibility
from gusket.errors import UnsupportedDirectiveError
from gusket.model import (
    DirectiveMarker,
    FieldDescriptor,
    GenericKind,
    GenericParam,
    Location,
    RecordDescriptor,
    RecordShape,
    Visibility,
)

logger = logging.getLogger(__name__)

_SHAPES: set[str] = {"named", "tuple", "unit", "enum", "union"}


class DescriptorError(RuntimeError):
    """Represent an unreadable or malformed descriptor document."""


class IgnoreMatcher:
    """Match descriptor paths against .gitignore patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        self._spec = spec

    @classmethod
    def from_root(cls, root: Path) -> "IgnoreMatcher":
        """Build matcher from root and nested .gitignore files.

        Args:
            root: Directory being scanned.

        Returns:
            Configured ignore matcher.

        Raises:
            OSError: If .gitignore files cannot be read.
        """
        patterns: list[str] = []
        for ignore_path in sorted(root.rglob(".gitignore")):
            base = ignore_path.parent.relative_to(root).as_posix()
            if base == ".":
                base = ""
            for line in ignore_path.read_text(encoding="utf-8").splitlines():
                patterns.append(_rebase_gitignore_line(line=line, base=base))
        return cls(spec=pathspec.GitIgnoreSpec.from_lines(patterns))

    def matches(self, relative_path: str) -> bool:
        return bool(relative_path) and self._spec.match_file(relative_path)


def discover_descriptor_files(root: Path) -> list[Path]:
    """List descriptor files beneath a directory, honoring .gitignore.

    Args:
        root: Directory to scan.

    Returns:
        Sorted JSON file paths that are not ignored.
    """
    matcher = IgnoreMatcher.from_root(root)
    found: list[Path] = []
    for path in sorted(root.rglob("*.json")):
        relative = path.relative_to(root).as_posix()
        if matcher.matches(relative):
            logger.debug(f"Ignoring descriptor file (path={relative})")
            continue
        found.append(path)
    return found


def load_records(path: Path) -> list[RecordDescriptor]:
    """Read every record descriptor of one JSON document.

    Args:
        path: Descriptor file path.

    Returns:
        Records in document order.

    Raises:
        DescriptorError: If the file cannot be read or is malformed.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DescriptorError(f"Cannot read descriptor {path}: {exc}") from exc
    return parse_document(payload, source=str(path))


def parse_document(payload: Any, source: str | None = None) -> list[RecordDescriptor]:
    """Convert a decoded JSON document to record descriptors.

    Args:
        payload: Decoded document with a ``records`` list.
        source: Path reported in diagnostic locations.

    Returns:
        Records in document order.

    Raises:
        DescriptorError: If the document does not follow the descriptor layout.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("records"), list):
        raise DescriptorError(f"{source or '<input>'}: expected an object with a 'records' list")
    return [_parse_record(item, source) for item in payload["records"]]


def parse_generic_param(text: str) -> GenericParam:
    """Split a generic parameter declaration into its forms.

    Args:
        text: Declaration form such as ``'a``, ``T: Clone`` or ``const N: usize``.

    Returns:
        Generic parameter with the derived bare usage form.

    Raises:
        DescriptorError: If the declaration is empty.
    """
    declaration = text.strip()
    if not declaration:
        raise DescriptorError("Empty generic parameter")
    kind: GenericKind = "type"
    head = declaration
    if declaration.startswith("const "):
        kind = "const"
        head = declaration[len("const "):]
    elif declaration.startswith("'"):
        kind = "lifetime"
    usage = head.split(":", 1)[0].split("=", 1)[0].strip()
    return GenericParam(kind=kind, declaration=declaration, usage=usage)


def _parse_record(item: Any, source: str | None) -> RecordDescriptor:
    origin = source or "<input>"
    if not isinstance(item, dict) or not isinstance(item.get("ident"), str):
        raise DescriptorError(f"{origin}: record entries need an 'ident' string")
    ident = item["ident"]
    shape = item.get("shape", "named")
    if shape not in _SHAPES:
        raise DescriptorError(f"{origin}: record {ident} has unknown shape {shape!r}")
    where_clause = item.get("where")
    if where_clause is not None and not isinstance(where_clause, str):
        raise DescriptorError(f"{origin}: record {ident} 'where' must be a string")
    generics = _list_entry(item, "generics", f"record {ident}", origin)
    if not all(isinstance(param, str) for param in generics):
        raise DescriptorError(f"{origin}: record {ident} generic parameters must be strings")

    location = _location(item, source)
    return RecordDescriptor(
        ident=ident,
        shape=cast(RecordShape, shape),
        visibility=_parse_record_visibility(item.get("visibility", ""), location),
        fields=tuple(
            _parse_field(field, source)
            for field in _list_entry(item, "fields", f"record {ident}", origin)
        ),
        generics=tuple(parse_generic_param(param) for param in generics),
        where_clause=where_clause,
        markers=tuple(
            _parse_marker(marker, location)
            for marker in _list_entry(item, "directives", f"record {ident}", origin)
        ),
        location=location,
        shape_location=location,
    )


def _parse_record_visibility(value: Any, location: Location) -> Visibility:
    if not isinstance(value, str):
        raise DescriptorError(f"{location}: record 'visibility' must be a string")
    try:
        return parse_visibility(value, location)
    except UnsupportedDirectiveError as exc:
        raise DescriptorError(f"{exc.location}: invalid record visibility {value!r}") from exc


def _parse_field(item: Any, source: str | None) -> FieldDescriptor:
    origin = source or "<input>"
    if not isinstance(item, dict) or not isinstance(item.get("type"), str):
        raise DescriptorError(f"{origin}: field entries need a 'type' string")
    ident = item.get("ident")
    if ident is not None and (not isinstance(ident, str) or not ident.isidentifier()):
        raise DescriptorError(f"{origin}: field 'ident' must be a non-empty identifier string")
    location = _location(item, source)
    docs = _list_entry(item, "docs", f"field {ident}", origin)
    return FieldDescriptor(
        ident=ident,
        ty=item["type"],
        docs=tuple(str(doc) for doc in docs),
        location=location,
        markers=tuple(
            _parse_marker(marker, location)
            for marker in _list_entry(item, "directives", f"field {ident}", origin)
        ),
    )


def _parse_marker(item: Any, fallback: Location) -> DirectiveMarker:
    if isinstance(item, str):
        return DirectiveMarker(arguments=item, location=fallback)
    if isinstance(item, dict):
        arguments = item.get("arguments", "")
        if not isinstance(arguments, str):
            raise DescriptorError(f"{fallback}: directive 'arguments' must be a string")
        location = fallback
        if "line" in item:
            location = _location(item, fallback.path)
        return DirectiveMarker(arguments=arguments, location=location)
    raise DescriptorError(f"{fallback}: directive markers must be strings or objects")


def _list_entry(item: dict[str, Any], key: str, owner: str, origin: str) -> list[Any]:
    value = item.get(key, [])
    if not isinstance(value, list):
        raise DescriptorError(f"{origin}: {owner} '{key}' must be a list")
    return value


def _location(item: dict[str, Any], source: str | None) -> Location:
    line = item.get("line", 0)
    column = item.get("column", 0)
    for key, value in (("line", line), ("column", column)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise DescriptorError(
                f"{source or '<input>'}: '{key}' must be a non-negative integer, got {value!r}"
            )
    return Location(path=source, line=line, column=column)


def _rebase_gitignore_line(line: str, base: str) -> str:
    """Rewrite a nested .gitignore line relative to the scan root.

    Args:
        line: Original .gitignore line.
        base: Parent directory relative to the scan root.

    Returns:
        Root-relative pattern line.
    """
    if not base or not line or line.lstrip().startswith("#"):
        return line
    if line.startswith(r"\!") or line.startswith(r"\#"):
        return line
    is_negation = line.startswith("!")
    pattern = line[1:] if is_negation else line
    anchored = pattern.startswith("/")
    pattern = pattern[1:] if anchored else pattern
    prefixed = f"{base}/{pattern}" if pattern else base
    if anchored:
        prefixed = f"/{prefixed}"
    return f"!{prefixed}" if is_negation else prefixed
