# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Parse generation directive lists into structured directives."""

import logging
from dataclasses import dataclass
from typing import Literal, cast

import Levenshtein

from gusket.errors import UnsupportedDirectiveError
from gusket.model import DirectiveMarker, FieldDescriptor, Location, Visibility

logger = logging.getLogger(__name__)

DirectiveKind = Literal["vis", "immut", "mut", "copy", "skip", "all"]
DirectiveScope = Literal["container", "field"]
TokenKind = Literal["ident", "punct"]

CONTAINER_KEYWORDS: tuple[DirectiveKind, ...] = ("all", "immut", "vis")
FIELD_KEYWORDS: tuple[DirectiveKind, ...] = ("copy", "immut", "mut", "skip", "vis")

_PUNCTUATION = ("::", "=", ",", "(", ")")
_RESTRICTED_SCOPES = ("crate", "self", "super")
_SUGGESTION_MAX_DISTANCE = 2


@dataclass(frozen=True)
class Token:
    """One lexical token of a directive list."""

    kind: TokenKind
    text: str
    location: Location


@dataclass(frozen=True)
class Directive:
    """One parsed directive.

    Attributes:
        kind: Directive keyword.
        location: Location of the keyword token.
        visibility: Assigned visibility; only set for ``vis`` directives.
    """

    kind: DirectiveKind
    location: Location
    visibility: Visibility | None = None


@dataclass(frozen=True)
class FieldOptions:
    """Parsed, not yet merged, directives of one field.

    Attributes:
        marked: Whether the field carries at least one directive marker.
        directives: Directives of all markers, in declaration order.
    """

    marked: bool
    directives: tuple[Directive, ...] = ()


def tokenize(text: str, origin: Location) -> list[Token]:
    """Split directive text into tokens.

    Args:
        text: Directive list text, without the surrounding marker syntax.
        origin: Location of the first character of ``text``.

    Returns:
        Tokens in source order.

    Raises:
        UnsupportedDirectiveError: If ``text`` contains an unexpected character.
    """
    tokens: list[Token] = []
    index = 0
    line_delta = 0
    line_start = 0
    while index < len(text):
        char = text[index]
        if char == "\n":
            line_delta += 1
            index += 1
            line_start = index
            continue
        if char.isspace():
            index += 1
            continue

        column = index - line_start
        if line_delta == 0:
            location = origin.shifted(column)
        else:
            location = Location(path=origin.path, line=origin.line + line_delta, column=column)

        if char.isalpha() or char == "_":
            end = index + 1
            while end < len(text) and (text[end].isalnum() or text[end] == "_"):
                end += 1
            tokens.append(Token(kind="ident", text=text[index:end], location=location))
            index = end
            continue

        punct = next((p for p in _PUNCTUATION if text.startswith(p, index)), None)
        if punct is None:
            raise UnsupportedDirectiveError(f"Unexpected character {char!r}", location)
        tokens.append(Token(kind="punct", text=punct, location=location))
        index += len(punct)
    return tokens


class _Cursor:
    """Walk a token list with one token of lookahead."""

    def __init__(self, tokens: list[Token], end: Location) -> None:
        self._tokens = tokens
        self._index = 0
        self._end = end

    def at_end(self) -> bool:
        return self._index >= len(self._tokens)

    def peek(self) -> Token | None:
        if self.at_end():
            return None
        return self._tokens[self._index]

    def peek_is(self, text: str) -> bool:
        token = self.peek()
        return token is not None and token.text == text

    def location(self) -> Location:
        token = self.peek()
        return token.location if token is not None else self._end

    def next(self, expected: str) -> Token:
        token = self.peek()
        if token is None:
            raise UnsupportedDirectiveError(
                f"Unexpected end of directive list, expected {expected}", self._end
            )
        self._index += 1
        return token

    def expect(self, text: str) -> Token:
        token = self.next(expected=f"`{text}`")
        if token.text != text:
            raise UnsupportedDirectiveError(
                f"Expected `{text}`, found `{token.text}`", token.location
            )
        return token

    def expect_ident(self, expected: str) -> Token:
        token = self.next(expected=expected)
        if token.kind != "ident":
            raise UnsupportedDirectiveError(
                f"Expected {expected}, found `{token.text}`", token.location
            )
        return token


def parse_directives(marker: DirectiveMarker, scope: DirectiveScope) -> list[Directive]:
    """Parse one marker's comma-separated directive list.

    Args:
        marker: Directive marker to parse.
        scope: Whether the marker is attached to a record or to a field.

    Returns:
        Directives in the order they were written. An empty marker yields an
        empty list.

    Raises:
        UnsupportedDirectiveError: If a keyword is unknown for ``scope`` or a
            visibility expression is malformed.
    """
    tokens = tokenize(marker.arguments, marker.location)
    cursor = _Cursor(tokens, end=marker.location.shifted(len(marker.arguments)))
    keywords = CONTAINER_KEYWORDS if scope == "container" else FIELD_KEYWORDS

    directives: list[Directive] = []
    while not cursor.at_end():
        directives.append(_parse_entry(cursor, keywords, scope))
        if cursor.at_end():
            break
        cursor.expect(",")
    return directives


def parse_field_options(field: FieldDescriptor) -> FieldOptions:
    """Parse every directive marker of a field.

    All markers are parsed in full, including entries that follow a ``skip``.

    Args:
        field: Field descriptor.

    Returns:
        Field options; ``marked`` is true whenever any marker is present.
    """
    directives: list[Directive] = []
    for marker in field.markers:
        directives.extend(parse_directives(marker, scope="field"))
    return FieldOptions(marked=bool(field.markers), directives=tuple(directives))


def parse_visibility(text: str, origin: Location) -> Visibility:
    """Parse a standalone visibility expression such as ``pub(crate)``.

    Args:
        text: Visibility text; empty for inherited visibility.
        origin: Location of the first character of ``text``.

    Returns:
        Parsed visibility.

    Raises:
        UnsupportedDirectiveError: If ``text`` is not one visibility expression.
    """
    cursor = _Cursor(tokenize(text, origin), end=origin.shifted(len(text)))
    visibility = _parse_visibility(cursor)
    if not cursor.at_end():
        token = cursor.next(expected="end of visibility")
        raise UnsupportedDirectiveError(
            f"Unexpected `{token.text}` after visibility expression", token.location
        )
    return visibility


def _parse_entry(
    cursor: _Cursor, keywords: tuple[DirectiveKind, ...], scope: DirectiveScope
) -> Directive:
    token = cursor.expect_ident(expected="directive keyword")
    if token.text not in keywords:
        raise UnsupportedDirectiveError(
            _unsupported_message(token.text, keywords, scope), token.location
        )
    kind = cast(DirectiveKind, token.text)
    if kind != "vis":
        return Directive(kind=kind, location=token.location)
    cursor.expect("=")
    return Directive(kind=kind, location=token.location, visibility=_parse_visibility(cursor))


def _parse_visibility(cursor: _Cursor) -> Visibility:
    """Parse a visibility expression up to the next comma.

    Args:
        cursor: Cursor positioned after ``=``.

    Returns:
        Parsed visibility; inherited when the expression is empty.

    Raises:
        UnsupportedDirectiveError: If the expression is malformed.
    """
    if cursor.at_end() or cursor.peek_is(","):
        return Visibility()

    location = cursor.location()
    token = cursor.next(expected="visibility")
    if token.kind == "ident" and token.text == "crate":
        return Visibility("crate")
    if token.kind != "ident" or token.text != "pub":
        raise UnsupportedDirectiveError(
            f"Malformed visibility expression starting at `{token.text}`", location
        )
    if not cursor.peek_is("("):
        return Visibility("pub")

    cursor.expect("(")
    scope = cursor.expect_ident(expected="visibility scope")
    if scope.text in _RESTRICTED_SCOPES:
        cursor.expect(")")
        return Visibility(f"pub({scope.text})")
    if scope.text != "in":
        raise UnsupportedDirectiveError(
            f"Malformed visibility expression, unexpected `{scope.text}`", scope.location
        )
    segments = [cursor.expect_ident(expected="module path").text]
    while cursor.peek_is("::"):
        cursor.expect("::")
        segments.append(cursor.expect_ident(expected="module path segment").text)
    cursor.expect(")")
    return Visibility(f"pub(in {'::'.join(segments)})")


def _unsupported_message(
    keyword: str, keywords: tuple[DirectiveKind, ...], scope: DirectiveScope
) -> str:
    message = f"Unsupported {scope} directive `{keyword}`"
    suggestion = _closest_keyword(keyword, keywords)
    if suggestion is not None:
        message += f"; did you mean `{suggestion}`?"
    logger.debug(
        "Rejected directive keyword",
        extra={"keyword": keyword, "scope": scope, "suggestion": suggestion},
    )
    return message


def _closest_keyword(keyword: str, keywords: tuple[DirectiveKind, ...]) -> str | None:
    """Find the known keyword closest to an unknown one.

    Args:
        keyword: Unknown keyword.
        keywords: Keywords valid in the current scope.

    Returns:
        Closest keyword within the suggestion distance, or ``None``.
    """
    best: str | None = None
    best_distance = _SUGGESTION_MAX_DISTANCE + 1
    for candidate in keywords:
        distance = int(Levenshtein.distance(keyword, candidate))
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best
