"""Locate variable declarations and ``@import`` statements in SCSS source."""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import Declaration, DeclarationFlags, ImportStatement, ImportTarget, Position

_DECLARATION = re.compile(r"^\$([A-Za-z_-][\w-]*)\s*:(.*)$", re.DOTALL)
_TRAILING_FLAG = re.compile(r"\s*!(default|global)\s*$", re.IGNORECASE)
_IMPORT = re.compile(r"^@import\b(.*)$", re.DOTALL | re.IGNORECASE)
_DIRECTIVE = re.compile(r"^@([\w-]+)")
_QUOTED = re.compile(r"""^(["'])(.*)\1$""", re.DOTALL)

# Blocks whose body always runs when the enclosing scope runs.
_UNCONDITIONAL_DIRECTIVES = {"media", "supports", "at-root", "document"}


@dataclass
class _Statement:
    text: str
    start: int
    end: int
    depth: int
    unconditional: bool


@dataclass
class _ScanResult:
    statements: List[_Statement] = field(default_factory=list)


def parse_declarations(text: str, source_file: Optional[str] = None) -> List[Declaration]:
    """Return the globally visible variable declarations of ``text`` in order."""
    locator = _LineLocator(text)
    declarations: List[Declaration] = []
    for statement in _scan(text).statements:
        match = _DECLARATION.match(statement.text)
        if not match:
            continue
        expression, flags = _split_flags(match.group(2))
        if statement.depth > 0 and not (flags.global_ and statement.unconditional):
            continue
        declarations.append(
            Declaration(
                name=f"${match.group(1)}",
                expression=expression,
                flags=flags,
                position=locator.position(statement.start),
                source_file=source_file,
            )
        )
    return declarations


def parse_imports(text: str) -> List[ImportStatement]:
    """Return ``@import`` statements that the compiler would evaluate in place."""
    imports: List[ImportStatement] = []
    for statement in _scan(text).statements:
        if not statement.unconditional:
            continue
        match = _IMPORT.match(statement.text)
        if not match:
            continue
        targets = tuple(_import_target(part) for part in _split_top_level(match.group(1)))
        if targets:
            imports.append(ImportStatement(targets=targets, start=statement.start, end=statement.end))
    return imports


def is_plain_css_import(path: str) -> bool:
    """Return True for imports that compile to a CSS ``@import`` instead of inlining."""
    lowered = path.lower()
    return (
        lowered.endswith(".css")
        or lowered.startswith(("http://", "https://", "//"))
        or lowered.startswith("url(")
    )


def _import_target(raw: str) -> ImportTarget:
    match = _QUOTED.match(raw)
    if not match:
        # url(...), media-qualified or otherwise unquoted imports.
        return ImportTarget(raw=raw, path=None)
    path = match.group(2)
    if is_plain_css_import(path):
        return ImportTarget(raw=raw, path=None)
    return ImportTarget(raw=raw, path=path)


def _split_flags(expression: str) -> tuple[str, DeclarationFlags]:
    default = False
    global_ = False
    value = expression.strip()
    while True:
        match = _TRAILING_FLAG.search(value)
        if not match:
            break
        if match.group(1).lower() == "default":
            default = True
        else:
            global_ = True
        value = value[: match.start()].rstrip()
    return value, DeclarationFlags(default=default, global_=global_)


def _split_top_level(text: str) -> List[str]:
    parts: List[str] = []
    current: List[str] = []
    quote: Optional[str] = None
    depth = 0
    for char in text:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char in {'"', "'"}:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append("".join(current).strip())
    return [part for part in parts if part]


def _is_unconditional_header(header: str) -> bool:
    match = _DIRECTIVE.match(header)
    if not match:
        # Style rules and nested properties.
        return True
    return match.group(1).lower() in _UNCONDITIONAL_DIRECTIVES


def _scan(text: str) -> _ScanResult:
    """Split ``text`` into statements, tracking block nesting.

    Comments, quoted strings and ``#{}`` interpolation are skipped so their
    contents never terminate a statement.
    """
    result = _ScanResult()
    blocks: List[bool] = []
    index = 0
    length = len(text)
    start: Optional[int] = None
    parens = 0

    def _emit(begin: int, end: int, stop: int) -> None:
        body = text[begin:stop].strip()
        if body:
            result.statements.append(
                _Statement(
                    text=body,
                    start=begin,
                    end=end,
                    depth=len(blocks),
                    unconditional=all(blocks),
                )
            )

    while index < length:
        char = text[index]
        nxt = text[index + 1] if index + 1 < length else ""

        # `://` belongs to an unquoted url, not a comment.
        if char == "/" and nxt == "/" and (index == 0 or text[index - 1] != ":"):
            newline = text.find("\n", index)
            index = length if newline < 0 else newline
            continue
        if char == "/" and nxt == "*":
            close = text.find("*/", index + 2)
            index = length if close < 0 else close + 2
            continue
        if char.isspace():
            index += 1
            continue

        if start is None:
            start = index

        if char in {'"', "'"}:
            index = _skip_string(text, index)
            continue
        if char == "#" and nxt == "{":
            index = _skip_interpolation(text, index)
            continue

        if char == "(":
            parens += 1
        elif char == ")":
            parens = max(0, parens - 1)
        elif parens == 0 and char == ";":
            _emit(start, index + 1, index)
            start = None
        elif parens == 0 and char == "{":
            header = text[start:index].strip()
            blocks.append(_is_unconditional_header(header))
            start = None
        elif parens == 0 and char == "}":
            if start is not None and start < index:
                _emit(start, index, index)
            if blocks:
                blocks.pop()
            start = None
        index += 1

    if start is not None:
        _emit(start, length, length)
    return result


def _skip_string(text: str, index: int) -> int:
    quote = text[index]
    index += 1
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        if char == "\n":
            return index
        index += 1
    return index


def _skip_interpolation(text: str, index: int) -> int:
    depth = 0
    while index < len(text):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
        elif char in {'"', "'"}:
            index = _skip_string(text, index)
            continue
        index += 1
    return index


class _LineLocator:
    def __init__(self, text: str) -> None:
        self._line_starts: Sequence[int] = [0] + [
            match.end() for match in re.finditer(r"\n", text)
        ]

    def position(self, cursor: int) -> Position:
        line_index = bisect.bisect_right(self._line_starts, cursor) - 1
        return Position(
            line=line_index + 1,
            column=cursor - self._line_starts[line_index] + 1,
            cursor=cursor,
        )


__all__ = ["is_plain_css_import", "parse_declarations", "parse_imports"]
