"""A small INI reader: sections, name=value or name:value pairs, comments and continuation lines."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

START_COMMENT_PREFIXES = ";#"
INLINE_COMMENT_PREFIXES = ";"
MAX_LINE = 200
MAX_SECTION = 50
MAX_NAME = 50

_WHITESPACE = " \t\n\v\f\r"
_BOM = "\ufeff"


@dataclass(frozen=True)
class IniEntry:
    """One value found in the file."""

    section: str
    name: str
    value: str
    lineno: int


@dataclass
class IniResult:
    """Everything parsed, plus the lines that could not be parsed."""

    entries: list[IniEntry] = field(default_factory=list)
    error_lines: list[int] = field(default_factory=list)

    @property
    def first_error(self) -> int | None:
        """Line number of the first malformed line, or None."""
        return self.error_lines[0] if self.error_lines else None

    @property
    def ok(self) -> bool:
        return not self.error_lines

    def __iter__(self) -> Iterator[IniEntry]:
        return iter(self.entries)


def _find_chars_or_comment(text: str, chars: str | None) -> int:
    """Index of the first char in ``chars`` or inline comment, else len(text)."""
    was_space = False
    for index, char in enumerate(text):
        if chars and char in chars:
            return index
        if was_space and char in INLINE_COMMENT_PREFIXES:
            return index
        was_space = char in _WHITESPACE
    return len(text)


def _read_chunks(lines: Iterable[str]) -> Iterator[str]:
    """Split over-long lines the way a fixed-size line buffer would."""
    limit = MAX_LINE - 1
    for line in lines:
        while line:
            yield line[:limit]
            line = line[limit:]


def parse_ini(lines: Iterable[str]) -> IniResult:
    """Parse INI text given as lines; parsing goes on past malformed lines."""
    result = IniResult()
    section = ""
    prev_name = ""
    for lineno, line in enumerate(_read_chunks(lines), start=1):
        start = line
        if lineno == 1 and start.startswith(_BOM):
            start = start[1:]
        left = start.lstrip(_WHITESPACE)
        indented = len(left) < len(line)
        text = left.rstrip(_WHITESPACE)

        if not text or text[0] in START_COMMENT_PREFIXES:
            continue

        if prev_name and indented:
            value = text[: _find_chars_or_comment(text, None)].rstrip(_WHITESPACE)
            result.entries.append(IniEntry(section, prev_name, value, lineno))
        elif text[0] == "[":
            end = 1 + _find_chars_or_comment(text[1:], "]")
            if end < len(text) and text[end] == "]":
                section = text[1:end][: MAX_SECTION - 1]
                prev_name = ""
            else:
                result.error_lines.append(lineno)
        else:
            end = _find_chars_or_comment(text, "=:")
            if end < len(text) and text[end] in "=:":
                name = text[:end].rstrip(_WHITESPACE)
                rest = text[end + 1 :]
                value = rest[: _find_chars_or_comment(rest, None)].strip(_WHITESPACE)
                prev_name = name[: MAX_NAME - 1]
                result.entries.append(IniEntry(section, name, value, lineno))
            else:
                result.error_lines.append(lineno)
    return result


def _split_lines(text: str) -> Iterator[str]:
    pieces = text.split("\n")
    for piece in pieces[:-1]:
        yield piece + "\n"
    if pieces[-1]:
        yield pieces[-1]


def parse_ini_string(text: str) -> IniResult:
    """Parse INI data held in a string."""
    return parse_ini(_split_lines(text))


def parse_ini_file(path: str | os.PathLike[str]) -> IniResult:
    """Parse an INI file; OSError is raised if it cannot be opened."""
    with open(path, encoding="utf-8", errors="surrogateescape", newline="\n") as handle:
        return parse_ini(handle)