"""Parsing of single METALOG lines into ManifestRecord objects."""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# Fields are separated by ASCII blanks only; any other character belongs to the field
FIELD_SEPARATOR = re.compile(r'[ \t]+')
BLANKS = ' \t'


class MalformedLineError(ValueError):
    """Raised when a manifest line cannot be split into a filename and its attributes.

    Attributes:
        line_number: 1-based physical line number in the manifest
        line: The offending line text, without the trailing newline
    """

    def __init__(self, line_number: int, line: str):
        super().__init__(f"malformed line {line_number}: {line!r}")
        self.line_number = line_number
        self.line = line


@dataclass(frozen=True)
class ManifestRecord:
    """One parsed manifest line.

    Attributes:
        filename: Path as written in the manifest (e.g. ./usr/bin/su). Escapes such as
                  \\040 are kept verbatim.
        line_number: 1-based physical line number the record was read from
        attributes: Read-only mapping of attribute name to string value, in the order the
                    attributes first appear on the line
    """
    filename: str
    line_number: int
    attributes: Mapping[str, str] = field(hash=False)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)

    @property
    def type(self) -> str | None:
        return self.attributes.get('type')


def parse_attributes(text: str) -> dict[str, str]:
    """Tokenize the attribute part of a manifest line.

    Each blank-separated token is split at its first '='. Tokens without '=', with an
    empty key or with an empty value are dropped. A repeated key keeps its first position
    and takes the last value.
    """
    attributes: dict[str, str] = {}
    for token in FIELD_SEPARATOR.split(text):
        key, sep, value = token.partition('=')
        if not sep or not key or not value:
            continue
        attributes[key] = value
    return attributes


def parse_line(line: str, line_number: int) -> ManifestRecord:
    """Parse a non-blank, non-comment manifest line.

    Args:
        line: Line text; a trailing newline is ignored
        line_number: 1-based physical line number

    Returns:
        ManifestRecord for the line

    Raises:
        MalformedLineError: The line has no filename/attributes split
    """
    line = line.rstrip('\r\n')
    parts = FIELD_SEPARATOR.split(line.strip(BLANKS), 1)
    if len(parts) != 2 or not parts[0]:
        raise MalformedLineError(line_number, line)

    filename, rest = parts
    return ManifestRecord(filename, line_number, MappingProxyType(parse_attributes(rest)))


def is_skipped_line(line: str) -> bool:
    """Return True for blank lines and '#' comments, which never produce a record."""
    stripped = line.rstrip('\r\n').strip(BLANKS)
    return not stripped or stripped.startswith('#')
