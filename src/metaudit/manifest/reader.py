"""Reading a METALOG file into ManifestRecord objects."""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator

from .record import ManifestRecord, MalformedLineError, is_skipped_line, parse_line

logger = logging.getLogger(__name__)


def iter_records(lines: Iterable[str], *, strict: bool = False,
                 on_malformed: Callable[[MalformedLineError], None] | None = None) -> Iterator[ManifestRecord]:
    """Yield a record for every meaningful line.

    Blank and comment lines are skipped but still count toward the physical line number.

    Args:
        lines: Manifest lines, in file order
        strict: Raise on the first malformed line instead of skipping it
        on_malformed: Called with the error for every skipped malformed line

    Raises:
        MalformedLineError: A malformed line was found and strict is True
    """
    for line_number, line in enumerate(lines, start=1):
        if is_skipped_line(line):
            continue

        try:
            yield parse_line(line, line_number)
        except MalformedLineError as e:
            if strict:
                raise
            if on_malformed is not None:
                on_malformed(e)
            else:
                logger.warning(f"Skipping malformed line {e.line_number}: {e.line!r}")


def read_manifest(path: str | os.PathLike, *, strict: bool = False,
                  on_malformed: Callable[[MalformedLineError], None] | None = None) -> list[ManifestRecord]:
    """Load every record of the manifest at path.

    The whole file is parsed before returning, so callers never see a partial manifest.
    Only '\\n' ends a line; a stray carriage return stays part of its entry. Bytes that are
    not valid UTF-8 are kept as surrogate escapes.

    Raises:
        OSError: The manifest cannot be opened or read
        MalformedLineError: A malformed line was found and strict is True
    """
    path = Path(path)
    logger.info(f"Reading manifest: {path}")
    with open(path, 'r', encoding='utf-8', errors='surrogateescape', newline='\n') as f:
        records = list(iter_records(f, strict=strict, on_malformed=on_malformed))
    logger.info(f"Read {len(records)} records from {path}")
    return records
