"""In-memory filename and package indices over a parsed manifest."""

import logging
from typing import Iterable, Iterator

from ..manifest.record import ManifestRecord

logger = logging.getLogger(__name__)

PACKAGE_TAG_PREFIX = 'package='


def parse_package_names(tags: str | None) -> list[str]:
    """Extract package names from a tags attribute value.

    Only the first 'package=' occurrence is used, and everything after it up to the end of
    the value is split on ','. Other tags that follow it are therefore read as package
    names too; the tags grammar is ambiguous there and this keeps the existing reading.

    Examples:
        >>> parse_package_names('package=clibs,debug')
        ['clibs', 'debug']
        >>> parse_package_names('config')
        []
    """
    if not tags:
        return []

    start = tags.find(PACKAGE_TAG_PREFIX)
    if start < 0:
        return []

    value = tags[start + len(PACKAGE_TAG_PREFIX):]
    return [name for name in value.split(',') if name]


class ManifestIndex:
    """Filename and package indices built in one pass over the manifest records.

    - Filename index: filename -> records with that filename, in scan order
    - Package index: package name -> set of filenames tagged with that package

    The index is populated through add() while loading and only read afterwards.
    """

    def __init__(self, records: Iterable[ManifestRecord] = ()):
        self._files: dict[str, list[ManifestRecord]] = {}
        self._packages: dict[str, set[str]] = {}
        for record in records:
            self.add(record)

    def add(self, record: ManifestRecord) -> None:
        self._files.setdefault(record.filename, []).append(record)

        for package_name in parse_package_names(record.get('tags')):
            self._packages.setdefault(package_name, set()).add(record.filename)

    def __len__(self) -> int:
        """Number of distinct filenames."""
        return len(self._files)

    def __contains__(self, filename: object) -> bool:
        return filename in self._files

    def records(self, filename: str) -> list[ManifestRecord]:
        """Records for filename in scan order.

        Raises:
            KeyError: filename is not in the manifest
        """
        return list(self._files[filename])

    def filenames(self) -> list[str]:
        """All distinct filenames, sorted."""
        return sorted(self._files)

    def iter_buckets(self) -> Iterator[tuple[str, list[ManifestRecord]]]:
        """Yield (filename, records) sorted by filename."""
        for filename in self.filenames():
            yield filename, self.records(filename)

    def package_names(self) -> list[str]:
        """All package names, sorted."""
        return sorted(self._packages)

    def package_files(self, package_name: str) -> list[str]:
        """Filenames of package_name, sorted.

        Raises:
            KeyError: No record is tagged with package_name
        """
        return sorted(self._packages[package_name])
