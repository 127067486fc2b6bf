import functools
import logging
import os
from pathlib import Path
from typing import Callable

from .index.inode import InodeIndex
from .index.store import ManifestIndex
from .manifest.reader import read_manifest
from .manifest.record import MalformedLineError
from .report.duplicate import DuplicateFinding, find_duplicate_filenames, format_duplicate_report
from .report.inode import InodeConflict, find_inode_conflicts, format_inode_report
from .report.package import (PACKAGE_REPORT_HEADER, PackageSummary, format_package_report,
                             summarize_packages)
from .utils.stat_lookup import FilesystemInodeLookup, InodeLookup

logger = logging.getLogger(__name__)


class AuditSession:
    """One audit of a METALOG manifest.

    The session reads the whole manifest when it is created and builds the filename and
    package indices in that single pass. The inode index is only built the first time the
    inode report is requested, since it touches the filesystem. After construction the
    session only answers queries; every report can be asked for any number of times and
    in any order with the same result.

    Example:
        session = AuditSession('METALOG', inode_lookup=FilesystemInodeLookup('/mnt/image'))
        sys.stdout.write(session.render(include_inodes=True))
    """

    def __init__(self, manifest_path: str | os.PathLike, *, strict: bool = False,
                 inode_lookup: InodeLookup | None = None,
                 on_malformed: Callable[[MalformedLineError], None] | None = None):
        """Load the manifest and build the filename and package indices.

        Args:
            manifest_path: METALOG file to audit
            strict: Abort on the first malformed line instead of skipping it
            inode_lookup: Resolves filenames to inode identities; defaults to stat() under /
            on_malformed: Called for every malformed line that is skipped

        Raises:
            OSError: The manifest cannot be opened or read
            MalformedLineError: A malformed line was found and strict is True
        """
        self._manifest_path = Path(manifest_path)
        self._inode_lookup = inode_lookup if inode_lookup is not None else FilesystemInodeLookup()
        self._index = ManifestIndex(read_manifest(self._manifest_path, strict=strict, on_malformed=on_malformed))
        logger.info(f"Indexed {len(self._index)} filenames in {len(self._index.package_names())} packages")

    @property
    def manifest_path(self) -> Path:
        return self._manifest_path

    @property
    def index(self) -> ManifestIndex:
        return self._index

    @functools.cached_property
    def inode_index(self) -> InodeIndex:
        return InodeIndex.build(self._index.filenames(), self._inode_lookup)

    def package_summaries(self) -> list[PackageSummary]:
        return summarize_packages(self._index)

    def duplicate_findings(self) -> list[DuplicateFinding]:
        return find_duplicate_filenames(self._index)

    def inode_conflicts(self) -> list[InodeConflict]:
        return find_inode_conflicts(self._index, self.inode_index)

    def pkg_report(self) -> str:
        """Package blocks, sorted by package name."""
        return format_package_report(self.package_summaries())

    def dup_report(self) -> tuple[str, str]:
        """Repeated-filename warnings and errors, as two separate blocks."""
        return format_duplicate_report(self.duplicate_findings())

    def inode_report(self) -> str:
        """Errors for hard-link groups whose entries disagree."""
        return format_inode_report(self.inode_conflicts())

    def render(self, *, include_inodes: bool = False) -> str:
        """Full report text: packages, duplicate warnings, duplicate errors, then inode errors."""
        warnings, errors = self.dup_report()
        parts = [PACKAGE_REPORT_HEADER, self.pkg_report(), warnings, errors]
        if include_inodes:
            parts.append(self.inode_report())
        return ''.join(parts)
