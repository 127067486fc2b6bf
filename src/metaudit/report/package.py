"""Per-package summaries: file count, total size and setuid/setgid presence."""

import logging
import stat

from ..index.store import ManifestIndex
from .equivalence import compare_records

logger = logging.getLogger(__name__)

PACKAGE_REPORT_HEADER = '--- PACKAGE REPORTS ---\n'
UNKNOWN = '?'


class PackageSummary:
    """Summary of one package.

    Attributes:
        name: Package name
        file_count: Number of distinct filenames in the package, or None when unknown
        total_size: Sum of the sizes of its regular files, or None when unknown
        setuid: Whether any record of the package has the set-user-ID bit
        setgid: Whether any record of the package has the set-group-ID bit

    file_count and total_size become unknown together as soon as one filename of the
    package has duplicate records that disagree. A size that is not a decimal number
    makes only total_size unknown.
    """

    def __init__(self, name: str, *, file_count: int | None = 0, total_size: int | None = 0,
                 setuid: bool = False, setgid: bool = False):
        self.name = name
        self.file_count = file_count
        self.total_size = total_size
        self.setuid = setuid
        self.setgid = setgid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageSummary):
            return False
        return (self.name == other.name and
                self.file_count == other.file_count and
                self.total_size == other.total_size and
                self.setuid == other.setuid and
                self.setgid == other.setgid)

    def __repr__(self) -> str:
        return (f"PackageSummary({self.name!r}, file_count={self.file_count!r}, "
                f"total_size={self.total_size!r}, setuid={self.setuid}, setgid={self.setgid})")

    def format(self) -> str:
        suffix = ''
        if self.setuid:
            suffix += ' setuid'
        if self.setgid:
            suffix += ' setgid'
        file_count = UNKNOWN if self.file_count is None else self.file_count
        total_size = UNKNOWN if self.total_size is None else self.total_size
        return (f"Package {self.name}:{suffix}\n"
                f"  number of files: {file_count}\n"
                f"  total size: {total_size}\n")


def parse_mode(mode: str | None) -> int | None:
    """Parse an octal mode string, returning None when absent or invalid."""
    if mode is None:
        return None
    try:
        return int(mode, 8)
    except ValueError:
        return None


def _measure_package(index: ManifestIndex, package_name: str) -> tuple[int | None, int | None]:
    file_count = 0
    total_size: int | None = 0

    for filename in index.package_files(package_name):
        records = index.records(filename)
        if len(records) > 1:
            comparison = compare_records(records)
            if not comparison.is_equal:
                logger.debug(f"Package {package_name}: {filename} has conflicting records "
                             f"(off by {comparison.conflict_key!r}), size unknown")
                return None, None

        first = records[0]
        file_count += 1
        if first.type != 'file' or total_size is None:
            continue

        size = first.get('size')
        if size is None:
            continue
        if not size.isdecimal():
            logger.warning(f"Package {package_name}: invalid size {size!r} for {filename} "
                           f"at line {first.line_number}")
            total_size = None
            continue
        total_size += int(size)

    return file_count, total_size


def _detect_setid(index: ManifestIndex, package_name: str) -> tuple[bool, bool]:
    setuid = False
    setgid = False

    # Every record counts, duplicates included
    for filename in index.package_files(package_name):
        for record in index.records(filename):
            raw_mode = record.get('mode')
            mode = parse_mode(raw_mode)
            if mode is None:
                if raw_mode is not None:
                    logger.warning(f"Invalid mode {raw_mode!r} for {filename} at line {record.line_number}")
                continue
            if mode & stat.S_ISUID:
                setuid = True
            if mode & stat.S_ISGID:
                setgid = True

    return setuid, setgid


def summarize_package(index: ManifestIndex, package_name: str) -> PackageSummary:
    """Build the summary of one package.

    Raises:
        KeyError: The package is not in the index
    """
    file_count, total_size = _measure_package(index, package_name)
    setuid, setgid = _detect_setid(index, package_name)
    return PackageSummary(package_name, file_count=file_count, total_size=total_size,
                          setuid=setuid, setgid=setgid)


def summarize_packages(index: ManifestIndex) -> list[PackageSummary]:
    """Summaries of all packages, sorted by package name."""
    return [summarize_package(index, package_name) for package_name in index.package_names()]


def format_package_report(summaries: list[PackageSummary]) -> str:
    """Package blocks only; the section header is written by the caller."""
    return ''.join(summary.format() for summary in summaries)
