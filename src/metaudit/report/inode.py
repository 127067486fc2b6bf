"""Report of hard links whose manifest entries disagree."""

import logging

from ..index.inode import InodeIndex
from ..index.store import ManifestIndex
from .equivalence import compare_records

logger = logging.getLogger(__name__)

# Entry types that may share an inode with a file without contradicting it
SKIPPED_TYPES = frozenset({'link', 'dir'})


class InodeConflict:
    """Filenames resolving to one inode whose first records disagree.

    Attributes:
        filenames: All filenames of the inode group, in index order
        line_numbers: Line number of the first record of each filename
        conflict_key: First attribute found to differ
    """

    def __init__(self, filenames: list[str], line_numbers: list[int], conflict_key: str):
        self.filenames = filenames
        self.line_numbers = line_numbers
        self.conflict_key = conflict_key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InodeConflict):
            return False
        return (self.filenames == other.filenames and
                self.line_numbers == other.line_numbers and
                self.conflict_key == other.conflict_key)

    def __repr__(self) -> str:
        return f"InodeConflict({self.filenames!r}, {self.line_numbers!r}, {self.conflict_key!r})"

    def format(self) -> str:
        return (f"error: entries point to the same inode but have different meta: "
                f"{','.join(self.filenames)} in line {','.join(str(n) for n in self.line_numbers)}. "
                f"off by \"{self.conflict_key}\"\n")


def find_inode_conflicts(index: ManifestIndex, inode_index: InodeIndex) -> list[InodeConflict]:
    """Compare the manifest entries of every hard-link group.

    Only the first record of each filename is used, and link/dir entries are left out of
    the comparison. Filenames are not required to match.
    """
    conflicts = []
    for filenames in inode_index.shared_groups():
        first_records = [index.records(filename)[0] for filename in filenames]
        compared = [record for record in first_records if record.type not in SKIPPED_TYPES]

        comparison = compare_records(compared, ignore_filename=True)
        if comparison.is_equal:
            continue

        logger.debug(f"Inode conflict among {filenames}: off by {comparison.conflict_key!r}")
        conflicts.append(InodeConflict(
            filenames,
            [record.line_number for record in first_records],
            comparison.conflict_key))
    return conflicts


def format_inode_report(conflicts: list[InodeConflict]) -> str:
    return ''.join(conflict.format() for conflict in conflicts)
