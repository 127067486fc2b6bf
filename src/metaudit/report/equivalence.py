"""Equivalence checking for records that should describe the same file."""

from typing import Sequence

from ..manifest.record import ManifestRecord

# Conflict key reported when records that should share a filename do not
FILENAME_KEY = 'filename'


class RecordComparison:
    """Outcome of comparing a group of records.

    Attributes:
        conflict_key: None when the records are equivalent. Otherwise the first attribute
                      key found to differ, or FILENAME_KEY when filenames differ.
        conflict_record: The record that disagreed with the reference, if any
    """

    def __init__(self, conflict_key: str | None = None, conflict_record: ManifestRecord | None = None):
        self.conflict_key = conflict_key
        self.conflict_record = conflict_record

    @property
    def is_equal(self) -> bool:
        return self.conflict_key is None

    def __bool__(self) -> bool:
        return self.is_equal

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordComparison):
            return False
        return self.conflict_key == other.conflict_key and self.conflict_record == other.conflict_record

    def __repr__(self) -> str:
        if self.is_equal:
            return "RecordComparison(equal)"
        return f"RecordComparison(conflict={self.conflict_key!r})"


EQUAL = RecordComparison()


def find_conflict(record: ManifestRecord, reference: ManifestRecord, *, ignore_filename: bool = False) -> str | None:
    """Return the first key on which record disagrees with reference, or None.

    Only keys present on record are checked, in record's attribute order. A key that the
    reference lacks never conflicts, and neither does a key only the reference has: a
    missing field is compatible with any value. This one-directional rule is the long
    standing METALOG reading and is kept as is.
    """
    if not ignore_filename and record.filename != reference.filename:
        return FILENAME_KEY

    reference_attributes = reference.attributes
    for key, value in record.attributes.items():
        if key in reference_attributes and reference_attributes[key] != value:
            return key

    return None


def compare_records(records: Sequence[ManifestRecord], ignore_filename: bool = False) -> RecordComparison:
    """Compare every record against the first one.

    Args:
        records: Records believed to describe the same file; records[0] is the reference
        ignore_filename: Do not require equal filenames (used for hard-link groups)

    Returns:
        EQUAL, or a RecordComparison naming the first conflicting key and record
    """
    if not records:
        return EQUAL

    reference = records[0]
    for record in records[1:]:
        key = find_conflict(record, reference, ignore_filename=ignore_filename)
        if key is not None:
            return RecordComparison(key, record)

    return EQUAL
