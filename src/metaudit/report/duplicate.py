"""Report of filenames that the manifest lists more than once."""

from ..index.store import ManifestIndex
from .equivalence import compare_records


class DuplicateFinding:
    """A filename with more than one record.

    Attributes:
        filename: The repeated filename
        line_numbers: Line numbers of its records, in scan order
        conflict_key: None when all records agree (a warning), otherwise the first
                      attribute found to differ (an error)
    """

    def __init__(self, filename: str, line_numbers: list[int], conflict_key: str | None = None):
        self.filename = filename
        self.line_numbers = line_numbers
        self.conflict_key = conflict_key

    @property
    def is_error(self) -> bool:
        return self.conflict_key is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DuplicateFinding):
            return False
        return (self.filename == other.filename and
                self.line_numbers == other.line_numbers and
                self.conflict_key == other.conflict_key)

    def __repr__(self) -> str:
        return f"DuplicateFinding({self.filename!r}, {self.line_numbers!r}, {self.conflict_key!r})"

    def format(self) -> str:
        lines = ','.join(str(n) for n in self.line_numbers)
        if self.is_error:
            return (f"error: {self.filename} exists in multiple locations and with different meta: "
                    f"line {lines}. off by \"{self.conflict_key}\"\n")
        return f"warning: {self.filename} exists in multiple locations: line {lines}\n"


def find_duplicate_filenames(index: ManifestIndex) -> list[DuplicateFinding]:
    """Findings for every repeated filename, sorted by filename."""
    findings = []
    for filename, records in index.iter_buckets():
        if len(records) == 1:
            continue
        comparison = compare_records(records)
        findings.append(DuplicateFinding(
            filename,
            [record.line_number for record in records],
            comparison.conflict_key))
    return findings


def format_duplicate_report(findings: list[DuplicateFinding]) -> tuple[str, str]:
    """Render findings as (warnings, errors), each block keeping filename order."""
    warnings = ''.join(f.format() for f in findings if not f.is_error)
    errors = ''.join(f.format() for f in findings if f.is_error)
    return warnings, errors
