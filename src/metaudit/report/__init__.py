"""Report generators over the manifest indices.

This package contains:
- equivalence: RecordComparison and compare_records, the consistency check all reports use
- package: PackageSummary and the per-package report
- duplicate: DuplicateFinding and the repeated-filename report
- inode: InodeConflict and the hard-link report
"""
