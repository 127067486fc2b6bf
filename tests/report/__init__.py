"""Tests for report module.

Test Files and Coverage:
========================

| Test File            | Test Classes                 | Tested Constructs                              | Tested Functionalities                  |
|----------------------|------------------------------|------------------------------------------------|-----------------------------------------|
| test_equivalence.py  | CompareRecordsTest           | compare_records(), RecordComparison            | Shared-key equality, first conflict key |
| test_package.py      | PackageSummaryTest           | summarize_packages(), PackageSummary.format()  | Counts, sizes, unknown totals, setid    |
| test_duplicate.py    | DuplicateReportTest          | find_duplicate_filenames(), format functions   | Warnings, errors, ordering              |
| test_inode.py        | InodeReportTest              | find_inode_conflicts(), format_inode_report()  | Hard-link conflicts, skipped types      |
"""
