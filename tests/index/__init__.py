"""Tests for index module.

Test Files and Coverage:
========================

| Test File       | Test Classes                                   | Tested Constructs                       | Tested Functionalities              |
|-----------------|------------------------------------------------|-----------------------------------------|-------------------------------------|
| test_store.py   | ParsePackageNamesTest, ManifestIndexTest       | parse_package_names(), ManifestIndex    | Buckets, scan order, package sets   |
| test_inode.py   | InodeIndexTest, FilesystemInodeLookupTest      | InodeIndex, FilesystemInodeLookup       | Grouping, lookup failures, links    |
"""
