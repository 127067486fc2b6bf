"""Indices built from a parsed manifest.

This package contains:
- store: ManifestIndex (filename and package indices)
- inode: InodeIndex (filenames grouped by resolved inode)
"""
