"""Filesystem inode lookup for manifest filenames."""

import logging
import os
from pathlib import Path
from collections.abc import Hashable
from typing import Callable

logger = logging.getLogger(__name__)

# Resolves a manifest filename to an inode identity, or None when it cannot be resolved
InodeLookup = Callable[[str], Hashable | None]

RELATIVE_MARKER = './'


def strip_relative_marker(filename: str) -> str:
    """Turn a manifest filename into a path relative to the install root.

    Examples:
        >>> strip_relative_marker('./usr/bin/su')
        'usr/bin/su'
        >>> strip_relative_marker('.')
        ''
    """
    if filename.startswith(RELATIVE_MARKER):
        return filename[len(RELATIVE_MARKER):]
    if filename == '.':
        return ''
    return filename.lstrip('/')


class FilesystemInodeLookup:
    """Resolve manifest filenames against a directory tree with stat().

    The identity returned is (st_dev, st_ino), so equal identities mean hard links to one
    file. Symlinks are followed, matching what a plain stat of the path reports.
    """

    def __init__(self, root: str | os.PathLike = '/'):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, filename: str) -> Path:
        return self._root / strip_relative_marker(filename)

    def __call__(self, filename: str) -> tuple[int, int] | None:
        path = self.path_for(filename)
        try:
            st = path.stat()
        except OSError as e:
            logger.debug(f"Cannot stat {path}: {e}")
            return None
        return st.st_dev, st.st_ino
