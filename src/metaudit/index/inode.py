"""Grouping of manifest filenames by the inode they resolve to."""

import logging
from collections.abc import Hashable
from typing import Iterable

from ..utils.stat_lookup import InodeLookup

logger = logging.getLogger(__name__)


class InodeIndex:
    """Mapping of inode identity to the filenames that resolve to it.

    Filenames keep the order they were given in; filenames the lookup cannot resolve are
    left out. Groups keep the order of their first filename.
    """

    def __init__(self, groups: dict[Hashable, list[str]] | None = None):
        self._groups: dict[Hashable, list[str]] = groups if groups is not None else {}

    @classmethod
    def build(cls, filenames: Iterable[str], lookup: InodeLookup) -> 'InodeIndex':
        groups: dict[Hashable, list[str]] = {}
        resolved = 0
        for filename in filenames:
            inode = lookup(filename)
            if inode is None:
                continue
            resolved += 1
            groups.setdefault(inode, []).append(filename)

        logger.info(f"Resolved {resolved} filenames to {len(groups)} inodes")
        return cls(groups)

    def __len__(self) -> int:
        return len(self._groups)

    def filenames(self, inode: Hashable) -> list[str]:
        return list(self._groups[inode])

    def groups(self) -> list[list[str]]:
        """All groups, including single-filename ones."""
        return [list(filenames) for filenames in self._groups.values()]

    def shared_groups(self) -> list[list[str]]:
        """Groups of more than one filename, i.e. hard-link sets."""
        return [list(filenames) for filenames in self._groups.values() if len(filenames) > 1]
