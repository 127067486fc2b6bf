from .session import AuditSession
from .manifest.record import ManifestRecord, MalformedLineError, parse_line
from .manifest.settings import AuditSettings
from .index.store import ManifestIndex
from .index.inode import InodeIndex
from .report.equivalence import RecordComparison, compare_records
from .report.package import PackageSummary
from .report.duplicate import DuplicateFinding
from .report.inode import InodeConflict
from .utils.stat_lookup import FilesystemInodeLookup
