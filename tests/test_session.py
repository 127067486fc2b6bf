"""Tests for AuditSession.

This module contains end-to-end tests over manifest files on disk:
- Loading, indexing and malformed-line handling
- Rendering of the full report and its section order
- Lazy inode index and the hard-link report against a real tree
"""
import os
import tempfile
import unittest
from pathlib import Path

from metaudit import AuditSession, FilesystemInodeLookup, MalformedLineError

from .test_utils import write_manifest


class AuditSessionTest(unittest.TestCase):
    """Tests for AuditSession loading and reports."""

    def test_duplicate_warning_scenario(self):
        """Two identical untagged lines give an empty package report and one warning."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_manifest(tmpdir, '''
                #mtree v2.0
                ./etc/foo mode=0644 size=10 type=file
                ./etc/foo mode=0644 size=10 type=file
                ''')
            session = AuditSession(path)

        self.assertEqual('', session.pkg_report())
        self.assertEqual(('warning: ./etc/foo exists in multiple locations: line 2,3\n', ''), session.dup_report())

    def test_package_scenario(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_manifest(tmpdir, '''
                ./bin/x mode=0755 type=file size=100 tags=package=core
                ./bin/y mode=0755 type=file size=50 tags=package=core
                ''')
            session = AuditSession(path)

        self.assertEqual('Package core:\n  number of files: 2\n  total size: 150\n', session.pkg_report())
        self.assertEqual(('', ''), session.dup_report())

    def test_render_section_order(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_manifest(tmpdir, '''
                ./usr/bin/su mode=4755 type=file size=20 tags=package=base
                ./etc/foo mode=0644 type=file
                ./etc/bar mode=0644 type=file
                ./etc/foo mode=0640 type=file
                ./etc/bar mode=0644 type=file
                ''')
            session = AuditSession(path)

        self.assertEqual(
            '--- PACKAGE REPORTS ---\n'
            'Package base: setuid\n'
            '  number of files: 1\n'
            '  total size: 20\n'
            'warning: ./etc/bar exists in multiple locations: line 3,5\n'
            'error: ./etc/foo exists in multiple locations and with different meta: line 2,4. off by "mode"\n',
            session.render())

    def test_render_is_repeatable(self):
        """Rendering twice, or from two sessions over the same file, gives identical text."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_manifest(tmpdir, '''
                ./a mode=0644 type=file size=1 tags=package=p,q
                ./b mode=2755 type=file size=2 tags=package=q
                ./a mode=0644 type=file size=1 tags=package=p,q
                ./c mode=0644 type=file tags=package=r
                ./c mode=0600 type=file tags=package=r
                ''')
            first = AuditSession(path).render()
            session = AuditSession(path)
            self.assertEqual(first, session.render())
            self.assertEqual(first, session.render())

    def test_malformed_lines_skipped_and_reported(self):
        skipped = []
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_manifest(tmpdir, '''
                ./a type=file
                ./broken
                ./a type=file
                ''')
            session = AuditSession(path, on_malformed=skipped.append)

        self.assertEqual([2], [e.line_number for e in skipped])
        self.assertEqual(('warning: ./a exists in multiple locations: line 1,3\n', ''), session.dup_report())

    def test_strict_mode_aborts(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_manifest(tmpdir, '''
                ./a type=file
                ./broken
                ''')
            with self.assertRaises(MalformedLineError):
                AuditSession(path, strict=True)

    def test_missing_manifest(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                AuditSession(Path(tmpdir) / 'METALOG')

    def test_inode_index_is_built_lazily_once(self):
        calls = []

        def lookup(filename):
            calls.append(filename)
            return 1

        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_manifest(tmpdir, '''
                ./b type=file mode=0555
                ./a type=file mode=0755
                ''')
            session = AuditSession(path, inode_lookup=lookup)
            session.render()
            self.assertEqual([], calls)

            report = session.inode_report()
            session.inode_report()

        self.assertEqual(['./a', './b'], calls)
        self.assertEqual(
            'error: entries point to the same inode but have different meta: ./a,./b in line 2,1. off by "mode"\n',
            report)

    def test_render_with_inodes_against_real_tree(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / 'image'
            (root / 'bin').mkdir(parents=True)
            (root / 'bin' / 'sh').write_bytes(b'sh')
            os.link(root / 'bin' / 'sh', root / 'bin' / 'rsh')
            (root / 'bin' / 'ed').write_bytes(b'ed')
            os.link(root / 'bin' / 'ed', root / 'bin' / 'red')

            path = write_manifest(tmpdir, '''
                ./bin/sh type=file mode=0555 uname=root tags=package=runtime
                ./bin/rsh type=file mode=0555 uname=toor tags=package=runtime
                ./bin/ed type=file mode=0555 uname=root tags=package=runtime
                ./bin/red type=file mode=0555 uname=root tags=package=runtime
                ./bin/missing type=file mode=0555 uname=root tags=package=runtime
                ''')
            session = AuditSession(path, inode_lookup=FilesystemInodeLookup(root))
            without_inodes = session.render()
            with_inodes = session.render(include_inodes=True)

        expected_error = ('error: entries point to the same inode but have different meta: ./bin/rsh,./bin/sh '
                          'in line 2,1. off by "uname"\n')
        self.assertNotIn('same inode', without_inodes)
        self.assertEqual(without_inodes + expected_error, with_inodes)


if __name__ == '__main__':
    unittest.main()
