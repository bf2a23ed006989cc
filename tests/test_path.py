# -*- coding: utf-8 -*-
"""Tests for `path`."""
import unittest
import os
import posixpath
import pathlib
import pytest
import lpath
import lpath.path as lp
from lpath import util

U = lp.FORCEUNIX
W = lp.FORCEWIN


class TestConcat:
    """
    Test `concat`.

    Each case entry is an array of 3 parameters.

    * Arguments
    * Expected result
    * Flags
    """

    cases = [
        [('a', 'b'), 'a/b', U],
        [('a', ''), 'a/', U],
        [('', 'a/', '/b'), '/b', U],
        [(), '.', U],
        [('',), '.', U],
        [('a//b',), 'a/b', U],
        [('//a',), '//a', U],
        [('///a',), '/a', U],
        [('/a', '/b'), '/b', U],
        [('a\\b',), 'a\\b', U],

        [('C:\\a\\b', '/d/c'), 'C:\\d\\c', W],
        [('C:\\a\\b', 'D:x/y'), 'D:x\\y', W],
        [('C:\\a\\b', '//SHARE/MOUNT/PATH'), '\\\\SHARE\\MOUNT\\PATH', W],
        [('C:\\a\\b', 'C:d\\c'), 'C:\\a\\b\\d\\c', W],
        [('c:a', 'd:', 'c'), 'D:c', W],
        [('//?/foo', '//?/bar'), '\\\\?\\foo\\bar', W],
        [('a/b',), 'a\\b', W],
        [('c:/a/',), 'C:\\a\\', W]
    ]

    @pytest.mark.parametrize("case", cases)
    def test_cases(self, case):
        """Test case."""

        assert lp.concat(*case[0], flags=case[2]) == case[1]


class TestCanonicalize:
    """
    Test `path`.

    * Arguments
    * Expected result
    * Flags
    """

    cases = [
        [('/a/../../b',), '/b', U],
        [('a/./b/',), 'a/b/', U],
        [('a/.',), 'a/', U],
        [('.',), '.', U],
        [('a/..',), '.', U],
        [('../a/../..',), '../..', U],
        [('/..',), '/', U],
        [('a', 'b/../c'), 'a/c', U],
        [('//a/../b',), '//b', U],
        [('a//b',), 'a/b', U],

        [('C:\\a\\b', '/d/c'), 'C:\\d\\c', W],
        [('C:\\a\\b', 'D:x/y'), 'D:x\\y', W],
        [('C:\\a\\b', '//SHARE/MOUNT/PATH'), '\\\\SHARE\\MOUNT\\PATH', W],
        [('C:\\a\\b', 'C:d\\c'), 'C:\\a\\b\\d\\c', W],
        [('c:a', 'd:', 'c'), 'D:c', W],
        [('//?/foo', '//?/bar'), '\\\\?\\foo\\bar', W],
        [('c:/a/',), 'C:\\a\\', W],
        [('c:/..',), 'C:\\', W]
    ]

    @pytest.mark.parametrize("case", cases)
    def test_cases(self, case):
        """Test case."""

        assert lp.path(*case[0], flags=case[2]) == case[1]

    stable = [
        ['/a/../../b', U],
        ['a/./b/', U],
        ['a/..', U],
        ['../a/../..', U],
        ['//a/../b', U],
        ['C:\\a\\b\\..\\c', W],
        ['c:a/../b/', W],
        ['//server/share/../x', W]
    ]

    @pytest.mark.parametrize("case", stable)
    def test_idempotent(self, case):
        """Test that a canonical path does not change when canonicalized again."""

        value = lp.path(case[0], flags=case[1])
        assert lp.path(value, flags=case[1]) == value

    def test_alias(self):
        """Test the `canonicalize` alias."""

        assert lp.canonicalize is lp.path


class TestAnchors:
    """
    Test `drive`, `root`, and `anchor`.

    * Function
    * Argument
    * Expected result
    * Flags
    """

    cases = [
        [lp.drive, '/a', '', U],
        [lp.root, '/a', '/', U],
        [lp.root, '//a', '//', U],
        [lp.root, '//', '//', U],
        [lp.root, '///a', '/', U],
        [lp.root, 'a', '', U],
        [lp.anchor, '//a/b', '//', U],

        [lp.drive, 'c:', 'C:', W],
        [lp.drive, '//.', '', W],
        [lp.drive, '//./', '\\\\.\\', W],
        [lp.drive, '//.//', '', W],
        [lp.drive, '//?', '', W],
        [lp.drive, '//?/', '\\\\?\\', W],
        [lp.drive, '//?/c:', '\\\\?\\C:', W],
        [lp.drive, 'cd:/a/b', '', W],
        [lp.drive, '//a/', '\\\\A\\', W],
        [lp.drive, '//a/b/a/b', '\\\\A\\B', W],
        [lp.drive, '//?/a', '\\\\?\\', W],
        [lp.drive, '//?//a', '\\\\?\\', W],
        [lp.drive, '//?/cd:/', '\\\\?\\', W],
        [lp.drive, '//?/a/b', '\\\\?\\A\\B', W],

        [lp.root, 'c:', '', W],
        [lp.root, 'c:/', '\\', W],
        [lp.root, '//?', '\\', W],
        [lp.root, '//?/', '', W],
        [lp.root, '//?/c:', '', W],
        [lp.root, '//?/c:/', '\\', W],
        [lp.root, '///a', '\\', W],
        [lp.root, 'a/b', '', W],

        [lp.anchor, '//a/b', '\\\\A\\B\\', W],
        [lp.anchor, 'c:a/b', 'C:', W],
        [lp.anchor, 'c:/a/b', 'C:\\', W],
        [lp.anchor, 'a/b', '', W]
    ]

    @pytest.mark.parametrize("case", cases)
    def test_cases(self, case):
        """Test case."""

        assert case[0](case[1], flags=case[3]) == case[2]

    def test_right_most(self):
        """Test that the right most argument with an anchor wins."""

        assert lp.root('a', '/b', flags=U) == '/'
        assert lp.drive('c:/a', 'd:/b', 'e', flags=W) == 'D:'
        assert lp.anchor('c:/a', 'b', flags=W) == 'C:\\'

    def test_no_arguments(self):
        """Test anchors of nothing."""

        assert lp.drive(flags=W) == ''
        assert lp.root(flags=U) == ''
        assert lp.anchor(flags=W) == ''


class TestDecompose:
    """
    Test `parent`, `name`, `stem`, `suffix`, and `suffixes`.

    * Function
    * Argument
    * Expected result
    * Flags
    """

    cases = [
        [lp.parent, '/a/b', '/a', U],
        [lp.parent, '/a', '/', U],
        [lp.parent, '/', '/', U],
        [lp.parent, 'a', '.', U],
        [lp.parent, '.', '..', U],
        [lp.parent, '..', '../..', U],
        [lp.parent, 'a/b/', 'a', U],
        [lp.parent, '/..', '/', U],
        [lp.parent, '../a', '..', U],
        [lp.parent, 'Z:', 'Z:..', W],
        [lp.parent, 'c:/a/b', 'C:\\a', W],
        [lp.parent, 'c:a', 'C:', W],
        [lp.parent, 'c:/', 'C:\\', W],
        [lp.parent, '//server/share/a', '\\\\SERVER\\SHARE\\', W],

        [lp.name, '/a/b.txt', 'b.txt', U],
        [lp.name, '/', '', U],
        [lp.name, 'a/b/', 'b', U],
        [lp.name, 'a/..', '', U],
        [lp.name, 'C:\\a\\b.txt', 'b.txt', W],

        [lp.stem, 'a/b.tar.gz', 'b.tar', U],
        [lp.stem, '.bashrc', '.bashrc', U],
        [lp.stem, 'file', 'file', U],
        [lp.stem, 'a.', 'a', U],
        [lp.stem, 'a.', 'a.', W],
        [lp.stem, 'a b.c d', 'a b', W],

        [lp.suffix, 'b.tar.gz', '.gz', U],
        [lp.suffix, '.bashrc', '', U],
        [lp.suffix, 'a.', '.', U],
        [lp.suffix, 'a.', '', W],
        [lp.suffix, 'a b.txt', '.txt', W],
        [lp.suffix, 'a.b c', '', W],
        [lp.suffix, 'a.b c', '.b c', U],

        [lp.suffixes, 'a.xxx.yyy.zzz', ('.xxx', '.yyy', '.zzz'), U],
        [lp.suffixes, '.bashrc', (), U],
        [lp.suffixes, 'a.', (), W],
        [lp.suffixes, 'a.b c.d', ('.d',), W],
        [lp.suffixes, 'a.b c.d', ('.b c', '.d'), U]
    ]

    @pytest.mark.parametrize("case", cases)
    def test_cases(self, case):
        """Test case."""

        assert case[0](case[1], flags=case[3]) == case[2]

    def test_multiple_arguments(self):
        """Test that arguments are concatenated first."""

        assert lp.parent('a', 'b', 'c', flags=U) == 'a/b'
        assert lp.name('a', 'b.txt', flags=U) == 'b.txt'
        assert lp.suffix('/x', 'a.lua', flags=U) == '.lua'

    def test_suffixes_reassemble(self):
        """Test that stem and suffix make up the name."""

        for value in ('a.b', 'archive.tar.gz', '.hidden', 'plain', 'dots..'):
            assert lp.stem(value, flags=U) + lp.suffix(value, flags=U) == lp.name(value, flags=U)

    def test_suffixes_restart(self):
        """Test that the suffixes can be walked more than once."""

        values = lp.suffixes('archive.tar.gz', flags=U)
        assert list(values) == list(values) == ['.tar', '.gz']


class TestParts(unittest.TestCase):
    """Test `parts`."""

    def test_parts(self):
        """Test all parts."""

        self.assertEqual(lp.parts('/a/b', flags=U), ('/', 'a', 'b'))
        self.assertEqual(lp.parts('a/b', flags=U), ('a', 'b'))
        self.assertEqual(lp.parts('a/../b', flags=U), ('b',))
        self.assertEqual(lp.parts('../a', flags=U), ('..', 'a'))
        self.assertEqual(lp.parts('//a/b/c', flags=W), ('\\\\A\\B\\', 'c'))
        self.assertEqual(lp.parts('c:/x', flags=W), ('C:\\', 'x'))

    def test_index(self):
        """Test indexed parts."""

        self.assertEqual(lp.parts('/a/b', index=1, flags=U), '/')
        self.assertEqual(lp.parts('/a/b', index=3, flags=U), 'b')
        self.assertEqual(lp.parts('/a/b', index=-1, flags=U), 'b')
        self.assertEqual(lp.parts('/a/b', index=-3, flags=U), '/')

    def test_index_out_of_range(self):
        """Test indexes that do not select anything."""

        self.assertIsNone(lp.parts('/a/b', index=0, flags=U))
        self.assertIsNone(lp.parts('/a/b', index=4, flags=U))
        self.assertIsNone(lp.parts('/a/b', index=-4, flags=U))

    def test_bad_index(self):
        """Test that index must be an integer."""

        with self.assertRaises(TypeError):
            lp.parts('/a/b', index='1', flags=U)


class TestIsAbsolute(unittest.TestCase):
    """Test `is_absolute`."""

    def test_posix(self):
        """Test POSIX."""

        self.assertTrue(lp.is_absolute('/a', flags=U))
        self.assertFalse(lp.is_absolute('a', flags=U))
        self.assertTrue(lp.is_absolute('a', '/b', flags=U))
        self.assertFalse(lp.is_absolute('c:/a', flags=U))

    def test_windows(self):
        """Test Windows."""

        self.assertTrue(lp.is_absolute('c:a', flags=W))
        self.assertTrue(lp.is_absolute('\\a', flags=W))
        self.assertTrue(lp.is_absolute('//server/share', flags=W))
        self.assertFalse(lp.is_absolute('a\\b', flags=W))


class TestTypes(unittest.TestCase):
    """Test argument types."""

    def test_bytes(self):
        """Test that bytes give bytes."""

        self.assertEqual(lp.path(b'a/./b', flags=U), b'a/b')
        self.assertEqual(lp.suffixes(b'a.b.c', flags=U), (b'.b', b'.c'))
        self.assertEqual(lp.parts(b'/a', flags=U), (b'/', b'a'))

    def test_path_like(self):
        """Test path-like objects."""

        self.assertEqual(lp.concat(pathlib.PurePosixPath('a/b'), 'c', flags=U), 'a/b/c')

    def test_mixed(self):
        """Test that mixing text and bytes fails."""

        with self.assertRaises(TypeError):
            lp.concat('a', b'b', flags=U)

    def test_non_ascii(self):
        """Test that text survives the round trip through bytes."""

        self.assertEqual(lp.name('/tmp/\u00e9t\u00e9.txt', flags=U), '\u00e9t\u00e9.txt')
        self.assertEqual(lp.name('/tmp/bad\udcff', flags=U), 'bad\udcff')


class TestInfo(unittest.TestCase):
    """Test `info`."""

    def test_info(self):
        """Test platform information."""

        self.assertEqual(lp.info(flags=U), lp.PathInfo('posix', '/', ':', '/dev/null'))
        self.assertEqual(lp.info(flags=W), lp.PathInfo('windows', '\\', ';', 'null'))

    def test_both_flags(self):
        """Test that forcing both platforms selects the host."""

        expected = 'windows' if util.platform() == 'windows' else 'posix'
        self.assertEqual(lp.info(flags=U | W).platform, expected)


class PosixHandler(lpath.PathHandler):
    """Resolve against a fixed working directory."""

    def __init__(self, cwd='/home/user'):
        """Initialize."""

        self.cwd = cwd

    def resolve_path(self, path):
        """Resolve."""

        return posixpath.normpath(posixpath.join(self.cwd, path))

    def get_working_directory(self):
        """Get working directory."""

        return self.cwd


class WindowsHandler(lpath.PathHandler):
    """Resolve absolute Windows paths as they are."""

    def resolve_path(self, path):
        """Resolve."""

        return path if path[1:2] == ':' else 'C:\\work\\' + path

    def get_working_directory(self):
        """Get working directory."""

        return 'C:\\work'


class FailingHandler(lpath.PathHandler):
    """Fail every request."""

    def resolve_path(self, path):
        """Resolve."""

        raise FileNotFoundError(2, 'No such file or directory')

    def get_working_directory(self):
        """Get working directory."""

        raise PermissionError(13, 'Permission denied')


class TestAbs(unittest.TestCase):
    """Test `abs`."""

    def setUp(self):
        """Setup."""

        self.handler = PosixHandler()

    def test_relative(self):
        """Test a relative path."""

        self.assertEqual(lp.abs('a', 'b', flags=U, handler=self.handler), '/home/user/a/b')

    def test_trailing_separator(self):
        """Test that a trailing separator is kept."""

        self.assertEqual(lp.abs('a/', flags=U, handler=self.handler), '/home/user/a/')

    def test_absolute(self):
        """Test an absolute path."""

        self.assertEqual(lp.abs('/x/../y', flags=U, handler=self.handler), '/y')

    def test_windows_escape(self):
        """Test that the `\\\\?\\` prefix survives."""

        self.assertEqual(lp.abs('//?/c:/x', flags=W, handler=WindowsHandler()), '\\\\?\\C:\\x')

    def test_failure(self):
        """Test that handler errors are reported."""

        with self.assertRaises(lpath.PathResolveError) as cm:
            lp.abs('a', flags=U, handler=FailingHandler())
        error = cm.exception
        self.assertIsInstance(error, OSError)
        self.assertEqual(error.errno, 2)
        self.assertEqual(error.operation, 'abs')
        self.assertEqual(str(error), 'abs:a:(errno=2): No such file or directory')
        self.assertIsInstance(error.__cause__, FileNotFoundError)

    @unittest.skipIf(util.platform() == 'windows', "POSIX host only")
    def test_default_handler(self):
        """Test resolving against the process."""

        self.assertEqual(lp.abs('a', flags=U), os.path.join(os.getcwd(), 'a'))


class TestRel(unittest.TestCase):
    """Test `rel`."""

    def setUp(self):
        """Setup."""

        self.handler = PosixHandler()

    def test_below(self):
        """Test a path below the working directory."""

        self.assertEqual(lp.rel('/home/user/a/b', flags=U, handler=self.handler), 'a/b')

    def test_sibling(self):
        """Test a path beside the working directory."""

        self.assertEqual(lp.rel('/home/other/x', flags=U, handler=self.handler), '../other/x')

    def test_same(self):
        """Test the working directory itself."""

        self.assertEqual(lp.rel('/home/user', flags=U, handler=self.handler), '.')
        self.assertEqual(lp.rel('/home/user/', flags=U, handler=self.handler), '.')

    def test_trailing_separator(self):
        """Test that a trailing separator is kept."""

        self.assertEqual(lp.rel('/home/user/a/', flags=U, handler=self.handler), 'a/')

    def test_base(self):
        """Test an explicit base."""

        self.assertEqual(lp.rel('/a/b', '/a', flags=U, handler=self.handler), 'b')
        self.assertEqual(lp.rel('x', '/home/user', flags=U, handler=self.handler), 'x')

    def test_other_drive(self):
        """Test that a different drive gives the canonical path."""

        self.assertEqual(lp.rel('D:/x/./y', flags=W, handler=WindowsHandler()), 'D:\\x\\y')

    def test_windows_case(self):
        """Test that Windows compares components without case."""

        self.assertEqual(lp.rel('c:\\WORK\\Sub\\f', flags=W, handler=WindowsHandler()), 'Sub\\f')

    def test_failure(self):
        """Test that working directory errors are reported."""

        with self.assertRaises(lpath.PathResolveError) as cm:
            lp.rel('/a', flags=U, handler=FailingHandler())
        self.assertEqual(cm.exception.operation, 'rel')
