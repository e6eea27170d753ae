# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

import logging
import os
import pathlib
import sys
import tempfile
import unittest
import zipfile

from javaexec import util
from javaexec.cache import Cache, CacheError, default_cache_dir, user_cache_dir

sys.dont_write_bytecode = True  # prevent creation of .pyc files

HELLO_JAVA = """\
class Hello {
    public static void main(String[] args) {
        System.out.println("Hello, World!");
    }
}
"""


class TestCache(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.longMessage = True
        cls.maxDiff = None
        logging.disable(logging.CRITICAL)

    def setUp(self):
        self.base_dir = tempfile.mkdtemp(prefix="javaexec_test_cache_")
        self.source_dir = os.path.join(self.base_dir, "javafiles")
        os.makedirs(os.path.join(self.source_dir, "foo", "bar"))
        util.write_file(HELLO_JAVA, self.source_dir, "hello.java")
        util.write_file("class", self.source_dir, "HelloWorld.class")
        util.write_file("class", self.source_dir, "foo", "bar", "Some.class")
        self.cache = Cache(os.path.join(self.base_dir, "cache"))

    def tearDown(self):
        util.rmtree(self.base_dir)

    def read_cached(self, name):
        with open(self.cache.path(name)) as f:
            return f.read()

    def test_cached_missing(self):
        self.assertIsNone(self.cache.cached("hello.java"))
        self.assertFalse(self.cache.exists())

    def test_absolute_name_stays_inside(self):
        absolute = os.path.join(self.source_dir, "hello.java")
        self.assertEqual(
            self.cache.path(absolute),
            os.path.join(self.cache.root, absolute.lstrip(os.sep)),
        )
        self.assertIsNone(self.cache.cached(absolute))

    def test_extract_dir(self):
        extracted = self.cache.extract(self.source_dir)
        self.assertEqual(
            sorted(extracted),
            sorted(
                [
                    "HelloWorld.class",
                    os.path.join("foo", "bar", "Some.class"),
                    "hello.java",
                ]
            ),
        )
        self.assertTrue(self.cache.exists())
        self.assertEqual(
            self.cache.cached("hello.java"),
            os.path.join(self.cache.root, "hello.java"),
        )
        self.assertEqual(
            self.cache.cached("HelloWorld.class"),
            os.path.join(self.cache.root, "HelloWorld.class"),
        )
        self.assertIsNone(self.cache.cached("Other.class"))
        self.assertEqual(self.read_cached("hello.java"), HELLO_JAVA)

    def test_extract_subdir(self):
        self.cache.extract(self.base_dir, root="javafiles")
        self.assertIsNotNone(self.cache.cached("hello.java"))
        self.assertIsNone(self.cache.cached(os.path.join("javafiles", "hello.java")))

    def test_extract_overwrites(self):
        self.cache.extract(self.source_dir)
        util.write_file("changed", self.source_dir, "hello.java")
        self.cache.extract(self.source_dir)
        self.assertEqual(self.read_cached("hello.java"), "changed")

    def test_extract_archive(self):
        archive_file = os.path.join(self.base_dir, "files.jar")
        with zipfile.ZipFile(archive_file, "w") as archive:
            archive.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
            archive.writestr("javafiles/hello.java", HELLO_JAVA)
            archive.writestr("javafiles/foo/Bar.class", "class")
            archive.writestr("../evil.java", "evil")

        extracted = self.cache.extract(archive_file, root="javafiles")
        self.assertEqual(
            sorted(extracted), sorted(["hello.java", os.path.join("foo", "Bar.class")])
        )
        self.assertIsNotNone(self.cache.cached("hello.java"))
        self.assertIsNone(self.cache.cached(os.path.join("META-INF", "MANIFEST.MF")))
        self.assertFalse(os.path.exists(os.path.join(self.base_dir, "evil.java")))

    def test_extract_archive_skips_outside_entries(self):
        archive_file = os.path.join(self.base_dir, "evil.zip")
        with zipfile.ZipFile(archive_file, "w") as archive:
            archive.writestr("../evil.java", "evil")
            archive.writestr("ok.java", "ok")

        self.assertEqual(self.cache.extract(archive_file), ["ok.java"])
        self.assertFalse(os.path.exists(os.path.join(self.base_dir, "evil.java")))

    def test_extract_path_object(self):
        extracted = self.cache.extract(pathlib.Path(self.source_dir))
        self.assertIn("hello.java", extracted)

    def test_extract_traversable(self):
        class Resource:
            """Minimal Traversable as returned by importlib.resources.files()"""

            def __init__(self, path):
                self._path = path
                self.name = path.name

            def joinpath(self, child):
                return Resource(self._path / child)

            def iterdir(self):
                return (Resource(p) for p in self._path.iterdir())

            def is_dir(self):
                return self._path.is_dir()

            def is_file(self):
                return self._path.is_file()

            def read_bytes(self):
                return self._path.read_bytes()

        other_cache = Cache(os.path.join(self.base_dir, "other"))
        extracted = other_cache.extract(
            Resource(pathlib.Path(self.base_dir)), root="javafiles/foo"
        )
        self.assertEqual(extracted, [os.path.join("bar", "Some.class")])
        self.assertIsNotNone(other_cache.cached(os.path.join("bar", "Some.class")))

    def test_extract_missing_source(self):
        self.assertRaises(
            CacheError, self.cache.extract, os.path.join(self.base_dir, "missing")
        )
        self.assertRaises(
            CacheError, self.cache.extract, self.source_dir, root="missing"
        )
        self.assertRaises(
            CacheError,
            self.cache.extract,
            os.path.join(self.source_dir, "hello.java"),
        )

    def test_clear(self):
        self.cache.extract(self.source_dir)
        self.cache.clear()
        self.assertFalse(self.cache.exists())
        self.assertIsNone(self.cache.cached("hello.java"))
        self.cache.clear()  # no error if missing

    def test_classpath_entry(self):
        self.assertEqual(self.cache.classpath_entry(), self.cache.root)


@unittest.skipIf(sys.platform in ("win32", "darwin"), "XDG only on Linux")
class TestDefaultCacheDir(unittest.TestCase):
    def test_xdg_cache_home(self):
        env = {"HOME": "/home/user", "XDG_CACHE_HOME": "/var/cache/user"}
        self.assertEqual(user_cache_dir(env), "/var/cache/user")
        self.assertEqual(default_cache_dir(env), "/var/cache/user/javaexec")

    def test_relative_xdg_cache_home_ignored(self):
        env = {"HOME": "/home/user", "XDG_CACHE_HOME": "cache"}
        self.assertEqual(user_cache_dir(env), "/home/user/.cache")

    def test_home(self):
        self.assertEqual(default_cache_dir({"HOME": "/root"}), "/root/.cache/javaexec")

    def test_undefined(self):
        self.assertIsNone(user_cache_dir({}))
        self.assertRaises(CacheError, default_cache_dir, {})
