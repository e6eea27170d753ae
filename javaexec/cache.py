# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

"""
This module provides a cache directory for Java files (sources, classes, jars)
that are shipped with Python packages and need to be present as real files
for java. Files are extracted once and looked up by their relative name later.
Files in the cache have priority over files elsewhere on the system,
because the launcher puts the cache at the beginning of the classpath.

There is no eviction or invalidation: a file that was extracted
is trusted until the cache is cleared explicitly.
"""

import logging
import os
import shutil
import sys
import zipfile

from javaexec import JavaExecException
from javaexec import util

CACHE_DIR_NAME = "javaexec"


class CacheError(JavaExecException):
    """
    Raised when files cannot be extracted into the cache.
    """

    pass


def user_cache_dir(env=None):
    """
    Return the base directory for user-specific cached data of this platform
    or None if it cannot be determined.
    """
    if env is None:
        env = os.environ
    if sys.platform == "win32":
        return env.get("LOCALAPPDATA") or None
    home = env.get("HOME")
    if sys.platform == "darwin":
        return os.path.join(home, "Library", "Caches") if home else None
    cache_home = env.get("XDG_CACHE_HOME")
    if cache_home and os.path.isabs(cache_home):
        return cache_home
    return os.path.join(home, ".cache") if home else None


def default_cache_dir(env=None):
    """Return the directory used as cache if none is configured."""
    base_dir = user_cache_dir(env)
    if base_dir is None:
        raise CacheError(
            "Could not determine cache directory, please specify one explicitly."
        )
    return os.path.join(base_dir, CACHE_DIR_NAME)


class Cache(object):
    """A directory with extracted files that can be looked up by relative name."""

    def __init__(self, root=None):
        self.root = root if root is not None else default_cache_dir()

    def __repr__(self):
        return f"Cache({self.root!r})"

    def path(self, name):
        """Return the path of the given relative name inside the root."""
        return os.path.join(self.root, name.lstrip(os.sep + (os.altsep or "")))

    def cached(self, name):
        """
        Return the full path of the extracted file with the given relative name,
        or None if there is no such file in the cache.
        """
        path = self.path(name)
        if os.path.exists(path):
            return path
        return None

    def exists(self):
        return os.path.isdir(self.root)

    def classpath_entry(self):
        """Return the entry that needs to be added to the classpath for this cache."""
        return self.root

    def extract(self, source, root=""):
        """
        Copy all files below a source into the cache, overwriting existing files.
        @param source: a directory, a jar or zip archive, or a Traversable from
            importlib.resources (e.g., importlib.resources.files("mypackage"))
        @param root: the path within source from where to start extracting
        @return the list of relative names of the extracted files
        """
        if isinstance(source, (str, os.PathLike)):
            source = os.fspath(source)
            if os.path.isdir(source):
                extracted = self._extract_dir(os.path.join(source, root))
            elif zipfile.is_zipfile(source):
                extracted = self._extract_archive(source, root)
            else:
                raise CacheError(
                    f"Cannot extract '{source}': no directory or archive."
                )
        else:
            for part in filter(None, root.split("/")):
                source = source.joinpath(part)
            if not source.is_dir():
                raise CacheError(f"Cannot extract '{source}': no directory.")
            extracted = self._extract_traversable(source, "")

        logging.debug("Extracted %d files into cache %s.", len(extracted), self.root)
        return extracted

    def _extract_dir(self, source_dir):
        if not os.path.isdir(source_dir):
            raise CacheError(f"Cannot extract '{source_dir}': no directory.")
        extracted = []
        for current_dir, dirs, files in os.walk(source_dir):
            dirs.sort()
            rel_dir = os.path.relpath(current_dir, source_dir)
            for file in sorted(files):
                name = os.path.normpath(os.path.join(rel_dir, file))
                self._prepare_target(name)
                shutil.copyfile(os.path.join(current_dir, file), self.path(name))
                extracted.append(name)
        return extracted

    def _extract_archive(self, archive_file, root):
        prefix = root.strip("/") + "/" if root.strip("/") else ""
        extracted = []
        try:
            with zipfile.ZipFile(archive_file) as archive:
                for member in archive.infolist():
                    if member.is_dir() or not member.filename.startswith(prefix):
                        continue
                    name = os.path.normpath(member.filename[len(prefix) :])
                    if name.startswith(os.pardir) or os.path.isabs(name):
                        logging.warning(
                            "Skipping entry '%s' of %s that is outside the cache.",
                            member.filename,
                            archive_file,
                        )
                        continue
                    self._prepare_target(name)
                    with archive.open(member) as src:
                        with open(self.path(name), "wb") as dst:
                            shutil.copyfileobj(src, dst)
                    extracted.append(name)
        except zipfile.BadZipFile as e:
            raise CacheError(f"Cannot extract '{archive_file}': {e}")
        return extracted

    def _extract_traversable(self, source, rel_dir):
        extracted = []
        for entry in sorted(source.iterdir(), key=lambda entry: entry.name):
            name = os.path.join(rel_dir, entry.name)
            if entry.is_dir():
                extracted.extend(self._extract_traversable(entry, name))
            elif entry.is_file():
                self._prepare_target(name)
                with open(self.path(name), "wb") as f:
                    f.write(entry.read_bytes())
                extracted.append(name)
        return extracted

    def _prepare_target(self, name):
        try:
            os.makedirs(os.path.dirname(self.path(name)), exist_ok=True)
        except OSError as e:
            raise CacheError(f"Cannot create cache directory for '{name}': {e}")

    def clear(self):
        """Delete the cache directory with all extracted files."""
        if self.exists():
            logging.info("Removing cache %s.", self.root)
            util.rmtree(self.root)
