# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

"""
This module defines what java can run: a source file, a compiled class,
a jar archive, or Java source text given inline.
Callers should select the kind of a target explicitly;
guess_kind() only exists for command lines typed by users.
"""

from collections import namedtuple
import enum
import os
import re

CLASS_SUFFIX = ".class"
SOURCE_SUFFIX = ".java"
ARCHIVE_SUFFIX = ".jar"

# Characters that never occur in class names but in every piece of source code
_SOURCE_CODE_CHARS = re.compile(r"[\s{};]")


class TargetKind(enum.Enum):
    SOURCE_FILE = "source"
    COMPILED_CLASS = "class"
    ARCHIVE = "jar"
    INLINE_SOURCE = "inline"

    def __str__(self):
        return self.value


class Target(namedtuple("Target", ["kind", "value"])):
    """
    Represent what java should run.

    Explanation of fields:
    kind: an instance of TargetKind
    value: path of a source file or archive, name of a class, or source text
    """

    def __new__(cls, kind, value):
        if not isinstance(kind, TargetKind):
            kind = TargetKind(kind)
        if not value:
            raise ValueError(f"{kind.name} target needs a non-empty value")
        return super().__new__(cls, kind, value)

    @classmethod
    def source_file(cls, path):
        return cls(TargetKind.SOURCE_FILE, path)

    @classmethod
    def compiled_class(cls, name):
        return cls(TargetKind.COMPILED_CLASS, name)

    @classmethod
    def archive(cls, path):
        return cls(TargetKind.ARCHIVE, path)

    @classmethod
    def inline_source(cls, text):
        return cls(TargetKind.INLINE_SOURCE, text)

    @classmethod
    def from_main(cls, main):
        """Create a target from the main token of a command line by guessing its kind."""
        return cls(guess_kind(main), main)

    @property
    def cache_name(self):
        """
        Return the relative path under which this target would be found
        in the cache, or None for inline source.
        """
        if self.kind is TargetKind.COMPILED_CLASS:
            return class_to_path(self.value)
        if self.kind is TargetKind.INLINE_SOURCE:
            return None
        return self.value

    def __str__(self):
        if self.kind is TargetKind.INLINE_SOURCE:
            return "<inline source>"
        return self.value


def class_to_path(class_name):
    """
    Translate a class name like "foo.bar.Some" into the relative path of its
    class file ("foo/bar/Some.class"). A ".class" suffix that is already present
    is not added twice.
    """
    if class_name.endswith(CLASS_SUFFIX):
        class_name = class_name[: -len(CLASS_SUFFIX)]
    return class_name.replace(".", os.path.sep) + CLASS_SUFFIX


def guess_kind(main):
    """
    Guess how java should run the given main token from its shape:
    source files and archives are recognized by their suffix,
    text that cannot be a class name is source code,
    and everything else is a class name.
    """
    if main.endswith(SOURCE_SUFFIX):
        return TargetKind.SOURCE_FILE
    if main.endswith(ARCHIVE_SUFFIX):
        return TargetKind.ARCHIVE
    if _SOURCE_CODE_CHARS.search(main):
        return TargetKind.INLINE_SOURCE
    return TargetKind.COMPILED_CLASS


def path_to_class(class_name):
    """
    Translate a class name as given by users ("foo/bar/Some.class",
    "foo.bar.Some.class", or "foo.bar.Some") into the form java expects
    ("foo.bar.Some").
    """
    if class_name.endswith(CLASS_SUFFIX):
        class_name = class_name[: -len(CLASS_SUFFIX)]
    return class_name.replace(os.path.sep, ".").replace("/", ".")
