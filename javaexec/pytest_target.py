# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

import os
import sys
import pytest

from javaexec.target import (
    Target,
    TargetKind,
    class_to_path,
    guess_kind,
    path_to_class,
)

sys.dont_write_bytecode = True  # prevent creation of .pyc files


class TestClassToPath:
    def test_class_name(self):
        assert class_to_path("foo.bar.Some") == os.path.join("foo", "bar", "Some.class")

    def test_class_name_with_suffix(self):
        assert class_to_path("foo.bar.Some.class") == os.path.join(
            "foo", "bar", "Some.class"
        )

    def test_simple_name(self):
        assert class_to_path("HelloWorld") == "HelloWorld.class"

    def test_path_to_class(self):
        assert path_to_class("foo/bar/Some.class") == "foo.bar.Some"
        assert path_to_class("foo.bar.Some.class") == "foo.bar.Some"
        assert path_to_class("foo.bar.Some") == "foo.bar.Some"


class TestGuessKind:
    @pytest.mark.parametrize(
        "main,kind",
        [
            ("hello.java", TargetKind.SOURCE_FILE),
            ("dir with space/hello.java", TargetKind.SOURCE_FILE),
            ("testdata/files.jar", TargetKind.ARCHIVE),
            ("HelloWorld", TargetKind.COMPILED_CLASS),
            ("Hi", TargetKind.COMPILED_CLASS),
            ("org.example.VeryLongClassNameOfApplication", TargetKind.COMPILED_CLASS),
            ("HelloWorld.class", TargetKind.COMPILED_CLASS),
            ("class A{}", TargetKind.INLINE_SOURCE),
            (
                'class Hello { public static void main(String[] a) { System.out.println("Hi"); } }',
                TargetKind.INLINE_SOURCE,
            ),
        ],
    )
    def test_guess_kind(self, main, kind):
        assert guess_kind(main) is kind
        assert Target.from_main(main) == Target(kind, main)


class TestTarget:
    def test_constructors(self):
        assert Target.source_file("a.java").kind is TargetKind.SOURCE_FILE
        assert Target.compiled_class("A").kind is TargetKind.COMPILED_CLASS
        assert Target.archive("a.jar").kind is TargetKind.ARCHIVE
        assert Target.inline_source("class A {}").kind is TargetKind.INLINE_SOURCE

    def test_kind_from_string(self):
        assert Target("jar", "a.jar") == Target.archive("a.jar")
        assert str(TargetKind.SOURCE_FILE) == "source"

    def test_invalid(self):
        with pytest.raises(ValueError):
            Target("unknown", "a.jar")
        with pytest.raises(ValueError):
            Target.compiled_class("")

    def test_cache_name(self):
        assert Target.source_file("hello.java").cache_name == "hello.java"
        assert Target.archive("lib/files.jar").cache_name == "lib/files.jar"
        assert Target.compiled_class("foo.Bar").cache_name == os.path.join(
            "foo", "Bar.class"
        )
        assert Target.inline_source("class A {}").cache_name is None

    def test_str(self):
        assert str(Target.archive("files.jar")) == "files.jar"
        assert str(Target.inline_source("class A {}")) == "<inline source>"
