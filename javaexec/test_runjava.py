# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

import contextlib
import io
import logging
import os
import shlex
import subprocess
import sys
import tempfile
import unittest
from unittest.mock import patch

from javaexec import runjava
from javaexec import util

sys.dont_write_bytecode = True  # prevent creation of .pyc files

JAVA = "/opt/jdk/bin/java"


class TestRunJava(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.longMessage = True
        cls.maxDiff = None
        logging.disable(logging.CRITICAL)

    def setUp(self):
        self.base_dir = tempfile.mkdtemp(prefix="javaexec_test_runjava_")
        self.cache_dir = os.path.join(self.base_dir, "cache")
        self.source_dir = os.path.join(self.base_dir, "javafiles")
        os.mkdir(self.source_dir)
        util.write_file("class Hello {}", self.source_dir, "hello.java")

    def tearDown(self):
        util.rmtree(self.base_dir)

    def run_main(self, *args):
        """Run main() and return exit code and stdout."""
        argv = ["javaexec", "--java", JAVA, "--cache-dir", self.cache_dir, *args]
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            with patch("javaexec.runjava.util.setup_logging"):
                with self.assertRaises(SystemExit) as cm:
                    runjava.main(argv)
        return cm.exception.code, stdout.getvalue()

    def test_print_cmdline(self):
        code, output = self.run_main(
            "--print-cmdline", "--", "-Dfoo=bar", "HelloClass", "some", "-x"
        )
        self.assertEqual(code, 0)
        self.assertEqual(
            shlex.split(output), [JAVA, "-Dfoo=bar", "HelloClass", "some", "-x"]
        )

    def test_print_cmdline_cached(self):
        code, output = self.run_main(
            "--extract", self.source_dir, "--print-cmdline", "hello.java"
        )
        self.assertEqual(code, 0)
        self.assertEqual(
            shlex.split(output), [JAVA, os.path.join(self.cache_dir, "hello.java")]
        )

    def test_print_cmdline_kind(self):
        code, output = self.run_main(
            "--kind", "jar", "--print-cmdline", "--", "-ea", "app", "x"
        )
        self.assertEqual(code, 0)
        self.assertEqual(shlex.split(output), [JAVA, "-ea", "-jar", "app", "x"])

    def test_print_cmdline_guess(self):
        code, output = self.run_main(
            "--kind", "guess", "--print-cmdline", "--", "-ea", "app.jar", "x"
        )
        self.assertEqual(code, 0)
        self.assertEqual(shlex.split(output), [JAVA, "-ea", "-jar", "app.jar", "x"])

        code, output = self.run_main("--kind", "guess", "--print-cmdline", "foo.Bar")
        self.assertEqual(code, 0)
        self.assertEqual(shlex.split(output), [JAVA, "foo.Bar"])

    def test_classpath_and_config(self):
        config_file = os.path.join(self.base_dir, "javaexec.yml")
        util.write_file("classpath: lib\noptions: [-Xmx1g]\n", config_file)
        with patch("javaexec.launcher.subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess([], 0)
            code, _ = self.run_main(
                "--config", config_file, "--classpath", "extra.jar", "Main"
            )
        self.assertEqual(code, 0)
        args, kwargs = run.call_args
        self.assertEqual(args[0], [JAVA, "-Xmx1g", "Main"])
        self.assertTrue(
            kwargs["env"]["CLASSPATH"].startswith(
                os.pathsep.join([os.path.join(self.base_dir, "lib"), "extra.jar"])
            )
        )

    def test_exit_code(self):
        with patch("javaexec.launcher.subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess([], 42)
            code, _ = self.run_main("Main")
        self.assertEqual(code, 42)

    def test_capture(self):
        with patch("javaexec.launcher.subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess([], 0, "Hello\n", "")
            code, output = self.run_main("--capture", "Main")
        self.assertEqual(code, 0)
        self.assertEqual(output, "Hello\n")

    def test_capture_exit_code(self):
        with patch("javaexec.launcher.subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess([], 3, "out", "boom")
            code, output = self.run_main("--capture", "Main")
        self.assertEqual(code, 3)
        self.assertEqual(output, "out")

        with patch("javaexec.launcher.subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess([], 4, "", "")
            code, _ = self.run_main("--kind", "class", "--capture", "Main")
        self.assertEqual(code, 4)

    def test_no_target(self):
        code, _ = self.run_main("--", "-x")
        self.assertEqual(code, "Error: no target specified")
        code, _ = self.run_main("--kind", "class")
        self.assertEqual(code, "Error: no target specified")

    def test_extract_only(self):
        with patch("javaexec.runjava.create_launcher") as create_launcher:
            code, _ = self.run_main("--extract", self.source_dir)
        self.assertEqual(code, 0)
        create_launcher.assert_not_called()
        self.assertTrue(os.path.isfile(os.path.join(self.cache_dir, "hello.java")))

    def test_clear_cache(self):
        self.run_main("--extract", self.source_dir)
        code, _ = self.run_main("--clear-cache")
        self.assertEqual(code, 0)
        self.assertFalse(os.path.exists(self.cache_dir))

    def test_invalid_extract(self):
        code, _ = self.run_main("--extract", os.path.join(self.base_dir, "missing"))
        self.assertTrue(code.startswith("Error: Cannot extract"))

    def test_invalid_kind(self):
        with contextlib.redirect_stderr(io.StringIO()):
            code, _ = self.run_main("--kind", "exe", "Main")
        self.assertEqual(code, 2)
