# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

"""
This module executes the java executable of the host system.
The command invocation depends entirely on the installed version of java
and observes CLASSPATH and all other java-specific environment variables.
No shell expansion is performed.

The environment of the current process is never modified:
the classpath (cache directory, configured entries, and the CLASSPATH
of the environment, in this order) is passed to each invocation explicitly.
"""

import contextlib
import logging
import os
import re
import shlex
import subprocess
import sys
import tempfile

from javaexec import JavaExecException
from javaexec import cmdline
from javaexec import util
from javaexec.target import TargetKind, SOURCE_SUFFIX, ARCHIVE_SUFFIX
from javaexec.target import path_to_class

JAVA_EXECUTABLE = "java.exe" if sys.platform == "win32" else "java"

INLINE_SOURCE_FILENAME = "Main" + SOURCE_SUFFIX

_VERSION_PATTERN = re.compile(r'version "([^"]*)"')


class NoTargetError(JavaExecException):
    """
    Raised when a command line has no main class, jar, or java file.
    """

    def __init__(self, msg="no target specified"):
        super().__init__(msg)


class JavaNotFoundException(JavaExecException):
    """
    Raised when the java executable cannot be found.
    """

    pass


def find_java(env=None):
    """
    Find the java executable, preferring $JAVA_HOME/bin over the directories in PATH.
    @param env: the environment to look at (default: environment of this process)
    @return the path to the java executable
    """
    if env is None:
        env = os.environ
    dirs = []
    if env.get("JAVA_HOME"):
        dirs.append(os.path.join(env["JAVA_HOME"], "bin"))
    dirs.extend(util.get_path(env))

    executable = util.find_executable2(JAVA_EXECUTABLE, dirs)
    if executable:
        return executable

    other_file = util.find_executable2(JAVA_EXECUTABLE, dirs, os.F_OK)
    if other_file:
        raise JavaNotFoundException(
            f"Could not find executable '{JAVA_EXECUTABLE}', "
            f"but found file '{other_file}' that is not executable."
        )

    msg = (
        f"Could not find executable '{JAVA_EXECUTABLE}'. "
        f"The searched directories were: " + "".join("\n  " + d for d in dirs)
    )
    if not env.get("JAVA_HOME"):
        msg += "\nYou can specify the Java installation with JAVA_HOME or --java."
    raise JavaNotFoundException(msg)


class JavaLauncher(object):
    """
    Class for executing java with a command line or an explicit target.
    Files with the name of the main java or jar file that were extracted into the
    cache are preferred over the given path.
    """

    def __init__(self, java=None, cache=None, classpath=(), options=(), env=None):
        """
        @param java: path to the java executable (default: searched with find_java)
        @param cache: an instance of javaexec.cache.Cache or None
        @param classpath: entries to add to the classpath of every invocation
        @param options: options for java that are added to every invocation
        @param env: base environment for java (default: environment of this process)
        """
        self.java = java or find_java(env)
        self.cache = cache
        self.classpath = list(classpath)
        self.options = list(options)
        self.env = env

    def environment(self):
        """Return the environment for the next invocation of java."""
        env = dict(os.environ if self.env is None else self.env)
        cache_entry = None
        if self.cache is not None and self.cache.exists():
            cache_entry = self.cache.classpath_entry()
        classpath = util.join_path_list(
            cache_entry, self.classpath, env.get("CLASSPATH")
        )
        if classpath:
            env["CLASSPATH"] = classpath
        return env

    def _cached(self, name):
        if self.cache is None:
            return None
        return self.cache.cached(name)

    def build_cmdline(self, tokens):
        """
        Create the full command line for java from the given tokens
        (options for java, the main class/jar/java file, and arguments).
        Raises NoTargetError if there is no main class/jar/java file.
        @return a list of strings
        """
        parsed = cmdline.classify(tokens)
        if not parsed.has_main:
            raise NoTargetError()

        main = parsed.main
        if main.endswith(SOURCE_SUFFIX) or main.endswith(ARCHIVE_SUFFIX):
            main = self._cached(main) or main

        return [self.java, *self.options, *parsed.options, main, *parsed.arguments]

    @contextlib.contextmanager
    def target_cmdline(self, target, options=(), arguments=()):
        """
        Create the full command line for java for an explicit target.
        This is a context manager because inline source is written to a
        temporary file that is deleted afterwards.
        @param target: an instance of javaexec.target.Target
        @param options: options for java
        @param arguments: arguments for the Java program
        """
        options = [*self.options, *options]
        if target.kind is TargetKind.INLINE_SOURCE:
            with tempfile.TemporaryDirectory(prefix="javaexec_") as temp_dir:
                util.write_file(target.value, temp_dir, INLINE_SOURCE_FILENAME)
                source_file = os.path.join(temp_dir, INLINE_SOURCE_FILENAME)
                yield [self.java, *options, source_file, *arguments]
            return

        if target.kind is TargetKind.COMPILED_CLASS:
            main = path_to_class(target.value)
        else:
            main = self._cached(target.cache_name) or target.value
        if target.kind is TargetKind.ARCHIVE and "-jar" not in options:
            options.append("-jar")
        yield [self.java, *options, main, *arguments]

    def _run(self, args, capture):
        logging.debug("Executing %s", shlex.join(args))
        output = subprocess.PIPE if capture else None
        try:
            process = subprocess.run(
                args,
                stdin=subprocess.DEVNULL if capture else None,
                stdout=output,
                stderr=output,
                env=self.environment(),
                universal_newlines=True,
            )
        except OSError as e:
            raise JavaExecException(f"Cannot execute '{args[0]}': {e.strerror}")
        exit_code = util.ProcessExitCode.from_returncode(process.returncode)
        logging.debug("java terminated with %s.", exit_code)
        return exit_code, process.stdout, process.stderr

    def _capture(self, args):
        exit_code, stdout, stderr = self._run(args, capture=True)
        if stderr:
            logging.warning("java wrote to stderr:\n%s", stderr.rstrip())
        if exit_code:
            logging.warning("java terminated with %s.", exit_code)
        return exit_code, stdout

    def _output(self, args):
        try:
            _, stdout = self._capture(args)
        except JavaExecException as e:
            logging.warning("%s", e)
            return ""
        return stdout

    def execute(self, *tokens):
        """
        Execute java with the given tokens with stdin, stdout, and stderr
        connected to those of this process.
        @return an instance of javaexec.util.ProcessExitCode
        """
        exit_code, _, _ = self._run(self.build_cmdline(tokens), capture=False)
        return exit_code

    def output(self, *tokens):
        """
        Same as execute(), but return what java wrote to stdout.
        Errors of java are logged but not raised,
        only a missing main class/jar/java file raises NoTargetError.
        """
        return self._output(self.build_cmdline(tokens))

    def capture(self, *tokens):
        """
        Same as output(), but also return the exit code of java.
        Unlike output(), failing to start java raises JavaExecException.
        @return a tuple of a javaexec.util.ProcessExitCode and the output of java
        """
        return self._capture(self.build_cmdline(tokens))

    def execute_target(self, target, options=(), arguments=()):
        """Same as execute(), but for an explicit instance of Target."""
        with self.target_cmdline(target, options, arguments) as args:
            exit_code, _, _ = self._run(args, capture=False)
        return exit_code

    def output_target(self, target, options=(), arguments=()):
        """Same as output(), but for an explicit instance of Target."""
        with self.target_cmdline(target, options, arguments) as args:
            return self._output(args)

    def capture_target(self, target, options=(), arguments=()):
        """Same as capture(), but for an explicit instance of Target."""
        with self.target_cmdline(target, options, arguments) as args:
            return self._capture(args)

    def version(self):
        """
        Determine the version of java by executing it with argument "-version".
        @return a (possibly empty) string
        """
        try:
            process = subprocess.run(
                [self.java, "-version"],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                env=self.environment(),
                universal_newlines=True,
            )
        except OSError as e:
            logging.warning("Cannot run %s to determine version: %s", self.java, e)
            return ""
        if process.returncode:
            logging.warning(
                "Cannot determine %s version, exit code %s",
                self.java,
                process.returncode,
            )
            return ""
        # java prints its version to stderr, e.g., 'openjdk version "17.0.2" 2022-01-18'
        match = _VERSION_PATTERN.search(process.stderr or process.stdout)
        return match.group(1) if match else ""
