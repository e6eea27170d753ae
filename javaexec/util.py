# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

"""
This module contains some useful functions for paths, processes, and logging.
"""

import argparse
import collections
import logging
import os
import shutil
import stat
import sys


def printOut(value, end="\n"):
    """
    This function prints the given String immediately and flushes the output.
    """
    sys.stdout.write(value)
    sys.stdout.write(end)
    sys.stdout.flush()


class InputValueError(ValueError, argparse.ArgumentTypeError):
    """
    Exception for invalid values passed as input.
    Inherits from both ValueError and ArgumentTypeError in order to be useful
    for both inputs to called methods (should raise ValueError)
    and for inputs from user (in type handlers for argparse.add_argument).
    """

    pass


def non_empty_str(s):
    """Utility for requiring a non-empty string value as command-line parameter."""
    s = str(s)
    if not s:
        raise InputValueError("empty string not allowed")
    return s


def find_executable2(name, dirs=None, required_mode=os.X_OK):
    """
    Search for an executable file either in PATH or in given directories.

    @param name: The name of the executable to search
    @param dirs: The directories where to search (PATH will be used by default)
    @param required_mode: A valid mode parameter for os.access as filter criterion
    @return None or the path to the executable
    """
    if dirs is None:
        dirs = get_path()

    for candidate_dir in dirs:
        candidate = os.path.join(candidate_dir, name)
        if os.path.isfile(candidate) and os.access(candidate, required_mode):
            return candidate

    return None


def get_path(env=None):
    """Get list of directories in PATH environment variable."""
    if env is None:
        env = os.environ
    return [d for d in env.get("PATH", "").split(os.path.pathsep) if d]


def join_path_list(*parts):
    """
    Join several search-path values (each a string or a list of entries)
    into one string for a variable like CLASSPATH, skipping empty entries.
    """
    entries = []
    for part in parts:
        if not part:
            continue
        if isinstance(part, str):
            part = part.split(os.pathsep)
        entries.extend(entry for entry in part if entry)
    return os.pathsep.join(entries)


def rmtree(path, ignore_errors=False, onerror=None):
    """Same as shutil.rmtree, but supports directories without write or execute permissions."""
    if ignore_errors:

        def onerror(*args):
            pass

    elif onerror is None:

        def onerror(*args):
            raise

    for root, dirs, _unused_files in os.walk(path):
        for directory in dirs:
            try:
                abs_directory = os.path.join(root, directory)
                os.chmod(abs_directory, stat.S_IRWXU)
            except OSError as e:
                onerror(os.chmod, abs_directory, e)
    shutil.rmtree(path, ignore_errors=ignore_errors, onerror=onerror)


def write_file(content, *path):
    """
    Simply write some content to a file, overriding the file if necessary.
    """
    filename = os.path.join(*path)
    with open(filename, "w") as file:
        return file.write(content)


class ProcessExitCode(collections.namedtuple("ProcessExitCode", "raw value signal")):
    """Tuple for storing the exit status of a process.
    Only value or signal are present, not both
    (a process cannot return a value when it is killed by a signal).
    """

    @classmethod
    def from_returncode(cls, returncode):
        """
        Create an instance from the returncode attribute of subprocess,
        which is negative if the process was killed by a signal.
        """
        if returncode < 0:
            return cls.create(signal=-returncode)
        if returncode > 255:
            # Windows reports 32-bit exit codes, e.g., 0xC0000005 for a crash
            return cls(returncode, returncode, None)
        return cls.create(value=returncode)

    @classmethod
    def create(cls, value=None, signal=None):
        """
        Create an instance of either a return value or an exit signal.
        The other parameter must be None.
        """
        if value is None and signal is None:
            raise ValueError("Need return value or exit signal for ProcessExitCode")
        if value is not None and signal is not None:
            raise ValueError("Cannot create ProcessExitCode with both value and signal")
        if value is not None and not (0 <= value <= 255):
            raise ValueError(f"Invalid value {value} for return value")
        if signal is not None and not (1 <= signal <= 127):
            raise ValueError(f"Invalid value {signal} for exit signal")

        exitcode = ((value or 0) * 256) + (signal or 0)
        return cls(exitcode, value, signal)

    @property
    def shell_status(self):
        """Exit status as a shell would report it (128 + signal for killed processes)."""
        return 128 + self.signal if self.signal else self.value

    def __str__(self):
        return (
            f"exit signal {self.signal}"
            if self.signal
            else f"return value {self.value}"
        )

    def __bool__(self):
        return bool(self.signal or self.value)


def should_color_output():
    """Determine whether we want colored output to stdout."""
    # cf. https://no-color.org/
    return sys.stdout.isatty() and "NO_COLOR" not in os.environ


def setup_logging(fmt="%(asctime)s - %(levelname)s - %(message)s", level=logging.INFO):
    """Setup the logging framework with a basic configuration"""
    if should_color_output():
        try:
            import coloredlogs

            coloredlogs.install(fmt=fmt, level=level)
            return
        except ImportError:
            pass

    logging.basicConfig(format=fmt, level=level)
