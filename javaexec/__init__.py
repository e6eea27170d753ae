# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

"""Main package of JavaExec.

The following modules are the public entry points:
- cmdline: for splitting a java command line into options, target, and arguments
- launcher: for executing java with a command line or an explicit target
- cache: for extracting files into the cache and looking them up again
- runjava: the command-line interface "javaexec"

Naming conventions used within JavaExec:

TOKEN: one string of a java command line as given by the user
OPTION: a token starting with a dash that is meant for java itself
MAIN: the first token that is not an option, i.e., what java should run
ARGUMENT: any token after MAIN, passed to the Java program unchanged
TARGET: a MAIN together with the information how it should be run
CACHE: a directory with extracted files that have priority over other files

Variables ending with "file" contain filenames,
variables ending with "dir" contain directory names.
"""

__version__ = "1.0"


class JavaExecException(Exception):  # noqa: N818 consistent naming of subclasses
    pass
