# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

"""
This module splits a typical java command line into the options for java,
the main class/jar/java file, and the arguments for the Java program.

Since Java class names are indistinguishable from option values,
and since options of java can have values separated by a space,
all options need to begin with a dash and use one of the no-space forms
for assigning a value (-Dfoo=bar, -foo:bar).
The first token that does not begin with a dash is the main target.
All tokens after it are passed to the Java program unchanged,
even if they begin with a dash.
"""

from collections import namedtuple

FLAG_PREFIX = "-"
"""Prefix that marks a token before the main target as option for java."""


class ParsedCommand(namedtuple("ParsedCommand", ["main", "options", "arguments"])):
    """
    Represent a java command line split into its three parts.
    Instances are immutable and are only created by classify().

    Explanation of fields:
    main: the main class, jar, or java file, None if the command line has none
    options: tuple of options that came before main
    arguments: tuple of all tokens that came after main
    """

    def __new__(cls, main=None, options=(), arguments=()):
        return super().__new__(cls, main, tuple(options), tuple(arguments))

    @property
    def has_main(self):
        """Return whether a main target was found. Callers need to check this."""
        return self.main is not None

    @property
    def tokens(self):
        """Return the command line as flat sequence of tokens again."""
        main = () if self.main is None else (self.main,)
        return self.options + main + self.arguments


def classify(tokens):
    """
    Split a sequence of tokens into options, main target, and arguments.
    This never fails; a missing main target is reported by has_main
    and needs to be handled by the caller.
    @param tokens: an iterable of strings
    @return an instance of ParsedCommand
    """
    main = None
    options = []
    arguments = []

    for token in tokens:
        if main is not None:
            arguments.append(token)
        elif token.startswith(FLAG_PREFIX):
            options.append(token)
        else:
            main = token

    return ParsedCommand(main, options, arguments)
