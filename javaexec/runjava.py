# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

import argparse
import logging
import shlex
import sys

from javaexec import __version__
from javaexec import JavaExecException
from javaexec import config as javaexec_config
from javaexec import util
from javaexec.cache import Cache
from javaexec.cmdline import classify
from javaexec.launcher import JavaLauncher, NoTargetError
from javaexec.target import Target, TargetKind

sys.dont_write_bytecode = True  # prevent creation of .pyc files

_KIND_CHOICES = ["auto", "guess"] + [kind.value for kind in TargetKind]


def create_argument_parser():
    parser = argparse.ArgumentParser(
        fromfile_prefix_chars="@",
        description="""Execute a Java source file, class, or jar with the java
           executable of this system, preferring files that were extracted into the cache.
           Options for java need to come before the main class/jar/java file
           and need to use the no-space forms (-Dfoo=bar, -foo:bar).
           Command-line parameters can additionally be read from a file if file name prefixed with '@' is given as argument.""",
    )
    parser.add_argument(
        "args",
        nargs="*",
        metavar="ARG",
        help="java command line: options for java, main class/jar/java file, "
        'and arguments (prefix with "--" to ensure all arguments are treated correctly)',
    )

    java_args = parser.add_argument_group("optional arguments for java")
    java_args.add_argument(
        "--java",
        type=util.non_empty_str,
        metavar="PATH",
        help="java executable to use (default: from JAVA_HOME or PATH)",
    )
    java_args.add_argument(
        "--classpath",
        action="append",
        type=util.non_empty_str,
        metavar="ENTRY",
        help="additional classpath entry, after the cache and before CLASSPATH "
        "(may be specified multiple times)",
    )
    java_args.add_argument(
        "--kind",
        choices=_KIND_CHOICES,
        default="auto",
        help="how to run the main target: as java source file, compiled class, "
        "jar archive, or inline Java source code, "
        "guessed from the shape of the main target (guess), "
        "or passed to java as given (default: auto)",
    )
    java_args.add_argument(
        "--config",
        metavar="FILE",
        help="YAML file with default values for java, cache_dir, classpath, "
        "and options",
    )

    cache_args = parser.add_argument_group("optional arguments for the cache")
    cache_args.add_argument(
        "--cache-dir",
        type=util.non_empty_str,
        metavar="DIR",
        help="directory with extracted files (default: javaexec in user cache dir)",
    )
    cache_args.add_argument(
        "--extract",
        action="append",
        default=[],
        metavar="SOURCE",
        help="directory or jar/zip archive to extract into the cache before "
        "running (may be specified multiple times)",
    )
    cache_args.add_argument(
        "--clear-cache",
        action="store_true",
        help="delete the cache directory before doing anything else",
    )

    output_args = parser.add_argument_group("optional arguments for output")
    output_args.add_argument(
        "--capture",
        action="store_true",
        help="capture the output of java and print it after java terminated, "
        "with error output being logged",
    )
    output_args.add_argument(
        "--print-cmdline",
        action="store_true",
        help="only print the command line that would be executed",
    )
    output_args.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )

    verbosity = output_args.add_mutually_exclusive_group()
    verbosity.add_argument("--debug", action="store_true", help="show debug output")
    verbosity.add_argument("--quiet", action="store_true", help="show only warnings")

    return parser


def handle_logging_options(options):
    logLevel = logging.INFO
    if options.debug:
        logLevel = logging.DEBUG
    elif options.quiet:
        logLevel = logging.WARNING
    util.setup_logging(level=logLevel)


def load_config(options):
    """Combine the configuration file (if any) with the command-line options."""
    config = javaexec_config.Config()
    if options.config:
        config = javaexec_config.load_config(options.config)
    config = javaexec_config.merge(
        config,
        java=options.java,
        cache_dir=options.cache_dir,
        classpath=options.classpath,
    )
    logging.debug("Using configuration %s", config)

    return config


def prepare_cache(options, config):
    cache = Cache(config.cache_dir)
    if options.clear_cache:
        cache.clear()
    for source in options.extract:
        extracted = cache.extract(source)
        logging.info("Extracted %d files from %s.", len(extracted), source)
    return cache


def create_launcher(config, cache):
    return JavaLauncher(
        java=config.java,
        cache=cache,
        classpath=config.classpath,
        options=config.options,
    )


def execute(launcher, tokens, kind="auto", capture=False, print_cmdline=False):
    """
    Execute java (or only print the command line) for the given tokens.
    @return the exit status for this process
    """
    if kind == "auto":
        if print_cmdline:
            util.printOut(shlex.join(launcher.build_cmdline(tokens)))
            return 0
        if capture:
            exit_code, output = launcher.capture(*tokens)
            sys.stdout.write(output)
            return exit_code.shell_status
        return launcher.execute(*tokens).shell_status

    parsed = classify(tokens)
    if not parsed.main:
        raise NoTargetError()
    if kind == "guess":
        target = Target.from_main(parsed.main)
    else:
        target = Target(kind, parsed.main)
    logging.debug("Running %s as %s.", target, target.kind.name)

    if print_cmdline:
        with launcher.target_cmdline(target, parsed.options, parsed.arguments) as args:
            util.printOut(shlex.join(args))
        return 0
    if capture:
        exit_code, output = launcher.capture_target(
            target, parsed.options, parsed.arguments
        )
        sys.stdout.write(output)
        return exit_code.shell_status
    return launcher.execute_target(
        target, parsed.options, parsed.arguments
    ).shell_status


def main(argv=None):
    """
    A simple command-line interface for the launcher module of JavaExec.
    It does not return but calls sys.exit().
    """
    if argv is None:
        argv = sys.argv

    parser = create_argument_parser()
    options = parser.parse_args(argv[1:])
    handle_logging_options(options)
    logging.debug("This is javaexec %s.", __version__)

    try:
        config = load_config(options)
        cache = prepare_cache(options, config)
        if not options.args and (options.extract or options.clear_cache):
            sys.exit(0)
        launcher = create_launcher(config, cache)
        sys.exit(
            execute(
                launcher,
                options.args,
                kind=options.kind,
                capture=options.capture,
                print_cmdline=options.print_cmdline,
            )
        )
    except JavaExecException as e:
        sys.exit(f"Error: {e}")
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
