# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

"""
This module reads configuration files for JavaExec in YAML format, e.g.:

    java: /usr/lib/jvm/java-17/bin/java
    cache_dir: ~/.cache/myapp-java
    classpath:
      - lib/
      - lib/dependency.jar
    options:
      - -Xmx512m

All keys are optional. Relative paths are interpreted as relative
to the directory of the configuration file.
"""

from collections import namedtuple
import collections.abc
import os
import yaml

from javaexec import JavaExecException

_PATH_KEYS = ("java", "cache_dir")
_LIST_KEYS = ("classpath", "options")


class ConfigError(JavaExecException):
    """
    Raised when a configuration file cannot be read or has invalid content.
    """

    pass


class Config(namedtuple("Config", ["java", "cache_dir", "classpath", "options"])):
    """
    Represent the content of a configuration file.

    Explanation of fields:
    java: path to the java executable or None
    cache_dir: path to the cache directory or None
    classpath: tuple of classpath entries
    options: tuple of options for java that are added to every invocation
    """

    def __new__(cls, java=None, cache_dir=None, classpath=(), options=()):
        return super().__new__(cls, java, cache_dir, tuple(classpath), tuple(options))


def _resolve_path(path, base_dir):
    return os.path.normpath(os.path.join(base_dir, os.path.expanduser(path)))


def _list_value(key, value, config_file):
    """
    Handle content of a key like classpath in a configuration file.
    Accept a single string in addition to a list of strings.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, collections.abc.Iterable) and not isinstance(
        value, collections.abc.Mapping
    ):
        values = list(value)
        if all(isinstance(v, str) for v in values):
            return values
    raise ConfigError(
        f"Configuration file {config_file} specifies invalid value for '{key}', "
        f"needs to be a string or a list of strings."
    )


def load_config(config_file):
    """
    Open and parse a configuration file in YAML format.
    @return an instance of Config
    """
    try:
        with open(config_file) as f:
            content = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot open configuration file: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid configuration file: {e}")

    if content is None:
        return Config()
    if not isinstance(content, dict):
        raise ConfigError(
            f"Invalid configuration file {config_file}: needs to be a mapping."
        )

    unknown_keys = set(content) - set(Config._fields)
    if unknown_keys:
        raise ConfigError(
            f"Configuration file {config_file} has unknown keys: "
            + ", ".join(sorted(map(str, unknown_keys)))
        )

    base_dir = os.path.dirname(config_file)
    values = {}
    for key in _PATH_KEYS:
        value = content.get(key)
        if value is None:
            continue
        if not isinstance(value, str) or not value:
            raise ConfigError(
                f"Configuration file {config_file} specifies invalid value "
                f"for '{key}', needs to be a non-empty string."
            )
        values[key] = _resolve_path(value, base_dir)

    for key in _LIST_KEYS:
        values[key] = _list_value(key, content.get(key), config_file)
    values["classpath"] = [_resolve_path(p, base_dir) for p in values["classpath"]]

    return Config(**values)


def merge(config, **overrides):
    """
    Return a copy of config where all given values that are not None
    take precedence. Lists given as overrides are appended.
    """
    values = config._asdict()
    for key, value in overrides.items():
        if value is None:
            continue
        if key in _LIST_KEYS:
            values[key] = values[key] + tuple(value)
        else:
            values[key] = value
    return Config(**values)
