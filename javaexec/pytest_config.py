# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

import os
import sys
import pytest

from javaexec.config import Config, ConfigError, load_config, merge

sys.dont_write_bytecode = True  # prevent creation of .pyc files


@pytest.fixture
def config_file(tmp_path):
    def write(content):
        path = tmp_path / "javaexec.yml"
        path.write_text(content)
        return str(path)

    return write


class TestLoadConfig:
    def test_full(self, config_file, tmp_path):
        config = load_config(
            config_file(
                "java: /usr/lib/jvm/java-17/bin/java\n"
                "cache_dir: cache\n"
                "classpath:\n"
                "  - lib\n"
                "  - /opt/dependency.jar\n"
                "options:\n"
                "  - -Xmx512m\n"
                "  - -Dfoo=bar\n"
            )
        )
        assert config.java == os.path.normpath("/usr/lib/jvm/java-17/bin/java")
        assert config.cache_dir == os.path.join(str(tmp_path), "cache")
        assert config.classpath == (
            os.path.join(str(tmp_path), "lib"),
            os.path.normpath("/opt/dependency.jar"),
        )
        assert config.options == ("-Xmx512m", "-Dfoo=bar")

    def test_single_strings(self, config_file, tmp_path):
        config = load_config(config_file("classpath: lib\noptions: -ea\n"))
        assert config.classpath == (os.path.join(str(tmp_path), "lib"),)
        assert config.options == ("-ea",)
        assert config.java is None

    def test_empty(self, config_file):
        assert load_config(config_file("")) == Config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot open"):
            load_config(str(tmp_path / "missing.yml"))

    @pytest.mark.parametrize(
        "content,message",
        [
            ("java: [unclosed\n", "Invalid configuration file"),
            ("- java\n", "needs to be a mapping"),
            ("jvm: java\n", "unknown keys: jvm"),
            ("java: 17\n", "non-empty string"),
            ("cache_dir: ''\n", "non-empty string"),
            ("classpath: {a: b}\n", "list of strings"),
            ("options: [-ea, 1]\n", "list of strings"),
        ],
    )
    def test_invalid(self, config_file, content, message):
        with pytest.raises(ConfigError, match=message):
            load_config(config_file(content))


class TestMerge:
    def test_overrides(self):
        config = Config(java="java", cache_dir="cache", classpath=["a"])
        merged = merge(config, java="/bin/java", cache_dir=None, classpath=["b"])
        assert merged == Config(
            java="/bin/java", cache_dir="cache", classpath=["a", "b"]
        )

    def test_nothing_to_merge(self):
        config = Config(options=["-ea"])
        assert merge(config, java=None, classpath=None) == config
