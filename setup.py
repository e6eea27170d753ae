#!/usr/bin/env python3

# This file is part of JavaExec, a convenience layer for running Java programs.
#
# SPDX-FileCopyrightText: 2022-2026 JavaExec contributors
#
# SPDX-License-Identifier: Apache-2.0

import setuptools
import warnings

warnings.filterwarnings("default", module=r"^javaexec\..*")

# All metadata is in pyproject.toml, this file only exists for
# editable installs (pip install -e .) with old versions of pip.

setuptools.setup()
