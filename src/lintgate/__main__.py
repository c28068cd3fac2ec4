# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Allow ``python -m lintgate``."""

from .cli import main

main()
