# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Command line interface for lintgate."""

from .app import app, main

__all__ = ["app", "main"]
