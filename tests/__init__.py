# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
