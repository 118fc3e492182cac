#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Command modules for the zetabuild CLI."""

from __future__ import annotations

from zetabuild.commands.build import build_command
from zetabuild.commands.release import release_command
from zetabuild.commands.zfs import zfs_group

__all__ = [
    "build_command",
    "release_command",
    "zfs_group",
]

# 🧊🔨🔚
