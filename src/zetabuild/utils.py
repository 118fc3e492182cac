#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Small reporting helpers shared by the commands."""

from __future__ import annotations

from pathlib import Path

from provide.foundation.errors import ProcessError
from provide.foundation.process import run


def describe_binary(path: Path) -> str | None:
    """Return ``file -b`` output for a Mach-O file (shows its architectures), if available."""
    try:
        result = run(["file", "-b", str(path)], check=False, capture_output=True)
    except (ProcessError, OSError):
        # Reporting only; a missing `file` tool is not an error
        return None
    if result.returncode != 0 or not result.stdout:
        return None
    return result.stdout.strip()


# 🧊🔨🔚
