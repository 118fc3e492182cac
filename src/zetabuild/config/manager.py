#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Process-wide access to the build configuration used by the CLI."""

from __future__ import annotations

from zetabuild.config.config import BuildConfig

_config: BuildConfig | None = None


def get_build_config() -> BuildConfig:
    """Return the active configuration, loading it from the environment on first use."""
    global _config
    if _config is None:
        _config = BuildConfig.from_env()
    return _config


def set_build_config(config: BuildConfig) -> None:
    """Replace the active configuration."""
    global _config
    _config = config


def reset_build_config() -> None:
    """Forget the active configuration so the next access reloads it."""
    global _config
    _config = None


# 🧊🔨🔚
