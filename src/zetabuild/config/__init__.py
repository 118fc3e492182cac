#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""zetabuild configuration built on the Provide Foundation config stack."""

from __future__ import annotations

from zetabuild.config.config import BuildConfig
from zetabuild.config.manager import (
    get_build_config,
    reset_build_config,
    set_build_config,
)
from zetabuild.config.runtime import ZetaBuildRuntimeConfig

__all__ = [
    "BuildConfig",
    "ZetaBuildRuntimeConfig",
    "get_build_config",
    "reset_build_config",
    "set_build_config",
]

# 🧊🔨🔚
