#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""zetabuild: OpenZFS resolution and per-architecture builds for ZetaWatch."""

from __future__ import annotations

from provide.foundation.utils import get_version

from zetabuild.arch import Architecture, resolve_build_targets
from zetabuild.build import BuildReport, XcodeBuildDriver, release_artifacts
from zetabuild.config import BuildConfig
from zetabuild.exceptions import ZetaBuildError
from zetabuild.host import HostEnvironment
from zetabuild.zfs import DependencyResolver, create_alias_links, locate_libraries

__version__ = get_version("zetabuild", caller_file=__file__)

__all__ = [
    "Architecture",
    "BuildConfig",
    "BuildReport",
    "DependencyResolver",
    "HostEnvironment",
    "XcodeBuildDriver",
    "ZetaBuildError",
    "__version__",
    "create_alias_links",
    "locate_libraries",
    "release_artifacts",
    "resolve_build_targets",
]

# 🧊🔨🔚
