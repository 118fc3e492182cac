#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Locating, installing and aliasing the OpenZFS libraries."""

from zetabuild.zfs.installers import (
    CaskInstaller,
    DependencyInstaller,
    SourceInstaller,
    get_installer,
)
from zetabuild.zfs.libraries import PRIMARY_LIBRARY, REQUIRED_LIBRARIES, ZfsLibrary
from zetabuild.zfs.locator import LocatorResult, locate_libraries
from zetabuild.zfs.resolution import DependencyResolver, ResolutionState
from zetabuild.zfs.shim import create_alias_links

__all__ = [
    "PRIMARY_LIBRARY",
    "REQUIRED_LIBRARIES",
    "CaskInstaller",
    "DependencyInstaller",
    "DependencyResolver",
    "LocatorResult",
    "ResolutionState",
    "SourceInstaller",
    "ZfsLibrary",
    "create_alias_links",
    "get_installer",
    "locate_libraries",
]

# 🧊🔨🔚
