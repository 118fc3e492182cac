#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Centralized default values for zetabuild configuration."""

from __future__ import annotations

# =================================
# OpenZFS release defaults
# =================================
DEFAULT_OPENZFS_VERSION = "zfs-macOS-2.3.0"
DEFAULT_OPENZFS_URL = "https://github.com/openzfsonosx/openzfs-fork/archive/refs/tags/{version}.tar.gz"
OPENZFS_ARCHIVE_NAME = "openzfs-{version}.tar.gz"
OPENZFS_SOURCE_DIR = "openzfs-fork-{version}"  # Top-level directory inside the tarball

# =================================
# Install layout defaults
# =================================
DEFAULT_ZFS_PREFIX = "/usr/local/zfs"
PREFIX_SUBDIRS = ("lib", "include", "bin", "sbin")

# Extra directories searched after <prefix>/lib
DEFAULT_ZFS_SEARCH_PATHS = (
    "/opt/homebrew/lib",
    "/usr/local/lib",
)

# =================================
# Install strategy defaults
# =================================
STRATEGY_SOURCE = "source"  # Pinned release built from tarball
STRATEGY_CASK = "cask"  # Whatever the package manager currently ships
INSTALL_STRATEGIES = (STRATEGY_SOURCE, STRATEGY_CASK)
DEFAULT_INSTALL_STRATEGY = STRATEGY_SOURCE

DEFAULT_PACKAGE_MANAGER = "brew"
DEFAULT_CASK_NAME = "openzfs"
TOOLCHAIN_FORMULAE = ("autoconf", "automake", "libtool")

CONFIGURE_BASE_ARGS = (
    "--with-config=user",
    "--enable-systemd=no",
    "--enable-sysvinit=no",
)

# =================================
# Xcode project defaults
# =================================
DEFAULT_XCODE_PROJECT = "ZetaWatch.xcodeproj"
DEFAULT_SCHEME = "ZetaWatch"
DEFAULT_BUILD_CONFIGURATION = "Release"
DEFAULT_PRODUCT_NAME = "ZetaWatch"

# =================================
# Output layout defaults
# =================================
DEFAULT_BUILD_DIR = "build"
DEFAULT_DIST_DIR = "dist"
BUILD_LOG_TEMPLATE = "build-{arch}.log"
CHECKSUM_SUFFIX = ".sha256"

# =================================
# CI cache defaults
# =================================
CACHE_KEY_TEMPLATE = "openzfs-{version}-{arch}-{os}"

# 🧊🔨🔚
