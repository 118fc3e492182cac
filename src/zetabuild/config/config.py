#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Typed build configuration.

Every value the build and install flows need is carried by :class:`BuildConfig`
and passed explicitly to the components, instead of being probed from the
environment at each step. Values can be overridden with ``ZETABUILD_*``
environment variables via :meth:`BuildConfig.from_env`.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from attrs import define
from provide.foundation.config.base import field
from provide.foundation.config.env import RuntimeConfig

from zetabuild.config.defaults import (
    BUILD_LOG_TEMPLATE,
    CACHE_KEY_TEMPLATE,
    DEFAULT_BUILD_CONFIGURATION,
    DEFAULT_BUILD_DIR,
    DEFAULT_CASK_NAME,
    DEFAULT_DIST_DIR,
    DEFAULT_INSTALL_STRATEGY,
    DEFAULT_OPENZFS_URL,
    DEFAULT_OPENZFS_VERSION,
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_PRODUCT_NAME,
    DEFAULT_SCHEME,
    DEFAULT_XCODE_PROJECT,
    DEFAULT_ZFS_PREFIX,
    DEFAULT_ZFS_SEARCH_PATHS,
    INSTALL_STRATEGIES,
)
from zetabuild.exceptions import ConfigurationError

if TYPE_CHECKING:
    from zetabuild.arch import Architecture

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def parse_bool(value: str | bool) -> bool:
    """Parse a boolean from an environment string."""
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value '{value}'")


def parse_jobs(value: str | int) -> int:
    """Parse the parallel job count; 0 means one job per logical CPU."""
    try:
        jobs = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid job count '{value}'") from None
    if jobs < 0:
        raise ConfigurationError(f"Job count must not be negative, got {jobs}")
    return jobs


def parse_strategy(value: str) -> str:
    """Validate the OpenZFS install strategy."""
    normalized = value.strip().lower()
    if normalized not in INSTALL_STRATEGIES:
        raise ConfigurationError(
            f"Invalid install strategy '{value}' (expected one of: {', '.join(INSTALL_STRATEGIES)})"
        )
    return normalized


def parse_search_paths(value: str | Iterable[str]) -> tuple[str, ...]:
    """Parse library search paths from an os.pathsep separated string or a sequence."""
    if isinstance(value, str):
        parts = value.split(os.pathsep)
    else:
        parts = [str(part) for part in value]
    return tuple(part.strip() for part in parts if part.strip())


@define
class BuildConfig(RuntimeConfig):
    """Configuration for OpenZFS resolution and ZetaWatch builds."""

    # Xcode project
    project: str = field(
        default=DEFAULT_XCODE_PROJECT,
        env_var="ZETABUILD_XCODE_PROJECT",
        metadata={"help": "Xcode project file, relative to the project root"},
    )
    scheme: str = field(
        default=DEFAULT_SCHEME,
        env_var="ZETABUILD_SCHEME",
        metadata={"help": "Xcode scheme to build"},
    )
    configuration: str = field(
        default=DEFAULT_BUILD_CONFIGURATION,
        env_var="ZETABUILD_CONFIGURATION",
        metadata={"help": "Xcode build configuration"},
    )
    product_name: str = field(
        default=DEFAULT_PRODUCT_NAME,
        env_var="ZETABUILD_PRODUCT",
        metadata={"help": "Name of the produced .app bundle and artifacts"},
    )

    # Layout
    project_root: str = field(
        default=".",
        env_var="ZETABUILD_PROJECT_ROOT",
        metadata={"help": "Directory containing the Xcode project"},
    )
    build_dir: str = field(
        default=DEFAULT_BUILD_DIR,
        env_var="ZETABUILD_BUILD_DIR",
        metadata={"help": "Build output tree searched for the app bundle"},
    )
    dist_dir: str = field(
        default=DEFAULT_DIST_DIR,
        env_var="ZETABUILD_DIST_DIR",
        metadata={"help": "Directory receiving copied bundles and zip archives"},
    )
    log_dir: str = field(
        default=".",
        env_var="ZETABUILD_LOG_DIR",
        metadata={"help": "Directory receiving per-architecture build logs"},
    )

    # OpenZFS dependency
    zfs_prefix: str = field(
        default=DEFAULT_ZFS_PREFIX,
        env_var="ZETABUILD_ZFS_PREFIX",
        metadata={"help": "Install prefix for OpenZFS"},
    )
    zfs_search_paths: tuple[str, ...] = field(
        default=DEFAULT_ZFS_SEARCH_PATHS,
        env_var="ZETABUILD_ZFS_SEARCH_PATHS",
        converter=parse_search_paths,
        metadata={"help": "Extra library directories searched after <prefix>/lib"},
    )
    openzfs_version: str = field(
        default=DEFAULT_OPENZFS_VERSION,
        env_var="ZETABUILD_OPENZFS_VERSION",
        metadata={"help": "OpenZFS release tag built by the source strategy"},
    )
    openzfs_url: str = field(
        default=DEFAULT_OPENZFS_URL,
        env_var="ZETABUILD_OPENZFS_URL",
        metadata={"help": "Tarball URL template, {version} is substituted"},
    )
    install_strategy: str = field(
        default=DEFAULT_INSTALL_STRATEGY,
        env_var="ZETABUILD_INSTALL_STRATEGY",
        converter=parse_strategy,
        metadata={"help": "How to install OpenZFS: source or cask"},
    )
    cask_name: str = field(
        default=DEFAULT_CASK_NAME,
        env_var="ZETABUILD_CASK",
        metadata={"help": "Cask installed by the cask strategy"},
    )
    package_manager: str = field(
        default=DEFAULT_PACKAGE_MANAGER,
        env_var="ZETABUILD_PACKAGE_MANAGER",
        metadata={"help": "Package manager executable"},
    )
    use_sudo: bool = field(
        default=True,
        env_var="ZETABUILD_USE_SUDO",
        converter=parse_bool,
        metadata={"help": "Prefix privileged install steps with sudo"},
    )
    build_jobs: int = field(
        default=0,
        env_var="ZETABUILD_BUILD_JOBS",
        converter=parse_jobs,
        metadata={"help": "Parallel make jobs, 0 uses the logical CPU count"},
    )

    def resolve(self, value: str) -> Path:
        """Resolve a configured path relative to the project root."""
        path = Path(value)
        if path.is_absolute():
            return path
        return Path(self.project_root) / path

    @property
    def project_path(self) -> Path:
        return self.resolve(self.project)

    @property
    def build_path(self) -> Path:
        return self.resolve(self.build_dir)

    @property
    def dist_path(self) -> Path:
        return self.resolve(self.dist_dir)

    @property
    def log_path_dir(self) -> Path:
        return self.resolve(self.log_dir)

    @property
    def zfs_prefix_path(self) -> Path:
        return Path(self.zfs_prefix)

    @property
    def zfs_lib_dir(self) -> Path:
        return self.zfs_prefix_path / "lib"

    def library_search_paths(self) -> list[Path]:
        """Candidate library directories in search order, without duplicates."""
        ordered: list[Path] = []
        for candidate in (self.zfs_lib_dir, *(Path(p) for p in self.zfs_search_paths)):
            if candidate not in ordered:
                ordered.append(candidate)
        return ordered

    def tarball_url(self) -> str:
        return self.openzfs_url.format(version=self.openzfs_version)

    def log_path(self, arch: Architecture) -> Path:
        """Build log for one architecture, e.g. ``build-arm64.log``."""
        return self.log_path_dir / BUILD_LOG_TEMPLATE.format(arch=arch.value)

    def cache_key(self, arch: Architecture, os_name: str) -> str:
        """Key under which CI caches the installed OpenZFS prefix."""
        return CACHE_KEY_TEMPLATE.format(version=self.openzfs_version, arch=arch.value, os=os_name)


# 🧊🔨🔚
