#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest fixtures and helpers for zetabuild tests."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

import provide.testkit  # noqa: F401 - Installs setproctitle blocker early
from provide.testkit.logger import reset_foundation_setup_for_testing
import pytest

from zetabuild.arch import Architecture
from zetabuild.config import BuildConfig, reset_build_config
from zetabuild.host import HostEnvironment

ZFS_DYLIBS = ("libzfs.dylib", "libzpool.dylib", "libzfs_core.dylib", "libnvpair.dylib")


def _make_libs(directory: Path, names: Iterable[str] = ZFS_DYLIBS) -> Path:
    """Create empty library files in ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"\xcf\xfa\xed\xfe")
    return directory


@pytest.fixture(autouse=True)
def reset_foundation_logging() -> Iterator[None]:
    """Reset foundation logging state before each test to avoid conflicts."""
    reset_foundation_setup_for_testing()
    yield
    reset_foundation_setup_for_testing()


@pytest.fixture(autouse=True)
def reset_config() -> Iterator[None]:
    reset_build_config()
    yield
    reset_build_config()


@pytest.fixture
def build_config(tmp_path: Path) -> BuildConfig:
    """Configuration rooted in a temporary project without sudo or extra search paths."""
    project_root = tmp_path / "project"
    project_root.mkdir()
    return BuildConfig(
        project_root=str(project_root),
        zfs_prefix=str(tmp_path / "zfs"),
        zfs_search_paths=(),
        use_sudo=False,
    )


@pytest.fixture
def make_libs() -> Callable[..., Path]:
    """Factory creating empty OpenZFS dylibs in a directory."""
    return _make_libs


@pytest.fixture
def arm_host() -> HostEnvironment:
    return HostEnvironment(architecture=Architecture.ARM64, package_manager=None, logical_cpus=4)


@pytest.fixture
def brew_host() -> HostEnvironment:
    return HostEnvironment(
        architecture=Architecture.X86_64,
        package_manager="/usr/local/bin/brew",
        logical_cpus=8,
    )


# 🧊🔨🔚
