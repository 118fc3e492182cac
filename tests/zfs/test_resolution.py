#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for the OpenZFS resolution state machine."""

from __future__ import annotations

from collections.abc import Callable
import os
from pathlib import Path
from unittest.mock import Mock, patch

from provide.foundation.errors import ProcessError
import pytest

from zetabuild.arch import Architecture
from zetabuild.config import BuildConfig
from zetabuild.exceptions import DependencyError, InstallError
from zetabuild.host import HostEnvironment
from zetabuild.zfs.installers import DependencyInstaller, SourceInstaller
from zetabuild.zfs.resolution import DependencyResolver, ResolutionState

S = ResolutionState


class FakeInstaller(DependencyInstaller):
    """Installer writing library files instead of running a toolchain."""

    name = "fake"

    def __init__(
        self,
        config: BuildConfig,
        host: HostEnvironment,
        libraries: tuple[str, ...] = ("libzfs.dylib", "libzpool.dylib", "libzfs_core.dylib", "libnvpair.dylib"),
        error: BaseException | None = None,
    ) -> None:
        super().__init__(config, host)
        self.libraries = libraries
        self.error = error
        self.calls: list[Architecture] = []

    def install(self, arch: Architecture) -> Path:
        self.calls.append(arch)
        if self.error is not None:
            raise self.error
        lib_dir = self.config.zfs_lib_dir
        lib_dir.mkdir(parents=True, exist_ok=True)
        for name in self.libraries:
            (lib_dir / name).touch()
        return self.prefix


class TestResolve:
    """Test resolution outcomes."""

    def test_complete_install_goes_straight_to_aliased(
        self,
        build_config: BuildConfig,
        arm_host: HostEnvironment,
        make_libs: Callable[..., Path],
    ) -> None:
        make_libs(build_config.zfs_lib_dir)
        installer = FakeInstaller(build_config, arm_host)
        resolver = DependencyResolver(build_config, arm_host, installer)

        result = resolver.resolve(Architecture.ARM64, install=True)

        assert result.complete
        assert installer.calls == []
        assert resolver.history == [S.UNRESOLVED, S.INSTALLED, S.ALIASED]
        assert os.readlink(build_config.zfs_lib_dir / "libzfs.6.dylib") == "libzfs.dylib"

    def test_absent_without_install_never_installs(
        self, build_config: BuildConfig, arm_host: HostEnvironment
    ) -> None:
        installer = FakeInstaller(build_config, arm_host)
        resolver = DependencyResolver(build_config, arm_host, installer)

        result = resolver.resolve(Architecture.ARM64)

        assert not result.found
        assert installer.calls == []
        assert resolver.state is S.UNRESOLVED

    def test_partial_without_install_reports_missing(
        self,
        build_config: BuildConfig,
        arm_host: HostEnvironment,
        make_libs: Callable[..., Path],
    ) -> None:
        make_libs(build_config.zfs_lib_dir, ["libzfs.dylib"])
        resolver = DependencyResolver(build_config, arm_host, FakeInstaller(build_config, arm_host))

        result = resolver.resolve(Architecture.ARM64)

        assert result.found
        assert len(result.missing) == 3
        assert resolver.state is S.UNRESOLVED

    def test_install_then_alias(self, build_config: BuildConfig, arm_host: HostEnvironment) -> None:
        installer = FakeInstaller(build_config, arm_host)
        resolver = DependencyResolver(build_config, arm_host, installer)

        result = resolver.resolve(Architecture.X86_64, install=True)

        assert installer.calls == [Architecture.X86_64]
        assert result.complete
        assert result.directory == build_config.zfs_lib_dir
        assert resolver.history == [S.UNRESOLVED, S.INSTALLING, S.INSTALLED, S.ALIASED]
        assert (build_config.zfs_lib_dir / "libnvpair.3.dylib").is_symlink()

    def test_reinstall_runs_installer_over_complete_install(
        self,
        build_config: BuildConfig,
        arm_host: HostEnvironment,
        make_libs: Callable[..., Path],
    ) -> None:
        make_libs(build_config.zfs_lib_dir)
        installer = FakeInstaller(build_config, arm_host)
        resolver = DependencyResolver(build_config, arm_host, installer)

        result = resolver.resolve(Architecture.X86_64, reinstall=True)

        assert installer.calls == [Architecture.X86_64]
        assert result.complete
        assert resolver.history == [S.UNRESOLVED, S.INSTALLING, S.INSTALLED, S.ALIASED]

    @patch("zetabuild.zfs.installers.run")
    def test_unstartable_tool_marks_failed(
        self, mock_run: Mock, build_config: BuildConfig, arm_host: HostEnvironment
    ) -> None:
        mock_run.side_effect = ProcessError("Failed to execute command: ./autogen.sh")
        installer = SourceInstaller(build_config, arm_host)
        resolver = DependencyResolver(build_config, arm_host, installer)

        with (
            patch.object(installer, "fetch_source", side_effect=lambda work_dir: work_dir),
            pytest.raises(InstallError, match="Generating configure script failed"),
        ):
            resolver.resolve(Architecture.ARM64, install=True)
        assert resolver.history == [S.UNRESOLVED, S.INSTALLING, S.FAILED]

    def test_installer_failure(self, build_config: BuildConfig, arm_host: HostEnvironment) -> None:
        installer = FakeInstaller(build_config, arm_host, error=InstallError("make failed", returncode=2))
        resolver = DependencyResolver(build_config, arm_host, installer)

        with pytest.raises(InstallError, match="make failed"):
            resolver.resolve(Architecture.ARM64, install=True)
        assert resolver.history == [S.UNRESOLVED, S.INSTALLING, S.FAILED]

    def test_interrupt_marks_failed(self, build_config: BuildConfig, arm_host: HostEnvironment) -> None:
        installer = FakeInstaller(build_config, arm_host, error=KeyboardInterrupt())
        resolver = DependencyResolver(build_config, arm_host, installer)

        with pytest.raises(KeyboardInterrupt):
            resolver.resolve(Architecture.ARM64, install=True)
        assert resolver.state is S.FAILED

    def test_install_leaving_nothing(self, build_config: BuildConfig, arm_host: HostEnvironment) -> None:
        installer = FakeInstaller(build_config, arm_host, libraries=())
        resolver = DependencyResolver(build_config, arm_host, installer)

        with pytest.raises(DependencyError, match="not found in any search path"):
            resolver.resolve(Architecture.ARM64, install=True)
        assert resolver.state is S.FAILED

    def test_partial_install_fails(self, build_config: BuildConfig, arm_host: HostEnvironment) -> None:
        installer = FakeInstaller(build_config, arm_host, libraries=("libzfs.dylib", "libzpool.dylib"))
        resolver = DependencyResolver(build_config, arm_host, installer)

        with pytest.raises(DependencyError, match="missing: libzfs_core.3.dylib, libnvpair.3.dylib"):
            resolver.resolve(Architecture.ARM64, install=True)
        assert resolver.state is S.FAILED


class TestTransitions:
    """Test the transition table."""

    def test_invalid_transition(self, build_config: BuildConfig, arm_host: HostEnvironment) -> None:
        resolver = DependencyResolver(build_config, arm_host, FakeInstaller(build_config, arm_host))

        with pytest.raises(DependencyError, match="unresolved -> aliased"):
            resolver.advance(S.ALIASED)
        assert resolver.state is S.UNRESOLVED

    @pytest.mark.parametrize("terminal", [S.ALIASED, S.FAILED])
    def test_terminal_states(
        self, terminal: ResolutionState, build_config: BuildConfig, arm_host: HostEnvironment
    ) -> None:
        resolver = DependencyResolver(build_config, arm_host, FakeInstaller(build_config, arm_host))
        resolver.state = terminal

        for target in S:
            with pytest.raises(DependencyError):
                resolver.advance(target)

    def test_check_has_no_side_effects(
        self,
        build_config: BuildConfig,
        arm_host: HostEnvironment,
        make_libs: Callable[..., Path],
    ) -> None:
        make_libs(build_config.zfs_lib_dir)
        resolver = DependencyResolver(build_config, arm_host, FakeInstaller(build_config, arm_host))

        assert resolver.check().complete
        assert resolver.state is S.UNRESOLVED
        assert not (build_config.zfs_lib_dir / "libzfs.6.dylib").exists()


# 🧊🔨🔚
