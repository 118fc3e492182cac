#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""OpenZFS install strategies.

Two interchangeable strategies put the OpenZFS userland libraries under the
configured prefix:

- ``source``: build a pinned release tarball with the upstream autotools flow
- ``cask``: install whatever the package manager currently ships
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
import signal
import tarfile
import tempfile
import threading
from typing import TYPE_CHECKING
from urllib.error import URLError
from urllib.request import urlretrieve

from provide.foundation import logger
from provide.foundation.errors import ProcessError
from provide.foundation.process import run

from zetabuild.config.defaults import (
    CONFIGURE_BASE_ARGS,
    OPENZFS_ARCHIVE_NAME,
    OPENZFS_SOURCE_DIR,
    PREFIX_SUBDIRS,
    STRATEGY_CASK,
    STRATEGY_SOURCE,
    TOOLCHAIN_FORMULAE,
)
from zetabuild.exceptions import COMMAND_NOT_FOUND, ConfigurationError, InstallError, MissingToolError
from zetabuild.zfs.libraries import PRIMARY_LIBRARY

if TYPE_CHECKING:
    from zetabuild.arch import Architecture
    from zetabuild.config import BuildConfig
    from zetabuild.host import HostEnvironment


@contextmanager
def _terminate_as_exit() -> Iterator[None]:
    """Raise SystemExit on SIGTERM so enclosing ``with`` blocks still clean up."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _raise_exit(signum: int, frame: object) -> None:
        raise SystemExit(128 + signum)

    previous = signal.signal(signal.SIGTERM, _raise_exit)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous if previous is not None else signal.SIG_DFL)


def build_configure_args(prefix: Path, arch: Architecture) -> list[str]:
    """Arguments for OpenZFS's ``./configure`` targeting a single architecture."""
    arch_flag = f"-arch {arch.value}"
    return [
        f"--prefix={prefix}",
        *CONFIGURE_BASE_ARGS,
        f"CFLAGS={arch_flag}",
        f"CXXFLAGS={arch_flag}",
        f"LDFLAGS={arch_flag}",
    ]


class DependencyInstaller(ABC):
    """Common interface of the install strategies."""

    name: str = ""

    def __init__(self, config: BuildConfig, host: HostEnvironment) -> None:
        self.config = config
        self.host = host

    @property
    def prefix(self) -> Path:
        return self.config.zfs_prefix_path

    @abstractmethod
    def install(self, arch: Architecture) -> Path:
        """Install OpenZFS for ``arch`` and return the install prefix."""

    def _run_step(self, cmd: Sequence[str], description: str, cwd: Path | None = None) -> None:
        """Run one external step, raising InstallError with its exit status on failure."""
        logger.debug("Running install step", step=description, command=" ".join(cmd))
        try:
            result = run(list(cmd), cwd=cwd, check=False, capture_output=False)
        except (ProcessError, OSError) as e:
            raise InstallError(
                f"{description} failed: {e}",
                returncode=getattr(e, "returncode", None) or COMMAND_NOT_FOUND,
            ) from e
        if result.returncode != 0:
            raise InstallError(
                f"{description} failed with exit status {result.returncode}",
                returncode=result.returncode,
            )

    def _privileged(self, cmd: Sequence[str]) -> list[str]:
        if self.config.use_sudo:
            return ["sudo", *cmd]
        return list(cmd)


class SourceInstaller(DependencyInstaller):
    """Build a pinned OpenZFS release from its source tarball."""

    name = STRATEGY_SOURCE

    @property
    def jobs(self) -> int:
        return self.config.build_jobs or self.host.logical_cpus

    def install(self, arch: Architecture) -> Path:
        logger.info(
            "Installing OpenZFS from source",
            version=self.config.openzfs_version,
            arch=arch.value,
            prefix=str(self.prefix),
        )

        # Removed on every exit path, including Ctrl-C and SIGTERM
        with _terminate_as_exit(), tempfile.TemporaryDirectory(prefix="openzfs-") as temp_dir:
            self.prepare_toolchain()
            source_dir = self.fetch_source(Path(temp_dir))
            self.configure(source_dir, arch)
            self.compile(source_dir)
            self.install_into_prefix(source_dir)

        self.verify()
        return self.prefix

    def prepare_toolchain(self) -> None:
        """Make sure autotools are available before running autogen."""
        if not self.host.package_manager_available:
            logger.warning("Package manager not available, ensure autotools are installed")
            return
        assert self.host.package_manager is not None
        self._run_step(
            [self.host.package_manager, "install", *TOOLCHAIN_FORMULAE],
            "Installing build tools",
        )

    def fetch_source(self, work_dir: Path) -> Path:
        """Download and unpack the release tarball into ``work_dir``."""
        version = self.config.openzfs_version
        url = self.config.tarball_url()
        archive = work_dir / OPENZFS_ARCHIVE_NAME.format(version=version)

        logger.info("Downloading OpenZFS", url=url)
        try:
            urlretrieve(url, archive)  # noqa: S310
        except (URLError, OSError) as e:
            raise InstallError(f"Download of {url} failed: {e}") from e

        try:
            with tarfile.open(archive, "r:gz") as tar:
                tar.extractall(work_dir, filter="data")
        except (tarfile.TarError, OSError) as e:
            raise InstallError(f"Cannot extract {archive.name}: {e}") from e

        source_dir = work_dir / OPENZFS_SOURCE_DIR.format(version=version)
        if not source_dir.is_dir():
            raise InstallError(f"Unexpected archive layout, {source_dir.name} not found")
        return source_dir

    def configure(self, source_dir: Path, arch: Architecture) -> None:
        self._run_step(["./autogen.sh"], "Generating configure script", cwd=source_dir)
        self._run_step(
            ["./configure", *build_configure_args(self.prefix, arch)],
            f"Configuring OpenZFS for {arch.value}",
            cwd=source_dir,
        )

    def compile(self, source_dir: Path) -> None:
        self._run_step(["make", f"-j{self.jobs}"], "Building OpenZFS", cwd=source_dir)

    def install_into_prefix(self, source_dir: Path) -> None:
        subdirs = [str(self.prefix / name) for name in PREFIX_SUBDIRS]
        self._run_step(self._privileged(["mkdir", "-p", *subdirs]), "Creating install prefix")
        self._run_step(self._privileged(["make", "install"]), "Installing OpenZFS", cwd=source_dir)

    def verify(self) -> None:
        library = self.config.zfs_lib_dir / PRIMARY_LIBRARY.unversioned
        if not library.exists():
            raise InstallError(f"OpenZFS installation failed, {library} is missing")
        logger.info("OpenZFS installed", library=str(library))


class CaskInstaller(DependencyInstaller):
    """Install the OpenZFS cask through the package manager."""

    name = STRATEGY_CASK

    def install(self, arch: Architecture) -> Path:
        if not self.host.package_manager_available:
            raise MissingToolError(
                f"{self.config.package_manager} is required to install the {self.config.cask_name} cask"
            )
        assert self.host.package_manager is not None

        # The package manager picks the right variant for the host
        logger.info("Installing OpenZFS cask", cask=self.config.cask_name, arch=arch.value)
        self._run_step([self.host.package_manager, "update"], "Updating package index")
        self._run_step(
            [self.host.package_manager, "install", "--cask", self.config.cask_name],
            f"Installing {self.config.cask_name} cask",
        )
        return self.prefix


_STRATEGIES: dict[str, type[DependencyInstaller]] = {
    STRATEGY_SOURCE: SourceInstaller,
    STRATEGY_CASK: CaskInstaller,
}


def get_installer(
    config: BuildConfig,
    host: HostEnvironment,
    strategy: str | None = None,
) -> DependencyInstaller:
    """Create the installer for ``strategy`` (default: the configured one)."""
    name = strategy or config.install_strategy
    try:
        installer_class = _STRATEGIES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown install strategy '{name}'") from None
    return installer_class(config, host)


# 🧊🔨🔚
