#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Resolution of the OpenZFS dependency as a small state machine.

    UNRESOLVED -> INSTALLING -> INSTALLED -> ALIASED
         |             |            |
         +-------------+------------+--> FAILED

An already complete installation goes straight from UNRESOLVED to INSTALLED.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from provide.foundation import logger

from zetabuild.exceptions import DependencyError, ZetaBuildError
from zetabuild.zfs.installers import DependencyInstaller, get_installer
from zetabuild.zfs.locator import LocatorResult, locate_libraries
from zetabuild.zfs.shim import create_alias_links

if TYPE_CHECKING:
    from zetabuild.arch import Architecture
    from zetabuild.config import BuildConfig
    from zetabuild.host import HostEnvironment


class ResolutionState(Enum):
    UNRESOLVED = "unresolved"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ALIASED = "aliased"
    FAILED = "failed"


TRANSITIONS: dict[ResolutionState, frozenset[ResolutionState]] = {
    ResolutionState.UNRESOLVED: frozenset(
        {ResolutionState.INSTALLING, ResolutionState.INSTALLED, ResolutionState.FAILED}
    ),
    ResolutionState.INSTALLING: frozenset({ResolutionState.INSTALLED, ResolutionState.FAILED}),
    ResolutionState.INSTALLED: frozenset({ResolutionState.ALIASED, ResolutionState.FAILED}),
    ResolutionState.ALIASED: frozenset(),
    ResolutionState.FAILED: frozenset(),
}


class DependencyResolver:
    """Drives locate -> install -> re-locate -> alias for OpenZFS."""

    def __init__(
        self,
        config: BuildConfig,
        host: HostEnvironment,
        installer: DependencyInstaller | None = None,
    ) -> None:
        self.config = config
        self.host = host
        self.installer = installer or get_installer(config, host)
        self.state = ResolutionState.UNRESOLVED
        self.history: list[ResolutionState] = [self.state]

    def advance(self, target: ResolutionState) -> None:
        """Move to ``target``, rejecting transitions the pipeline does not allow."""
        if target not in TRANSITIONS[self.state]:
            raise DependencyError(
                f"Invalid resolution transition {self.state.value} -> {target.value}"
            )
        logger.trace("OpenZFS resolution transition", source=self.state.value, target=target.value)
        self.state = target
        self.history.append(target)

    def check(self) -> LocatorResult:
        """Locate the libraries without changing anything."""
        return locate_libraries(self.config.library_search_paths())

    def resolve(self, arch: Architecture, install: bool = False, reinstall: bool = False) -> LocatorResult:
        """Resolve the dependency for ``arch``.

        Without ``install`` an absent or partial installation is only
        reported: the resolver stays UNRESOLVED and the caller decides
        whether to offer the installer. With ``reinstall`` the installer
        runs even when a complete installation is already present.

        Raises:
            ZetaBuildError: If installing or aliasing fails (state becomes FAILED)
        """
        result = self.check()

        if reinstall or not result.complete:
            if not (install or reinstall):
                return result
            result = self._install(arch)

        self.advance(ResolutionState.INSTALLED)
        assert result.directory is not None
        try:
            create_alias_links(result.directory, use_sudo=self.config.use_sudo)
        except ZetaBuildError:
            self.advance(ResolutionState.FAILED)
            raise
        self.advance(ResolutionState.ALIASED)
        return self.check()

    def _install(self, arch: Architecture) -> LocatorResult:
        self.advance(ResolutionState.INSTALLING)
        try:
            self.installer.install(arch)
        except (ZetaBuildError, KeyboardInterrupt, SystemExit):
            self.advance(ResolutionState.FAILED)
            raise

        # Re-locate: the installer may have placed the libraries in any search path
        result = self.check()
        if not result.found:
            self.advance(ResolutionState.FAILED)
            raise DependencyError(
                f"OpenZFS was installed with the {self.installer.name} strategy "
                "but libzfs was not found in any search path"
            )
        if result.missing:
            self.advance(ResolutionState.FAILED)
            names = ", ".join(lib.versioned for lib in result.missing)
            raise DependencyError(f"Partial OpenZFS installation in {result.directory}, missing: {names}")
        return result


# 🧊🔨🔚
