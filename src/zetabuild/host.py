#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Snapshot of the host machine's capabilities."""

from __future__ import annotations

import os
import shutil
from typing import TYPE_CHECKING

from attrs import frozen

from zetabuild.arch import Architecture, detect_host_architecture

if TYPE_CHECKING:
    from zetabuild.config import BuildConfig


@frozen
class HostEnvironment:
    """What the build host offers, probed once and passed around explicitly."""

    architecture: Architecture
    package_manager: str | None = None  # Resolved executable path
    logical_cpus: int = 1

    @property
    def package_manager_available(self) -> bool:
        return self.package_manager is not None

    @classmethod
    def probe(cls, config: BuildConfig) -> HostEnvironment:
        """Inspect the running machine."""
        return cls(
            architecture=detect_host_architecture(),
            package_manager=shutil.which(config.package_manager),
            logical_cpus=os.cpu_count() or 1,
        )


# 🧊🔨🔚
