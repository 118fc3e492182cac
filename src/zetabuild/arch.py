#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Architecture tokens and build target selection."""

from __future__ import annotations

from enum import Enum

from provide.foundation.platform import get_arch_name

from zetabuild.exceptions import ArchitectureError


class Architecture(str, Enum):
    """The two CPU architectures a ZetaWatch build can target."""

    X86_64 = "x86_64"
    ARM64 = "arm64"

    @property
    def label(self) -> str:
        """Human readable label used in artifact names."""
        return _LABELS[self]

    @classmethod
    def parse(cls, token: str) -> Architecture:
        """Parse an architecture token, accepting common aliases.

        Raises:
            ArchitectureError: If the token names neither architecture
        """
        normalized = token.strip().lower()
        try:
            return _ALIASES[normalized]
        except KeyError:
            raise ArchitectureError(
                f"Unknown architecture '{token}' (expected x86_64 or arm64)"
            ) from None


_LABELS = {
    Architecture.X86_64: "Intel",
    Architecture.ARM64: "Apple-Silicon",
}

_ALIASES = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "intel": Architecture.X86_64,
    "arm64": Architecture.ARM64,
    "aarch64": Architecture.ARM64,
}

BUILD_SELECTORS = ("intel", "arm64", "both", "current")


def detect_host_architecture() -> Architecture:
    """Return the architecture of the running machine.

    Anything that is not arm64 is treated as x86_64.
    """
    if get_arch_name() == "arm64":
        return Architecture.ARM64
    return Architecture.X86_64


def resolve_build_targets(selector: str, host_arch: Architecture) -> list[Architecture]:
    """Turn a build selector into the ordered list of architectures to build.

    Args:
        selector: One of intel, arm64, both or current
        host_arch: Architecture used for the ``current`` selector

    Returns:
        Architectures to build, in build order

    Raises:
        ArchitectureError: If the selector is unknown
    """
    if selector == "intel":
        return [Architecture.X86_64]
    if selector == "arm64":
        return [Architecture.ARM64]
    if selector == "both":
        return [Architecture.X86_64, Architecture.ARM64]
    if selector == "current":
        return [host_arch]
    raise ArchitectureError(f"Unknown target: {selector}")


# 🧊🔨🔚
