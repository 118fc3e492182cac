#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""The OpenZFS libraries ZetaWatch links against."""

from __future__ import annotations

from pathlib import Path

from attrs import frozen


@frozen
class ZfsLibrary:
    """A dylib known under an unversioned and a versioned file name."""

    stem: str
    soversion: int
    role: str

    @property
    def unversioned(self) -> str:
        return f"{self.stem}.dylib"

    @property
    def versioned(self) -> str:
        """The name ZetaWatch's loader expects, e.g. ``libzfs.6.dylib``."""
        return f"{self.stem}.{self.soversion}.dylib"

    @property
    def names(self) -> tuple[str, str]:
        return (self.unversioned, self.versioned)

    def present_in(self, directory: Path) -> bool:
        """True if either naming form exists in ``directory``."""
        return any((directory / name).exists() for name in self.names)


PRIMARY_LIBRARY = ZfsLibrary("libzfs", 6, "filesystem management")

REQUIRED_LIBRARIES: tuple[ZfsLibrary, ...] = (
    PRIMARY_LIBRARY,
    ZfsLibrary("libzpool", 6, "pool management"),
    ZfsLibrary("libzfs_core", 3, "core operations"),
    ZfsLibrary("libnvpair", 3, "name-value pairs"),
)


# 🧊🔨🔚
