#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Locate an existing OpenZFS installation."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from attrs import frozen
from provide.foundation import logger

from zetabuild.zfs.libraries import PRIMARY_LIBRARY, REQUIRED_LIBRARIES, ZfsLibrary


@frozen
class LocatorResult:
    """Outcome of a library search."""

    directory: Path | None = None
    missing: tuple[ZfsLibrary, ...] = ()

    @property
    def found(self) -> bool:
        return self.directory is not None

    @property
    def complete(self) -> bool:
        """Primary library found and nothing else missing next to it."""
        return self.found and not self.missing


def locate_libraries(
    search_paths: Iterable[Path],
    libraries: tuple[ZfsLibrary, ...] = REQUIRED_LIBRARIES,
) -> LocatorResult:
    """Find the directory holding the OpenZFS libraries.

    The first directory containing the primary library (under either name)
    is selected. The remaining libraries are only checked inside that
    directory; anything absent there is reported as missing rather than
    searched for elsewhere.

    Args:
        search_paths: Candidate directories, in priority order
        libraries: Libraries that must be present

    Returns:
        LocatorResult; ``directory`` is None when nothing was found
    """
    for candidate in search_paths:
        if not candidate.is_dir() or not PRIMARY_LIBRARY.present_in(candidate):
            logger.trace("No libzfs in candidate directory", directory=str(candidate))
            continue

        missing = tuple(lib for lib in libraries if not lib.present_in(candidate))
        logger.debug(
            "Located OpenZFS libraries",
            directory=str(candidate),
            missing=[lib.stem for lib in missing],
        )
        return LocatorResult(directory=candidate, missing=missing)

    logger.debug("OpenZFS libraries not found")
    return LocatorResult()


# 🧊🔨🔚
