#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Versioned alias links for the installed OpenZFS libraries.

Installers produce ``libzfs.dylib`` while ZetaWatch's loader asks for
``libzfs.6.dylib``. The shim bridges the two with relative symlinks.
"""

from __future__ import annotations

from pathlib import Path

from provide.foundation import logger
from provide.foundation.errors import ProcessError
from provide.foundation.process import run

from zetabuild.exceptions import COMMAND_NOT_FOUND, DependencyError
from zetabuild.zfs.libraries import REQUIRED_LIBRARIES, ZfsLibrary


def create_alias_links(
    lib_dir: Path,
    libraries: tuple[ZfsLibrary, ...] = REQUIRED_LIBRARIES,
    use_sudo: bool = False,
) -> list[Path]:
    """Create ``<stem>.<soversion>.dylib`` links next to the unversioned libraries.

    A link is only created when the unversioned file exists and nothing
    (file or link) is already at the alias path, so running twice is a no-op.

    Args:
        lib_dir: Directory holding the installed libraries
        libraries: Libraries to alias
        use_sudo: Create the links through ``sudo ln`` for system-owned prefixes

    Returns:
        Alias paths created by this call

    Raises:
        DependencyError: If a link cannot be created
    """
    created: list[Path] = []

    for library in libraries:
        target = lib_dir / library.unversioned
        alias = lib_dir / library.versioned

        if not target.exists():
            logger.debug("Skipping alias, library not installed", library=library.unversioned)
            continue
        if alias.exists() or alias.is_symlink():
            logger.debug("Alias already present", alias=alias.name)
            continue

        _link(target.name, alias, use_sudo)
        logger.info("Created library alias", alias=alias.name, target=target.name)
        created.append(alias)

    return created


def _link(target_name: str, alias: Path, use_sudo: bool) -> None:
    """Create a relative symlink ``alias -> target_name``."""
    if not use_sudo:
        try:
            alias.symlink_to(target_name)
        except OSError as e:
            raise DependencyError(f"Cannot create {alias}: {e}") from e
        return

    try:
        result = run(
            ["sudo", "ln", "-s", target_name, alias.name],
            cwd=alias.parent,
            check=False,
            capture_output=True,
        )
    except (ProcessError, OSError) as e:
        raise DependencyError(
            f"Cannot create {alias}: {e}",
            returncode=getattr(e, "returncode", None) or COMMAND_NOT_FOUND,
        ) from e
    if result.returncode != 0:
        raise DependencyError(
            f"Cannot create {alias}: {result.stderr.strip() if result.stderr else 'ln failed'}",
            returncode=result.returncode,
        )


# 🧊🔨🔚
