#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared plumbing for zetabuild commands."""

from __future__ import annotations

from typing import NoReturn

import click
from attrs import evolve
from provide.foundation import logger
from provide.foundation.console import perr, pout

from zetabuild.config import BuildConfig, get_build_config
from zetabuild.exceptions import ZetaBuildError
from zetabuild.host import HostEnvironment
from zetabuild.utils import describe_binary
from zetabuild.zfs.locator import LocatorResult


def load_environment(**overrides: object) -> tuple[BuildConfig, HostEnvironment]:
    """Active configuration (with CLI overrides applied) and a fresh host probe."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    try:
        config = get_build_config()
        if changes:
            config = evolve(config, **changes)
    except ZetaBuildError as e:
        abort_with(e)
    return config, HostEnvironment.probe(config)


def abort_with(error: ZetaBuildError) -> NoReturn:
    """Report a fatal error and exit with its status."""
    logger.error("Command failed", error=str(error), returncode=error.returncode)
    perr(f"❌ {error}")
    raise click.exceptions.Exit(error.returncode)


def show_libraries(result: LocatorResult) -> None:
    """Print where the libraries are and what ``file`` says about each."""
    assert result.directory is not None
    pout(f"ℹ️  OpenZFS libraries in {result.directory}")
    for path in sorted(result.directory.glob("lib*.dylib")):
        description = describe_binary(path)
        pout(f"  {path.name}: {description}" if description else f"  {path.name}")


def show_missing(result: LocatorResult) -> None:
    perr("❌ Missing ZFS libraries:")
    for library in result.missing:
        perr(f"  - {library.versioned}")


# 🧊🔨🔚
