#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Release packaging command for the zetabuild CLI."""

from __future__ import annotations

import click
from provide.foundation.console import pout

from zetabuild.arch import BUILD_SELECTORS, resolve_build_targets
from zetabuild.build.packaging import release_artifacts
from zetabuild.commands.common import abort_with, load_environment
from zetabuild.exceptions import ZetaBuildError


@click.command("release")
@click.argument("version")
@click.option(
    "--target",
    type=click.Choice(BUILD_SELECTORS, case_sensitive=False),
    default="both",
    help="Architectures whose archives are released (default: both)",
)
def release_command(version: str, target: str) -> None:
    """Create versioned archives and SHA-256 checksum files for VERSION."""
    config, host = load_environment()
    archs = resolve_build_targets(target.lower(), host.architecture)
    version = version.removeprefix("v")
    if not version:
        raise click.BadParameter("must not be empty", param_hint="VERSION")

    try:
        created = release_artifacts(config.dist_path, config.product_name, version, archs)
    except ZetaBuildError as e:
        abort_with(e)

    pout(f"✅ Release artifacts for {config.product_name} {version}:")
    for path in created:
        pout(f"  • {path.name}")


# 🧊🔨🔚
