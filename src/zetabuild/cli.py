#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""zetabuild command-line interface entrypoint."""

from __future__ import annotations

from attrs import evolve
import click
from provide.foundation import CLIContext, TelemetryConfig, get_hub
from provide.foundation.utils import get_version

from zetabuild.commands.build import build_command
from zetabuild.commands.release import release_command
from zetabuild.commands.zfs import zfs_group
from zetabuild.config import ZetaBuildRuntimeConfig

__version__ = get_version("zetabuild", caller_file=__file__)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="zetabuild",
    message="%(prog)s version %(version)s",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Build tooling for ZetaWatch and its OpenZFS dependency.

    Configure logging via environment variables:
    - ZETABUILD_LOG_LEVEL: Set log level for zetabuild (trace, debug, info, warning, error)
    - ZETABUILD_SETUP_LOG_LEVEL: Control Foundation's initialization logs
    - PROVIDE_LOG_FILE: Write logs to file

    Build settings are read from ZETABUILD_* variables (project, scheme,
    OpenZFS version and prefix, install strategy, sudo use, make jobs).
    """
    ctx.ensure_object(dict)

    runtime_config = ZetaBuildRuntimeConfig.from_env()
    cli_ctx = CLIContext.from_env()
    base_telemetry = TelemetryConfig.from_env()

    telemetry_config = evolve(
        base_telemetry,
        service_name="zetabuild",
        logging=evolve(
            base_telemetry.logging,
            default_level=runtime_config.log_level,  # type: ignore[arg-type]
        ),
    )

    hub = get_hub()
    hub.initialize_foundation(telemetry_config)

    ctx.obj["cli_context"] = cli_ctx
    ctx.obj["log"] = cli_ctx.logger


cli.add_command(build_command, name="build")
cli.add_command(release_command, name="release")
cli.add_command(zfs_group, name="zfs")

main = cli

if __name__ == "__main__":
    cli()

# 🧊🔨🔚
