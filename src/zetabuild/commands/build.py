#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""The build command: resolve OpenZFS, then build each architecture."""

from __future__ import annotations

import click
from provide.foundation import logger
from provide.foundation.console import perr, pout
from provide.foundation.formatting import format_size

from zetabuild.arch import BUILD_SELECTORS, resolve_build_targets
from zetabuild.build.driver import BuildReport, BuildResult, XcodeBuildDriver
from zetabuild.commands.common import abort_with, load_environment, show_libraries, show_missing
from zetabuild.config import BuildConfig
from zetabuild.config.defaults import INSTALL_STRATEGIES
from zetabuild.exceptions import ZetaBuildError
from zetabuild.host import HostEnvironment
from zetabuild.utils import describe_binary
from zetabuild.zfs.installers import get_installer
from zetabuild.zfs.resolution import DependencyResolver


@click.command("build")
@click.argument(
    "target",
    default="current",
    type=click.Choice(BUILD_SELECTORS, case_sensitive=False),
)
@click.option(
    "--install-zfs/--no-install-zfs",
    default=None,
    help="Install OpenZFS when missing (default: ask)",
)
@click.option(
    "--strategy",
    type=click.Choice(INSTALL_STRATEGIES, case_sensitive=False),
    default=None,
    help="OpenZFS install strategy used when installing",
)
def build_command(target: str, install_zfs: bool | None, strategy: str | None) -> None:
    """Build ZetaWatch for TARGET.

    \b
    TARGET is one of:
      intel   - Build for Intel Macs (x86_64)
      arm64   - Build for Apple Silicon (arm64)
      both    - Build for both architectures
      current - Build for current system architecture (default)
    """
    config, host = load_environment(install_strategy=strategy)
    targets = resolve_build_targets(target.lower(), host.architecture)

    pout(f"ℹ️  {config.product_name} build")
    pout(f"ℹ️  Current system: {host.architecture.value}")

    driver = XcodeBuildDriver(config, host)
    try:
        driver.ensure_project()
    except ZetaBuildError as e:
        abort_with(e)

    driver.clean_outputs()

    # Missing libraries only warn: the build's own error is more specific
    if not ensure_zfs(config, host, install_zfs):
        perr("⚠️  ZFS check failed - build may fail")
    pout("")

    report = driver.build(targets)
    for result in report.results:
        if result.succeeded:
            _show_artifact(driver, result)

    pout("")
    _show_summary(config, report)


def ensure_zfs(config: BuildConfig, host: HostEnvironment, install: bool | None) -> bool:
    """Check OpenZFS and offer to install it when absent or incomplete.

    Returns:
        True when the libraries are available and aliased
    """
    pout("ℹ️  Checking ZFS dependencies...")
    resolver = DependencyResolver(config, host, get_installer(config, host))

    try:
        result = resolver.resolve(host.architecture)
    except ZetaBuildError as e:
        perr(f"❌ {e}")
        return False

    if result.complete:
        pout("✅ All ZFS libraries found")
        show_libraries(result)
        return True

    if result.found:
        show_missing(result)
        question = "Would you like to (re)install OpenZFS to fix missing libraries?"
    else:
        perr(f"⚠️  ZFS not found at {config.zfs_lib_dir}")
        question = "Would you like to install OpenZFS automatically?"

    if install is None:
        try:
            install = click.confirm(question, default=False)
        except click.Abort:
            # No answer on a closed or non-interactive stdin counts as no
            perr("")
            install = False
    if not install:
        perr("⚠️  Skipping ZFS installation - build may fail")
        return False

    pout("ℹ️  Installing OpenZFS...")
    try:
        resolver.resolve(host.architecture, install=True)
    except ZetaBuildError as e:
        perr(f"❌ {e}")
        return False
    pout("✅ OpenZFS installed")
    return True


def _show_artifact(driver: XcodeBuildDriver, result: BuildResult) -> None:
    pout(f"✅ Build completed for {result.arch.label}")
    description = describe_binary(driver.binary_path(result.arch))
    if description:
        pout(f"  Binary: {description}")
    if result.archive is not None and result.archive.exists():
        pout(f"  Size: {format_size(result.archive.stat().st_size)}")


def _show_summary(config: BuildConfig, report: BuildReport) -> None:
    if report.succeeded:
        pout("✅ All builds completed successfully!")
        if config.dist_path.is_dir():
            pout("")
            pout("ℹ️  Build artifacts:")
            for artifact in sorted(config.dist_path.iterdir()):
                pout(f"  {artifact.name}")
            pout("")
            pout("ℹ️  To test the build:")
            pout(f"  open {config.dist_dir}/{config.product_name}-*.app")
        return

    logger.error("Builds failed", failed=report.failed)
    perr("❌ Some builds failed:")
    for label in report.failed:
        perr(f"  - {label}")
    pout("")
    pout("ℹ️  Check build logs for details:")
    for result in report.results:
        if not result.succeeded:
            pout(f"  {result.log_path}")
    raise click.exceptions.Exit(1)


# 🧊🔨🔚
