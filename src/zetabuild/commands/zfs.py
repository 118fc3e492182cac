#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""OpenZFS dependency commands for the zetabuild CLI."""

from __future__ import annotations

import click
from provide.foundation import logger
from provide.foundation.console import perr, pout
from provide.foundation.platform import get_os_name

from zetabuild.arch import Architecture
from zetabuild.commands.common import abort_with, load_environment, show_libraries, show_missing
from zetabuild.config.defaults import INSTALL_STRATEGIES
from zetabuild.exceptions import ZetaBuildError
from zetabuild.zfs.installers import get_installer
from zetabuild.zfs.resolution import DependencyResolver
from zetabuild.zfs.shim import create_alias_links

ARCH_CHOICE = click.Choice([arch.value for arch in Architecture])


@click.group("zfs")
def zfs_group() -> None:
    """Locate, install and alias the OpenZFS libraries."""
    pass


@zfs_group.command("install")
@click.argument("architecture", required=False, type=ARCH_CHOICE)
@click.option(
    "--strategy",
    type=click.Choice(INSTALL_STRATEGIES, case_sensitive=False),
    default=None,
    help="Build the pinned release from source, or install the package manager cask",
)
@click.option("--prefix", default=None, help="Install prefix (default: /usr/local/zfs)")
def zfs_install(architecture: str | None, strategy: str | None, prefix: str | None) -> None:
    """Install OpenZFS for ARCHITECTURE (x86_64 or arm64, default: this machine)."""
    config, host = load_environment(install_strategy=strategy, zfs_prefix=prefix)
    arch = Architecture.parse(architecture) if architecture else host.architecture

    pout(f"ℹ️  Installing OpenZFS {config.openzfs_version} for {arch.value}")
    pout(f"ℹ️  Installation prefix: {config.zfs_prefix}")

    resolver = DependencyResolver(config, host, get_installer(config, host))
    try:
        result = resolver.resolve(arch, reinstall=True)
    except ZetaBuildError as e:
        abort_with(e)

    pout(f"✅ OpenZFS {config.openzfs_version} installation completed!")
    pout(f"ℹ️  Libraries installed in: {result.directory}")
    pout(f"ℹ️  Headers installed in: {config.zfs_prefix_path / 'include'}")
    logger.info("OpenZFS resolved", state=resolver.state.value, directory=str(result.directory))


@zfs_group.command("check")
def zfs_check() -> None:
    """Report whether the OpenZFS libraries are installed."""
    config, host = load_environment()
    result = DependencyResolver(config, host).check()

    if not result.found:
        searched = ", ".join(str(p) for p in config.library_search_paths())
        perr(f"⚠️  ZFS not found (searched: {searched})")
        pout("Install it with: zetabuild zfs install")
        raise click.exceptions.Exit(1)

    if result.missing:
        show_missing(result)
        raise click.exceptions.Exit(1)

    pout("✅ All ZFS libraries found")
    show_libraries(result)


@zfs_group.command("link")
def zfs_link() -> None:
    """Create the versioned library aliases ZetaWatch expects."""
    config, host = load_environment()
    result = DependencyResolver(config, host).check()
    if not result.found:
        perr("❌ ZFS not found, nothing to link")
        raise click.exceptions.Exit(1)

    assert result.directory is not None
    try:
        created = create_alias_links(result.directory, use_sudo=config.use_sudo)
    except ZetaBuildError as e:
        abort_with(e)

    if created:
        pout(f"✅ Created {len(created)} library link(s):")
        for alias in created:
            pout(f"  • {alias.name}")
    else:
        pout("Library links already present")


@zfs_group.command("cache-key")
@click.argument("architecture", required=False, type=ARCH_CHOICE)
def zfs_cache_key(architecture: str | None) -> None:
    """Print the CI cache key for the installed OpenZFS prefix."""
    config, host = load_environment()
    arch = Architecture.parse(architecture) if architecture else host.architecture
    pout(config.cache_key(arch, get_os_name()))


# 🧊🔨🔚
