#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Zip archives and checksums for built app bundles."""

from __future__ import annotations

from collections.abc import Iterable
import hashlib
import os
from pathlib import Path
import stat
from typing import TYPE_CHECKING
import zipfile

from provide.foundation import logger
from provide.foundation.file import safe_copy
from provide.foundation.file.directory import ensure_parent_dir

from zetabuild.config.defaults import CHECKSUM_SUFFIX
from zetabuild.exceptions import PackagingError

if TYPE_CHECKING:
    from zetabuild.arch import Architecture

_CHUNK_SIZE = 1024 * 1024


def artifact_stem(product: str, arch: Architecture, version: str | None = None) -> str:
    """``ZetaWatch-Intel`` or, for releases, ``ZetaWatch-1.2.0-Intel``."""
    if version:
        return f"{product}-{version}-{arch.label}"
    return f"{product}-{arch.label}"


def archive_name(product: str, arch: Architecture, version: str | None = None) -> str:
    return f"{artifact_stem(product, arch, version)}.zip"


def zip_bundle(bundle: Path, archive: Path) -> Path:
    """Compress ``bundle`` into ``archive`` with the bundle directory as root entry.

    Symlinks inside the bundle (framework ``Versions/Current`` and friends)
    are stored as links, not followed.
    """
    if not bundle.is_dir():
        raise PackagingError(f"Bundle not found: {bundle}")

    ensure_parent_dir(archive)
    root = bundle.parent
    try:
        with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.write(bundle, bundle.name)
            for dirpath, dirnames, filenames in os.walk(bundle):
                current = Path(dirpath)
                for name in sorted(dirnames):
                    path = current / name
                    if path.is_symlink():
                        _write_symlink(zf, path, root)
                    else:
                        zf.write(path, path.relative_to(root).as_posix())
                for name in sorted(filenames):
                    path = current / name
                    if path.is_symlink():
                        _write_symlink(zf, path, root)
                    else:
                        zf.write(path, path.relative_to(root).as_posix())
    except OSError as e:
        raise PackagingError(f"Cannot create {archive}: {e}") from e

    logger.debug("Created archive", archive=str(archive), size=archive.stat().st_size)
    return archive


def _write_symlink(zf: zipfile.ZipFile, path: Path, root: Path) -> None:
    info = zipfile.ZipInfo(path.relative_to(root).as_posix())
    info.create_system = 3  # Unix, so external_attr carries the mode
    info.external_attr = (stat.S_IFLNK | 0o755) << 16
    zf.writestr(info, os.readlink(path))


def sha256sum(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def write_checksum(path: Path) -> Path:
    """Write ``<path>.sha256`` in ``shasum -a 256`` format."""
    checksum_path = path.with_name(path.name + CHECKSUM_SUFFIX)
    checksum_path.write_text(f"{sha256sum(path)}  {path.name}\n")
    return checksum_path


def release_artifacts(
    dist_dir: Path,
    product: str,
    version: str,
    archs: Iterable[Architecture],
) -> list[Path]:
    """Copy each architecture archive to its versioned name and checksum it.

    Returns:
        The versioned archives followed by their checksum files, per architecture

    Raises:
        PackagingError: If an architecture archive has not been built
    """
    created: list[Path] = []
    for arch in archs:
        source = dist_dir / archive_name(product, arch)
        if not source.exists():
            raise PackagingError(f"No build artifact for {arch.label}: {source} not found")

        target = dist_dir / archive_name(product, arch, version)
        safe_copy(source, target, overwrite=True)
        checksum = write_checksum(target)
        logger.info("Prepared release artifact", archive=target.name, checksum=checksum.name)
        created.extend([target, checksum])
    return created


# 🧊🔨🔚
