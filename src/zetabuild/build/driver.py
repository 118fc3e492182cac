#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Per-architecture xcodebuild driver.

Each requested architecture is cleaned, built unsigned as a single-arch
slice, located in the build tree and packaged into ``dist/``. A failing
architecture is recorded and the remaining ones are still attempted.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
import shutil
from typing import TYPE_CHECKING

from attrs import define, field
from provide.foundation import logger
from provide.foundation.errors import ProcessError
from provide.foundation.file.directory import ensure_dir, safe_rmtree
from provide.foundation.process import run

from zetabuild.build.packaging import archive_name, artifact_stem, zip_bundle
from zetabuild.exceptions import COMMAND_NOT_FOUND, BuildError, MissingToolError, PackagingError

if TYPE_CHECKING:
    from provide.foundation.process import CompletedProcess

    from zetabuild.arch import Architecture
    from zetabuild.config import BuildConfig
    from zetabuild.host import HostEnvironment


@define
class BuildResult:
    """Outcome of building one architecture."""

    arch: Architecture
    log_path: Path
    bundle: Path | None = None
    archive: Path | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.archive is not None


@define
class BuildReport:
    """Outcome of a whole build run."""

    results: list[BuildResult] = field(factory=list)

    @property
    def failed(self) -> list[str]:
        """Labels of the architectures that failed."""
        return [r.arch.label for r in self.results if not r.succeeded]

    @property
    def succeeded(self) -> bool:
        return bool(self.results) and not self.failed


class XcodeBuildDriver:
    """Builds the ZetaWatch app once per architecture with xcodebuild."""

    def __init__(self, config: BuildConfig, host: HostEnvironment) -> None:
        self.config = config
        self.host = host

    def ensure_project(self) -> None:
        """Fail early when not run from the project root."""
        if not self.config.project_path.exists():
            raise MissingToolError(
                f"{self.config.project} not found in {Path(self.config.project_root).resolve()}; "
                "run from the project root"
            )

    def clean_outputs(self) -> None:
        """Remove the build tree, dist directory and old build logs."""
        for directory in (self.config.build_path, self.config.dist_path):
            if directory.exists():
                safe_rmtree(directory)
        log_dir = self.config.log_path_dir
        if log_dir.is_dir():
            for log_file in log_dir.glob("*.log"):
                log_file.unlink()

    def xcodebuild_args(self, action: str, arch: Architecture | None = None) -> list[str]:
        cmd = [
            "xcodebuild",
            action,
            "-project",
            str(self.config.project_path),
            "-scheme",
            self.config.scheme,
            "-configuration",
            self.config.configuration,
        ]
        if arch is None:
            return [*cmd, "-quiet"]
        return [
            *cmd,
            "-arch",
            arch.value,
            "ONLY_ACTIVE_ARCH=NO",
            "CODE_SIGN_IDENTITY=",
            "CODE_SIGNING_REQUIRED=NO",
            f"SYMROOT={self.config.build_path.resolve()}",
        ]

    def build(self, targets: Iterable[Architecture]) -> BuildReport:
        """Build every target in order, never stopping at a failure."""
        report = BuildReport()
        for arch in targets:
            report.results.append(self.build_arch(arch))
        return report

    def build_arch(self, arch: Architecture) -> BuildResult:
        """Clean, build and package one architecture."""
        log_path = self.config.log_path(arch)
        result = BuildResult(arch=arch, log_path=log_path)
        logger.info("Building", product=self.config.product_name, arch=arch.value, label=arch.label)

        try:
            self._compile(arch, log_path)
            result.bundle = self.find_bundle()
            if result.bundle is None:
                raise BuildError(f"{self.config.product_name}.app not produced for {arch.label}")
            result.archive = self.package(result.bundle, arch)
        except (BuildError, PackagingError) as e:
            logger.error("Build failed", arch=arch.value, error=str(e), log=str(log_path))
            result.error = str(e)
            return result

        logger.info("Build completed", arch=arch.value, archive=str(result.archive))
        return result

    def _xcodebuild(self, cmd: list[str], arch: Architecture) -> CompletedProcess[str]:
        try:
            return run(cmd, check=False, capture_output=True)
        except (ProcessError, OSError) as e:
            raise BuildError(
                f"Cannot run xcodebuild for {arch.label}: {e}",
                returncode=getattr(e, "returncode", None) or COMMAND_NOT_FOUND,
            ) from e

    def _compile(self, arch: Architecture, log_path: Path) -> None:
        clean = self._xcodebuild(self.xcodebuild_args("clean"), arch)
        if clean.returncode != 0:
            logger.warning("xcodebuild clean failed", arch=arch.value, returncode=clean.returncode)
        # A bundle left by the previous architecture must not be mistaken for this one
        if self.config.build_path.exists():
            safe_rmtree(self.config.build_path)

        build = self._xcodebuild(self.xcodebuild_args("build", arch), arch)
        ensure_dir(log_path.parent)
        log_path.write_text((build.stdout or "") + (build.stderr or ""))
        if build.returncode != 0:
            raise BuildError(
                f"xcodebuild exited with status {build.returncode} for {arch.label}",
                returncode=build.returncode,
            )

    def find_bundle(self) -> Path | None:
        """First ``<Product>.app`` directory found in the build tree."""
        build_path = self.config.build_path
        if not build_path.is_dir():
            return None
        bundles = sorted(p for p in build_path.rglob(f"{self.config.product_name}.app") if p.is_dir())
        return bundles[0] if bundles else None

    def package(self, bundle: Path, arch: Architecture) -> Path:
        """Copy the bundle into dist under an architecture name and zip it."""
        dist = self.config.dist_path
        ensure_dir(dist)
        stem = artifact_stem(self.config.product_name, arch)
        copied = dist / f"{stem}.app"
        if copied.exists():
            safe_rmtree(copied)
        try:
            shutil.copytree(bundle, copied, symlinks=True)
        except OSError as e:
            raise PackagingError(f"Cannot copy {bundle} to {copied}: {e}") from e
        return zip_bundle(copied, dist / archive_name(self.config.product_name, arch))

    def binary_path(self, arch: Architecture) -> Path:
        """Main executable inside the copied bundle."""
        stem = artifact_stem(self.config.product_name, arch)
        return self.config.dist_path / f"{stem}.app" / "Contents" / "MacOS" / self.config.product_name


# 🧊🔨🔚
