#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Building and packaging the ZetaWatch app bundle."""

from zetabuild.build.driver import BuildReport, BuildResult, XcodeBuildDriver
from zetabuild.build.packaging import (
    archive_name,
    release_artifacts,
    sha256sum,
    write_checksum,
    zip_bundle,
)

__all__ = [
    "BuildReport",
    "BuildResult",
    "XcodeBuildDriver",
    "archive_name",
    "release_artifacts",
    "sha256sum",
    "write_checksum",
    "zip_bundle",
]

# 🧊🔨🔚
