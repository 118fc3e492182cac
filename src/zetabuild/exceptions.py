#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Custom exceptions for zetabuild."""

from __future__ import annotations

from provide.foundation.errors import FoundationError

# Exit status reported when an external tool cannot be started
COMMAND_NOT_FOUND = 127


class ZetaBuildError(FoundationError):
    """Base exception for all zetabuild errors.

    ``returncode`` is the process exit status the CLI reports for this error.
    """

    def __init__(self, message: str, *, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


class ConfigurationError(ZetaBuildError):
    """Raised when a configuration value is invalid."""

    pass


class ArchitectureError(ZetaBuildError):
    """Raised for unknown architecture tokens or build selectors."""

    pass


class MissingToolError(ZetaBuildError):
    """Raised when a required tool or project file is not available."""

    pass


class InstallError(ZetaBuildError):
    """Raised when downloading, configuring, building or installing OpenZFS fails."""

    pass


class DependencyError(ZetaBuildError):
    """Raised when the OpenZFS libraries cannot be resolved."""

    pass


class BuildError(ZetaBuildError):
    """Raised for errors while building a single architecture."""

    pass


class PackagingError(ZetaBuildError):
    """Raised for errors while archiving or checksumming build artifacts."""

    pass


# 🧊🔨🔚
