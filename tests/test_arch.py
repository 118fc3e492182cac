#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for architecture tokens and build target selection."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from zetabuild.arch import (
    BUILD_SELECTORS,
    Architecture,
    detect_host_architecture,
    resolve_build_targets,
)
from zetabuild.exceptions import ArchitectureError


class TestArchitecture:
    """Test the Architecture token."""

    def test_labels(self) -> None:
        assert Architecture.X86_64.label == "Intel"
        assert Architecture.ARM64.label == "Apple-Silicon"

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("x86_64", Architecture.X86_64),
            ("amd64", Architecture.X86_64),
            ("Intel", Architecture.X86_64),
            ("arm64", Architecture.ARM64),
            (" aarch64 ", Architecture.ARM64),
        ],
    )
    def test_parse_aliases(self, token: str, expected: Architecture) -> None:
        assert Architecture.parse(token) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(ArchitectureError, match="Unknown architecture 'ppc'"):
            Architecture.parse("ppc")


class TestDetectHostArchitecture:
    """Test host architecture detection."""

    @patch("zetabuild.arch.get_arch_name")
    def test_arm64_host(self, mock_arch: Mock) -> None:
        mock_arch.return_value = "arm64"
        assert detect_host_architecture() is Architecture.ARM64

    @patch("zetabuild.arch.get_arch_name")
    def test_anything_else_is_x86_64(self, mock_arch: Mock) -> None:
        mock_arch.return_value = "amd64"
        assert detect_host_architecture() is Architecture.X86_64


class TestResolveBuildTargets:
    """Test build selector resolution."""

    def test_selectors(self) -> None:
        assert BUILD_SELECTORS == ("intel", "arm64", "both", "current")

    def test_intel(self) -> None:
        assert resolve_build_targets("intel", Architecture.ARM64) == [Architecture.X86_64]

    def test_arm64(self) -> None:
        assert resolve_build_targets("arm64", Architecture.X86_64) == [Architecture.ARM64]

    @pytest.mark.parametrize("host", list(Architecture))
    def test_both_ignores_host(self, host: Architecture) -> None:
        assert resolve_build_targets("both", host) == [Architecture.X86_64, Architecture.ARM64]

    def test_current_on_arm64_host(self) -> None:
        assert resolve_build_targets("current", Architecture.ARM64) == [Architecture.ARM64]

    def test_current_on_intel_host(self) -> None:
        assert resolve_build_targets("current", Architecture.X86_64) == [Architecture.X86_64]

    def test_unknown_selector(self) -> None:
        with pytest.raises(ArchitectureError, match="Unknown target: universal"):
            resolve_build_targets("universal", Architecture.ARM64)


# 🧊🔨🔚
