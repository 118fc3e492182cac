#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for zetabuild.utils."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from zetabuild.utils import describe_binary


@patch("zetabuild.utils.run")
def test_describe_binary(mock_run: Mock, tmp_path: Path) -> None:
    mock_run.return_value = Mock(returncode=0, stdout="Mach-O 64-bit dynamically linked shared library arm64\n")

    assert describe_binary(tmp_path / "libzfs.dylib") == "Mach-O 64-bit dynamically linked shared library arm64"
    mock_run.assert_called_once_with(
        ["file", "-b", str(tmp_path / "libzfs.dylib")], check=False, capture_output=True
    )


@patch("zetabuild.utils.run")
def test_describe_binary_failure(mock_run: Mock, tmp_path: Path) -> None:
    mock_run.return_value = Mock(returncode=1, stdout="")
    assert describe_binary(tmp_path / "missing") is None

    mock_run.side_effect = FileNotFoundError("file")
    assert describe_binary(tmp_path / "missing") is None


# 🧊🔨🔚
