#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for zetabuild.zfs.locator and the library table."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from zetabuild.zfs.libraries import PRIMARY_LIBRARY, REQUIRED_LIBRARIES
from zetabuild.zfs.locator import LocatorResult, locate_libraries


class TestLibraries:
    """Test library naming."""

    def test_required_libraries(self) -> None:
        assert [lib.versioned for lib in REQUIRED_LIBRARIES] == [
            "libzfs.6.dylib",
            "libzpool.6.dylib",
            "libzfs_core.3.dylib",
            "libnvpair.3.dylib",
        ]
        assert REQUIRED_LIBRARIES[0] is PRIMARY_LIBRARY

    def test_present_in_accepts_either_name(self, tmp_path: Path) -> None:
        assert not PRIMARY_LIBRARY.present_in(tmp_path)
        (tmp_path / "libzfs.6.dylib").touch()
        assert PRIMARY_LIBRARY.present_in(tmp_path)


class TestLocateLibraries:
    """Test the search over candidate directories."""

    def test_absent_everywhere(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()

        result = locate_libraries([empty, tmp_path / "does-not-exist"])

        assert result == LocatorResult()
        assert not result.found
        assert not result.complete

    def test_no_candidates(self) -> None:
        assert not locate_libraries([]).found

    def test_first_directory_with_primary_wins(
        self, tmp_path: Path, make_libs: Callable[..., Path]
    ) -> None:
        first = make_libs(tmp_path / "first")
        make_libs(tmp_path / "second")

        result = locate_libraries([tmp_path / "missing", first, tmp_path / "second"])

        assert result.directory == first
        assert result.complete

    def test_versioned_names_accepted(self, tmp_path: Path, make_libs: Callable[..., Path]) -> None:
        lib_dir = make_libs(
            tmp_path / "lib",
            ["libzfs.6.dylib", "libzpool.6.dylib", "libzfs_core.3.dylib", "libnvpair.3.dylib"],
        )

        result = locate_libraries([lib_dir])

        assert result.complete

    def test_partial_install_not_searched_elsewhere(
        self, tmp_path: Path, make_libs: Callable[..., Path]
    ) -> None:
        partial = make_libs(tmp_path / "partial", ["libzfs.dylib", "libnvpair.dylib"])
        make_libs(tmp_path / "complete")

        result = locate_libraries([partial, tmp_path / "complete"])

        assert result.directory == partial
        assert result.found
        assert not result.complete
        assert [lib.stem for lib in result.missing] == ["libzpool", "libzfs_core"]

    def test_directory_without_primary_skipped(
        self, tmp_path: Path, make_libs: Callable[..., Path]
    ) -> None:
        no_primary = make_libs(tmp_path / "no-primary", ["libzpool.dylib", "libnvpair.dylib"])
        complete = make_libs(tmp_path / "complete")

        assert locate_libraries([no_primary, complete]).directory == complete


# 🧊🔨🔚
