"""Tests for locating source files inside archives."""

import zipfile
from collections.abc import Callable
from pathlib import Path

from java_info.archive import (
    class_to_path,
    decode_source,
    find_entry,
    read_entry,
    simple_name,
)

ArchiveBuilder = Callable[[Path, dict[str, bytes | str]], Path]


class TestClassToPath:
    """Tests for class_to_path() and simple_name()."""

    def test_top_level_class(self) -> None:
        """Test mapping a top-level class to its source file."""
        assert class_to_path("java.util.ArrayList") == "java/util/ArrayList.java"

    def test_nested_class_maps_to_outer_compilation_unit(self) -> None:
        """Test that Outer$Inner lives in Outer.java."""
        assert class_to_path("java.util.Map$Entry") == "java/util/Map.java"
        assert class_to_path("a.Outer$Middle$Inner") == "a/Outer.java"

    def test_default_package(self) -> None:
        """Test a class without a package."""
        assert class_to_path("Main") == "Main.java"

    def test_simple_name(self) -> None:
        """Test the innermost simple name."""
        assert simple_name("java.util.Map$Entry") == "Entry"
        assert simple_name("java.util.List") == "List"


class TestFindEntry:
    """Tests for find_entry()."""

    def test_exact_path(self, tmp_path: Path, make_archive: ArchiveBuilder) -> None:
        """Test the plain package layout of -sources jars."""
        archive = make_archive(tmp_path / "s.jar", {"a/b/C.java": "class C {}"})

        with zipfile.ZipFile(archive) as zf:
            entry = find_entry(zf, "a/b/C.java")

        assert entry is not None
        assert entry.filename == "a/b/C.java"

    def test_primary_module_prefix(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test the modular src.zip layout."""
        archive = make_archive(
            tmp_path / "src.zip",
            {
                "java.sql/java/sql/Date.java": "",
                "java.base/java/util/List.java": "",
            },
        )

        with zipfile.ZipFile(archive) as zf:
            entry = find_entry(zf, "java/util/List.java")

        assert entry is not None
        assert entry.filename == "java.base/java/util/List.java"

    def test_suffix_fallback_for_other_modules(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test that any prefix is accepted as a last resort."""
        archive = make_archive(
            tmp_path / "src.zip", {"java.sql/java/sql/Date.java": ""}
        )

        with zipfile.ZipFile(archive) as zf:
            entry = find_entry(zf, "java/sql/Date.java")

        assert entry is not None
        assert entry.filename == "java.sql/java/sql/Date.java"

    def test_exact_match_wins_over_suffix_match(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test that the exact path beats an earlier suffix match."""
        archive = make_archive(
            tmp_path / "s.jar",
            {"shaded/a/b/C.java": "shaded", "a/b/C.java": "real"},
        )

        with zipfile.ZipFile(archive) as zf:
            entry = find_entry(zf, "a/b/C.java")
            assert entry is not None
            assert read_entry(zf, entry) == b"real"

    def test_suffix_requires_path_boundary(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test that XC.java does not satisfy a search for C.java."""
        archive = make_archive(tmp_path / "s.jar", {"x/a/b/XC.java": ""})

        with zipfile.ZipFile(archive) as zf:
            assert find_entry(zf, "b/C.java") is None

    def test_missing_entry(self, tmp_path: Path, make_archive: ArchiveBuilder) -> None:
        """Test that an absent file yields None."""
        archive = make_archive(tmp_path / "s.jar", {"a/Other.java": ""})

        with zipfile.ZipFile(archive) as zf:
            assert find_entry(zf, "a/b/C.java") is None


class TestDecodeSource:
    """Tests for decode_source()."""

    def test_invalid_bytes_are_replaced(self) -> None:
        """Test that undecodable bytes never raise."""
        assert decode_source(b"class \xff {}") == "class \ufffd {}"
