"""Tests for the classpath index."""

import threading
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from java_info.classpath import Classpath, ClasspathEntry
from java_info.index import ClasspathIndex

ArchiveBuilder = Callable[[Path, dict[str, bytes | str]], Path]


def make_classpath(tmp_path: Path, make_archive: ArchiveBuilder) -> Classpath:
    """Classpath with one runtime archive and two user jars."""
    runtime = make_archive(
        tmp_path / "rt.jar",
        {"java/io/File.class": b"", "java/util/List.class": b""},
    )
    first = make_archive(
        tmp_path / "first.jar",
        {
            "com/example/File.class": b"",
            "com/example/Outer.class": b"",
            "com/example/Outer$Inner.class": b"",
        },
    )
    second = make_archive(
        tmp_path / "second.jar",
        # Same class twice on the classpath must be listed once
        {"com/example/File.class": b"", "org/other/File.class": b""},
    )
    return Classpath(
        [ClasspathEntry(first), ClasspathEntry(second)],
        system_entries=[ClasspathEntry(runtime, system=True)],
    )


class TestClasspathIndexLookup:
    """Tests for ClasspathIndex.lookup()."""

    def test_lookup_groups_by_simple_name_in_scan_order(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test that all classes sharing a simple name are returned once each."""
        index = ClasspathIndex(make_classpath(tmp_path, make_archive))

        assert index.lookup("File") == [
            "java.io.File",
            "com.example.File",
            "org.other.File",
        ]

    def test_nested_classes_are_not_indexed(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test that Outer$Inner is excluded and Outer is present."""
        index = ClasspathIndex(make_classpath(tmp_path, make_archive))

        assert index.lookup("Outer") == ["com.example.Outer"]
        assert index.lookup("Inner") is None
        assert index.lookup("Outer$Inner") is None

    def test_unknown_name_is_none(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test that an unknown simple name yields None, not an error."""
        index = ClasspathIndex(make_classpath(tmp_path, make_archive))

        assert index.lookup("NoSuchClass") is None

    def test_returned_list_is_a_copy(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test that callers cannot mutate the index through results."""
        index = ClasspathIndex(make_classpath(tmp_path, make_archive))

        index.lookup("List").append("mutated")  # type: ignore[union-attr]

        assert index.lookup("List") == ["java.util.List"]


class TestClasspathIndexPopulation:
    """Tests for one-time population."""

    def test_index_is_lazy(self, tmp_path: Path, make_archive: ArchiveBuilder) -> None:
        """Test that nothing is scanned until the first lookup."""
        index = ClasspathIndex(make_classpath(tmp_path, make_archive))

        assert index.is_populated is False
        index.lookup("File")
        assert index.is_populated is True

    def test_scan_runs_once(self, tmp_path: Path, make_archive: ArchiveBuilder) -> None:
        """Test that repeated lookups reuse the first scan."""
        classpath = make_classpath(tmp_path, make_archive)
        index = ClasspathIndex(classpath)

        with patch.object(
            classpath, "iter_class_names", wraps=classpath.iter_class_names
        ) as scan:
            index.lookup("File")
            index.lookup("List")
            index.lookup("Missing")

        assert scan.call_count == 1

    def test_concurrent_first_lookups_scan_once(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test that racing first lookups serialise on a single scan."""
        classpath = make_classpath(tmp_path, make_archive)
        index = ClasspathIndex(classpath)
        barrier = threading.Barrier(8)
        results: list[list[str] | None] = []
        results_lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            found = index.lookup("File")
            with results_lock:
                results.append(found)

        with patch.object(
            classpath, "iter_class_names", wraps=classpath.iter_class_names
        ) as scan:
            threads = [threading.Thread(target=worker) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert scan.call_count == 1
        assert len(results) == 8
        assert all(found == results[0] for found in results)

    def test_classpath_changes_after_scan_are_not_observed(
        self, tmp_path: Path, make_archive: ArchiveBuilder
    ) -> None:
        """Test that the index is a snapshot taken at first use."""
        jar = make_archive(tmp_path / "lib.jar", {"a/Before.class": b""})
        index = ClasspathIndex(Classpath([ClasspathEntry(jar)]))
        index.lookup("Before")

        make_archive(tmp_path / "lib.jar", {"a/After.class": b""})

        assert index.lookup("After") is None
        assert index.lookup("Before") == ["a.Before"]
