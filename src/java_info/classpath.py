"""Classpath model: entries, runtime system archives and class file lookup.

The classpath is an ordered list of archives and class directories. The
runtime's own classes come from its system archives: ``jmods/*.jmod`` for
modular runtimes (class files live under ``classes/``) or ``rt.jar`` for
legacy ones.
"""

import logging
import zipfile
from collections.abc import Iterator
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from java_info.config import JavaInfoConfig

logger = logging.getLogger(__name__)

# Reserved namespace prefixes of the runtime, its extensions and W3C/XML APIs
BUILT_IN_PREFIXES = (
    "java.",
    "javax.",
    "sun.",
    "com.sun.",
    "jdk.",
    "org.w3c.",
    "org.xml.",
)

# Module holding java.lang and friends; scanned first
PRIMARY_MODULE = "java.base"

_CLASS_SUFFIX = ".class"
_JMOD_CLASS_PREFIX = "classes/"
_SKIPPED_CLASSES = frozenset({"module-info", "package-info"})

# Raised while reading archives. RuntimeError covers encrypted members and
# NotImplementedError (unsupported compression methods).
ARCHIVE_ERRORS = (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, RuntimeError)


def is_built_in(class_name: str) -> bool:
    """Check whether a class name belongs to the runtime's built-in library."""
    return class_name.startswith(BUILT_IN_PREFIXES)


def class_file_path(class_name: str) -> str:
    """Map a binary class name to its class file path (``a/b/C$D.class``)."""
    return class_name.replace(".", "/") + _CLASS_SUFFIX


def is_nested_class(class_name: str) -> bool:
    """Check whether a binary class name denotes a nested or inner class."""
    return "$" in class_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class ClasspathEntry:
    """A single source of class files.

    Attributes:
        path: Archive file or class directory
        prefix: Prefix of class file members inside an archive
        system: Whether the entry belongs to the runtime installation

    """

    path: Path
    prefix: str = ""
    system: bool = False

    @property
    def is_archive(self) -> bool:
        """Whether the entry is an archive rather than a directory."""
        return self.path.is_file()

    def iter_class_names(self) -> Iterator[str]:
        """Yield the binary name of every class file in this entry."""
        if self.is_archive:
            with zipfile.ZipFile(self.path) as archive:
                members = archive.namelist()
            for member in members:
                if member.startswith(self.prefix) and member.endswith(_CLASS_SUFFIX):
                    name = member[len(self.prefix) : -len(_CLASS_SUFFIX)]
                    yield name.replace("/", ".")
        elif self.path.is_dir():
            for class_file in self.path.rglob(f"*{_CLASS_SUFFIX}"):
                relative = class_file.relative_to(self.path).with_suffix("")
                yield ".".join(relative.parts)

    @cached_property
    def _members(self) -> frozenset[str]:
        # Read once per entry; runtimes ship dozens of jmods to search past
        with zipfile.ZipFile(self.path) as archive:
            return frozenset(archive.namelist())

    def contains(self, class_name: str) -> bool:
        """Check whether this entry holds a class file, without reading it."""
        member = self.prefix + class_file_path(class_name)
        if self.is_archive:
            return member in self._members
        return (self.path / member).is_file()

    def read_class_file(self, class_name: str) -> bytes | None:
        """Read a class file from this entry, or None if it is not here."""
        if not self.contains(class_name):
            return None
        member = self.prefix + class_file_path(class_name)
        if self.is_archive:
            with zipfile.ZipFile(self.path) as archive:
                return archive.read(member)
        return (self.path / member).read_bytes()


def find_system_archives(java_home: Path | None) -> list[ClasspathEntry]:
    """Locate the runtime's class archives below its installation directory.

    Args:
        java_home: Java installation directory

    Returns:
        ``jmods/*.jmod`` entries (primary module first), or the legacy
        ``rt.jar`` entry, or an empty list when nothing is found

    """
    if java_home is None:
        return []

    jmods_dir = java_home / "jmods"
    if jmods_dir.is_dir():
        jmods = sorted(
            jmods_dir.glob("*.jmod"),
            key=lambda p: (p.stem != PRIMARY_MODULE, p.name),
        )
        return [ClasspathEntry(p, prefix=_JMOD_CLASS_PREFIX, system=True) for p in jmods]

    for candidate in (java_home / "lib" / "rt.jar", java_home / "jre" / "lib" / "rt.jar"):
        if candidate.is_file():
            return [ClasspathEntry(candidate, system=True)]

    logger.debug(f"No runtime class archives found below {java_home}")
    return []


class Classpath:
    """Ordered view over runtime system archives and classpath entries."""

    def __init__(
        self,
        entries: list[ClasspathEntry],
        system_entries: list[ClasspathEntry] | None = None,
    ) -> None:
        """Initialise the classpath.

        Args:
            entries: User classpath entries, in lookup order
            system_entries: Runtime archives, searched before user entries

        """
        self._entries = list(entries)
        self._system_entries = list(system_entries or [])

    @classmethod
    def from_config(cls, config: JavaInfoConfig) -> "Classpath":
        """Build the classpath described by a configuration."""
        return cls(
            entries=[ClasspathEntry(path) for path in config.classpath],
            system_entries=find_system_archives(config.resolved_java_home()),
        )

    @property
    def entries(self) -> list[ClasspathEntry]:
        """User classpath entries."""
        return list(self._entries)

    @property
    def system_entries(self) -> list[ClasspathEntry]:
        """Runtime system archives."""
        return list(self._system_entries)

    def all_entries(self) -> list[ClasspathEntry]:
        """System entries followed by user entries (class loading order)."""
        return self._system_entries + self._entries

    def iter_class_names(self) -> Iterator[str]:
        """Yield the binary name of every loadable top-level or nested class.

        Unreadable entries are logged and skipped.
        """
        for entry in self.all_entries():
            try:
                for name in entry.iter_class_names():
                    if name.rsplit(".", 1)[-1] in _SKIPPED_CLASSES:
                        continue
                    yield name
            except ARCHIVE_ERRORS as e:
                logger.warning(f"Skipping unreadable classpath entry {entry.path}: {e}")

    def locate(self, class_name: str, include_system: bool = True) -> ClasspathEntry | None:
        """Find the first entry supplying a class.

        Args:
            class_name: Binary class name
            include_system: Also search the runtime system archives

        Returns:
            The supplying entry or None

        """
        candidates = self.all_entries() if include_system else self._entries
        for entry in candidates:
            try:
                if entry.contains(class_name):
                    return entry
            except ARCHIVE_ERRORS as e:
                logger.warning(f"Cannot read classpath entry {entry.path}: {e}")
        return None

    def read_class_file(self, class_name: str) -> bytes | None:
        """Read a class file in class loading order, or None if absent."""
        for entry in self.all_entries():
            try:
                data = entry.read_class_file(class_name)
            except ARCHIVE_ERRORS as e:
                logger.warning(f"Cannot read classpath entry {entry.path}: {e}")
                continue
            if data is not None:
                return data
        return None
