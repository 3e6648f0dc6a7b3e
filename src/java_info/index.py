"""Classpath index: simple class name -> fully-qualified class names."""

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from java_info.classpath import Classpath, is_nested_class

logger = logging.getLogger(__name__)


class ClasspathIndex:
    """Lazily built, process-lifetime lookup of classes by simple name.

    The first lookup scans the whole classpath. Concurrent first lookups
    serialise on a lock so the scan runs exactly once; afterwards the index
    is immutable and lookups take no lock. Classpath changes after the scan
    are not observed.
    """

    def __init__(self, classpath: Classpath) -> None:
        """Initialise an empty index over a classpath.

        Args:
            classpath: Classpath to scan on first use

        """
        self._classpath = classpath
        self._lock = threading.Lock()
        self._names: Mapping[str, tuple[str, ...]] | None = None

    @property
    def is_populated(self) -> bool:
        """Whether the classpath scan has run."""
        return self._names is not None

    def lookup(self, simple_name: str) -> list[str] | None:
        """Find every fully-qualified class name with the given simple name.

        Args:
            simple_name: Unqualified class name (e.g. ``ArrayList``)

        Returns:
            Fully-qualified names in scan order, or None if there are none

        """
        names = self._names
        if names is None:
            names = self._build_or_get()
        found = names.get(simple_name)
        return list(found) if found else None

    def _build_or_get(self) -> Mapping[str, tuple[str, ...]]:
        with self._lock:
            if self._names is None:
                self._names = self._scan()
            return self._names

    def _scan(self) -> Mapping[str, tuple[str, ...]]:
        grouped: dict[str, list[str]] = {}
        seen: set[str] = set()
        for class_name in self._classpath.iter_class_names():
            if is_nested_class(class_name) or class_name in seen:
                continue
            seen.add(class_name)
            simple_name = class_name.rsplit(".", 1)[-1]
            grouped.setdefault(simple_name, []).append(class_name)

        logger.info(f"Indexed {len(seen)} classes under {len(grouped)} simple names")
        return MappingProxyType({k: tuple(v) for k, v in grouped.items()})
