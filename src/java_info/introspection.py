"""Class introspection: where a class came from and what it directly extends.

Resolution and enrichment only depend on the ``ClassIntrospector``
protocol, so the mechanism behind it can be swapped. The implementation here
reads compiled class files from the classpath instead of reflecting over a
live runtime.
"""

import logging
from typing import Protocol, runtime_checkable

from java_info.classfile import ClassFileFormatError, read_class_header
from java_info.classpath import ARCHIVE_ERRORS, Classpath, is_built_in
from java_info.failures import Failure
from java_info.models import Origin, OriginKind

logger = logging.getLogger(__name__)

# Universal root type, never reported as an ancestor
ROOT_CLASS = "java.lang.Object"


@runtime_checkable
class ClassIntrospector(Protocol):
    """Capability interface for class origin and ancestry lookups."""

    def resolve_origin(self, class_name: str) -> Origin:
        """Classify where a class comes from.

        Never raises; an unloadable class yields an ``UNRESOLVED`` origin.
        """
        ...

    def direct_ancestors(self, class_name: str) -> list[str] | Failure:
        """Return the direct superclass (unless it is the root type) followed
        by the directly implemented interfaces, in declaration order.
        """
        ...


class StaticClassIntrospector:
    """Introspection over class files found on a ``Classpath``."""

    def __init__(self, classpath: Classpath) -> None:
        """Initialise with the classpath to search.

        Args:
            classpath: Classpath supplying class files

        """
        self._classpath = classpath

    def resolve_origin(self, class_name: str) -> Origin:
        """Classify a class as built-in, external archive or unresolved.

        Args:
            class_name: Fully-qualified class name

        Returns:
            Origin carrying the supplying archive for external classes

        """
        if is_built_in(class_name):
            return Origin(class_name=class_name, kind=OriginKind.BUILT_IN)

        entry = self._classpath.locate(class_name, include_system=False)
        if entry is None:
            return Origin(
                class_name=class_name,
                kind=OriginKind.UNRESOLVED,
                reason="class not found on classpath",
            )
        if not entry.is_archive:
            return Origin(
                class_name=class_name,
                kind=OriginKind.UNRESOLVED,
                reason=f"class loaded from directory {entry.path}, not an archive",
            )
        return Origin(
            class_name=class_name,
            kind=OriginKind.EXTERNAL_ARCHIVE,
            archive=entry.path,
        )

    def direct_ancestors(self, class_name: str) -> list[str] | Failure:
        """Read the direct superclass and interfaces from the class file.

        Args:
            class_name: Fully-qualified class name

        Returns:
            Ancestor names, or a ResolutionFailure if the class file cannot be
            found or read

        """
        try:
            data = self._classpath.read_class_file(class_name)
        except ARCHIVE_ERRORS as e:
            return Failure.resolution(class_name, f"Cannot read class file: {e}")
        if data is None:
            return Failure.resolution(class_name, "Class file not found on classpath")

        try:
            header = read_class_header(data)
        except ClassFileFormatError as e:
            return Failure.resolution(class_name, f"Malformed class file: {e}")

        ancestors: list[str] = []
        if header.superclass and header.superclass != ROOT_CLASS:
            ancestors.append(header.superclass)
        ancestors.extend(header.interfaces)
        return ancestors
