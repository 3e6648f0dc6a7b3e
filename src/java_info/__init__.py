"""java-info: documentation and source lookup for Java classes.

Resolves a class name to the sources archive that defines it (the runtime's
bundled sources for built-in classes, the ``-sources`` jar from the local
Maven repository otherwise), parses the source and extracts Javadoc for the
class and its public methods.
"""

from java_info.config import JavaInfoConfig
from java_info.engine import JavaInfo, wildcard_to_regex
from java_info.errors import JavaInfoConfigError, JavaInfoError
from java_info.failures import Failure, FailureKind
from java_info.models import (
    ArtifactCoordinate,
    ClassDescriptor,
    MethodDescriptor,
    Origin,
    OriginKind,
)
from java_info.presentation import find_classes, javadoc, javasrc, methods_of

__all__ = [
    "ArtifactCoordinate",
    "ClassDescriptor",
    "Failure",
    "FailureKind",
    "JavaInfo",
    "JavaInfoConfig",
    "JavaInfoConfigError",
    "JavaInfoError",
    "MethodDescriptor",
    "Origin",
    "OriginKind",
    "find_classes",
    "javadoc",
    "javasrc",
    "methods_of",
    "wildcard_to_regex",
]
