"""Failure values returned by resolution components.

Components never raise for expected lookup problems. They return a
``Failure`` carrying the kind of problem and the offending identifier, so
callers can tell a missing class from a broken download without inspecting
log output.
"""

from dataclasses import dataclass
from enum import Enum
from typing import override


class FailureKind(str, Enum):
    """Classification of lookup failures."""

    NOT_FOUND = "not_found"
    RESOLUTION = "resolution_failure"
    ACQUISITION = "acquisition_failure"
    PARSE = "parse_failure"


@dataclass(frozen=True)
class Failure:
    """An explicit failed result.

    Attributes:
        kind: What went wrong
        identifier: Class name, path or coordinate the failure concerns
        message: Human-readable description for diagnosis

    """

    kind: FailureKind
    identifier: str
    message: str

    @classmethod
    def not_found(cls, identifier: str, message: str) -> "Failure":
        """Build a NotFound failure."""
        return cls(FailureKind.NOT_FOUND, identifier, message)

    @classmethod
    def resolution(cls, identifier: str, message: str) -> "Failure":
        """Build a ResolutionFailure."""
        return cls(FailureKind.RESOLUTION, identifier, message)

    @classmethod
    def acquisition(cls, identifier: str, message: str) -> "Failure":
        """Build an AcquisitionFailure."""
        return cls(FailureKind.ACQUISITION, identifier, message)

    @classmethod
    def parse(cls, identifier: str, message: str) -> "Failure":
        """Build a ParseFailure."""
        return cls(FailureKind.PARSE, identifier, message)

    @override
    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message} ({self.identifier})"
