"""Data models for extracted class knowledge and artifact identity."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MethodDescriptor(BaseModel):
    """One method signature's declaration and documentation.

    ``name`` and ``declaration`` together distinguish overloads; the
    documentation fields may each be empty independently.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    declaration: str
    description: str = ""
    params: dict[str, str] = Field(default_factory=dict)
    returns: str | None = None

    @property
    def has_full_docs(self) -> bool:
        """Whether description, parameters and return text are all present."""
        return (
            bool(self.description) and bool(self.params) and self.returns is not None
        )

    @property
    def has_any_docs(self) -> bool:
        """Whether at least one documentation field is present."""
        return (
            bool(self.description) or bool(self.params) or self.returns is not None
        )


class ClassDescriptor(BaseModel):
    """Extracted knowledge about one class."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    methods: list[MethodDescriptor] = Field(default_factory=list)

    def methods_named(self, method_name: str) -> list[MethodDescriptor]:
        """Return every overload with the given name, in declaration order."""
        return [method for method in self.methods if method.name == method_name]


class ArtifactCoordinate(BaseModel):
    """Repository identity of a dependency (group, artifact, version)."""

    model_config = ConfigDict(frozen=True)

    group_id: str
    artifact_id: str
    version: str

    @field_validator("group_id", "artifact_id", "version")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Reject blank coordinate parts."""
        if not v or not v.strip():
            raise ValueError("coordinate parts must be non-empty")
        return v.strip()

    def to_maven_string(
        self, packaging: str = "jar", classifier: str | None = None
    ) -> str:
        """Render as ``group:artifact:version:packaging[:classifier]``."""
        parts = [self.group_id, self.artifact_id, self.version, packaging]
        if classifier:
            parts.append(classifier)
        return ":".join(parts)

    def archive_path(self, repository: Path, classifier: str | None = None) -> Path:
        """Conventional location of this artifact's jar in a local repository.

        Args:
            repository: Local repository root (e.g. ``~/.m2/repository``)
            classifier: Optional classifier such as ``sources``

        Returns:
            ``<repo>/<group/as/path>/<artifact>/<version>/<artifact>-<version>[-classifier].jar``

        """
        suffix = f"-{classifier}" if classifier else ""
        file_name = f"{self.artifact_id}-{self.version}{suffix}.jar"
        return (
            repository.joinpath(*self.group_id.split("."))
            / self.artifact_id
            / self.version
            / file_name
        )


class OriginKind(str, Enum):
    """Where a class's bytes came from."""

    BUILT_IN = "built-in"
    EXTERNAL_ARCHIVE = "external-archive"
    UNRESOLVED = "unresolved"


class Origin(BaseModel):
    """Resolved origin of a class.

    ``archive`` is set exactly when ``kind`` is ``EXTERNAL_ARCHIVE``;
    ``reason`` explains an ``UNRESOLVED`` origin.
    """

    model_config = ConfigDict(frozen=True)

    class_name: str
    kind: OriginKind
    archive: Path | None = None
    reason: str | None = None
