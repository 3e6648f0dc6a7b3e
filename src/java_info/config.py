"""Configuration for java-info."""

import os
import shutil
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from java_info.errors import JavaInfoConfigError

DEFAULT_LOCAL_REPOSITORY = Path.home() / ".m2" / "repository"

# Environment variable -> config field
_ENVIRONMENT_FIELDS: dict[str, str] = {
    "JAVA_HOME": "java_home",
    "JAVA_INFO_LOCAL_REPOSITORY": "local_repository",
    "JAVA_INFO_MAVEN_EXECUTABLE": "maven_executable",
    "JAVA_INFO_FETCH_TIMEOUT": "fetch_timeout",
    "JAVA_INFO_DOWNLOAD_SOURCES": "download_sources",
}


def expand_classpath(entries: list[Path]) -> list[Path]:
    """Expand Java-style wildcard entries (``lib/*``) into the jars they name.

    Args:
        entries: Raw classpath entries

    Returns:
        Entries with every ``dir/*`` replaced by the sorted ``.jar`` files in
        ``dir``. Other entries are kept in order.

    """
    expanded: list[Path] = []
    for entry in entries:
        if entry.name == "*":
            directory = entry.parent
            if directory.is_dir():
                expanded.extend(
                    sorted(
                        p
                        for p in directory.iterdir()
                        if p.is_file() and p.suffix.lower() == ".jar"
                    )
                )
            continue
        expanded.append(entry)
    return expanded


class JavaInfoConfig(BaseModel):
    """Configuration for class resolution with Pydantic validation.

    The classpath stands in for whatever a running JVM would have loaded;
    ``java_home`` locates the runtime's built-in classes and its bundled
    sources archive.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_assignment=True)

    classpath: list[Path] = Field(
        default_factory=list,
        description="Ordered classpath entries (jars, zips, class directories)",
    )
    java_home: Path | None = Field(
        default=None,
        description="Java installation directory (derived from PATH if None)",
    )
    local_repository: Path = Field(
        default=DEFAULT_LOCAL_REPOSITORY,
        description="Local Maven repository root",
    )
    maven_executable: str = Field(
        default="mvn",
        description="Maven executable used to fetch missing sources archives",
    )
    fetch_timeout: int = Field(
        default=300,
        description="Sources fetch timeout in seconds",
        gt=0,
    )
    download_sources: bool = Field(
        default=True,
        description="Fetch missing sources archives with Maven",
    )

    @field_validator("classpath", mode="before")
    @classmethod
    def split_classpath_string(cls, v: Any) -> Any:  # noqa: ANN401
        """Accept a path-separator delimited string as well as a list."""
        if isinstance(v, str):
            return [Path(part) for part in v.split(os.pathsep) if part]
        return v

    @field_validator("classpath")
    @classmethod
    def expand_wildcards(cls, v: list[Path]) -> list[Path]:
        """Expand ``dir/*`` entries."""
        return expand_classpath([p.expanduser() for p in v])

    @field_validator("local_repository")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        """Expand ``~`` in the repository path."""
        return v.expanduser()

    @field_validator("maven_executable")
    @classmethod
    def validate_executable_not_empty(cls, v: str) -> str:
        """Validate the executable name is not empty."""
        if not v or not v.strip():
            raise ValueError("maven_executable must not be empty")
        return v.strip()

    def resolved_java_home(self) -> Path | None:
        """Return the Java installation directory.

        Uses ``java_home`` when set, otherwise follows the ``java`` executable
        on PATH (``<home>/bin/java``).
        """
        if self.java_home is not None:
            return self.java_home
        java = shutil.which("java")
        if java is None:
            return None
        return Path(java).resolve().parent.parent

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary.

        Args:
            properties: Raw configuration properties

        Returns:
            Validated configuration object

        Raises:
            JavaInfoConfigError: If validation fails

        """
        try:
            return cls.model_validate(properties)
        except ValidationError as e:
            raise JavaInfoConfigError(f"Invalid java-info configuration: {e}") from e
        except ValueError as e:
            raise JavaInfoConfigError(f"Invalid java-info configuration: {e}") from e

    @classmethod
    def from_environment(cls, overrides: dict[str, Any] | None = None) -> Self:
        """Create configuration from environment variables.

        Environment variables:
        - CLASSPATH: Path-separator delimited classpath
        - JAVA_HOME: Java installation directory
        - JAVA_INFO_LOCAL_REPOSITORY: Local Maven repository root
        - JAVA_INFO_MAVEN_EXECUTABLE: Maven executable
        - JAVA_INFO_FETCH_TIMEOUT: Fetch timeout in seconds
        - JAVA_INFO_DOWNLOAD_SOURCES: ``false`` disables fetching

        Args:
            overrides: Properties that take precedence over the environment.
                ``None`` values are ignored.

        Returns:
            Validated configuration object

        Raises:
            JavaInfoConfigError: If validation fails

        """
        properties: dict[str, Any] = {}

        classpath = os.environ.get("CLASSPATH")
        if classpath:
            properties["classpath"] = classpath

        for variable, field_name in _ENVIRONMENT_FIELDS.items():
            value = os.environ.get(variable)
            if value:
                properties[field_name] = value

        for key, value in (overrides or {}).items():
            if value is not None:
                properties[key] = value

        return cls.from_properties(properties)
