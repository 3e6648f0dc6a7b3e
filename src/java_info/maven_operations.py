"""Maven operations for fetching artifacts into the local repository."""

import subprocess
from pathlib import Path

from java_info.models import ArtifactCoordinate

SOURCES_CLASSIFIER = "sources"


class MavenOperations:
    """Runs ``mvn dependency:get`` to populate the local repository."""

    def __init__(self, executable: str = "mvn", timeout: int = 300) -> None:
        """Initialise Maven operations.

        Args:
            executable: Maven executable name or path
            timeout: Timeout in seconds for a single fetch

        """
        self._executable = executable
        self._timeout = timeout

    def fetch(
        self,
        coordinate: ArtifactCoordinate,
        repository: Path,
        classifier: str | None = SOURCES_CLASSIFIER,
    ) -> None:
        """Fetch an artifact into the local repository.

        Args:
            coordinate: Artifact to fetch
            repository: Local repository to fetch into
            classifier: Artifact classifier (``sources`` by default)

        Raises:
            subprocess.CalledProcessError: If Maven exits with a non-zero status.
            subprocess.TimeoutExpired: If the fetch times out.
            FileNotFoundError: If the Maven executable is not installed.

        """
        cmd = self._build_fetch_command(coordinate, repository, classifier)
        subprocess.run(  # noqa: S603 - mvn command with controlled inputs
            cmd, check=True, timeout=self._timeout, capture_output=True, text=True
        )

    def _build_fetch_command(
        self,
        coordinate: ArtifactCoordinate,
        repository: Path,
        classifier: str | None,
    ) -> list[str]:
        """Build the ``dependency:get`` command line.

        Args:
            coordinate: Artifact to fetch
            repository: Local repository to fetch into
            classifier: Artifact classifier or None for the main artifact

        Returns:
            List of command arguments

        """
        artifact = coordinate.to_maven_string(packaging="jar", classifier=classifier)
        return [
            self._executable,
            "--batch-mode",
            "dependency:get",
            f"-Dartifact={artifact}",
            f"-Dmaven.repo.local={repository}",
        ]
