"""Source acquisition: locate, and if necessary fetch, sources archives."""

import logging
import subprocess
import threading
from pathlib import Path

from java_info.config import JavaInfoConfig
from java_info.coordinates import parse_coordinates
from java_info.failures import Failure
from java_info.maven_operations import SOURCES_CLASSIFIER, MavenOperations
from java_info.models import ArtifactCoordinate, Origin, OriginKind

logger = logging.getLogger(__name__)

# Bundled runtime sources, relative to the runtime installation directory.
# Covers OpenJDK on Linux/Windows, other vendor layouts and macOS bundles.
RUNTIME_SOURCE_CANDIDATES = (
    Path("..") / "lib" / "src.zip",
    Path("lib") / "src.zip",
    Path("src.zip"),
    Path("..") / "src.zip",
)

_UNSET = object()


class SourceLocator:
    """Finds the sources archive that holds a class's source file.

    External classes use the ``-sources`` companion of their jar in the local
    repository, fetched with Maven when missing. Built-in classes use the
    runtime's bundled ``src.zip``, located once per locator.
    """

    def __init__(
        self,
        config: JavaInfoConfig,
        maven: MavenOperations | None = None,
    ) -> None:
        """Initialise the locator.

        Args:
            config: Configuration supplying repository, runtime and fetch settings
            maven: Maven operations (built from config if None)

        """
        self._config = config
        self._maven = maven or MavenOperations(
            executable=config.maven_executable, timeout=config.fetch_timeout
        )
        self._runtime_lock = threading.Lock()
        self._runtime_archive: Path | None | object = _UNSET

    def find_sources_archive(self, coordinate: ArtifactCoordinate) -> Path | None:
        """Return the local sources archive for a coordinate if it exists."""
        path = coordinate.archive_path(
            self._config.local_repository, classifier=SOURCES_CLASSIFIER
        )
        return path if path.is_file() else None

    def ensure_sources(self, coordinate: ArtifactCoordinate) -> Path | Failure:
        """Make the sources archive for a coordinate available locally.

        Fetches at most once. A successful fetch is not trusted on its own:
        the conventional path is checked again afterwards.

        Args:
            coordinate: Artifact whose sources are needed

        Returns:
            Path to the sources archive, an AcquisitionFailure if the fetch
            fails, a ResolutionFailure if the fetch succeeded but the archive
            is still missing, or NotFound if fetching is disabled

        """
        existing = self.find_sources_archive(coordinate)
        if existing is not None:
            return existing

        artifact = coordinate.to_maven_string(classifier=SOURCES_CLASSIFIER)
        if not self._config.download_sources:
            return Failure.not_found(
                artifact, "Sources archive not in local repository (fetch disabled)"
            )

        logger.info(f"Fetching sources archive {artifact}")
        try:
            self._maven.fetch(
                coordinate, self._config.local_repository, classifier=SOURCES_CLASSIFIER
            )
        except subprocess.CalledProcessError as e:
            output = (e.stdout or e.stderr or "").strip()
            logger.error(f"Failed to fetch {artifact} (exit {e.returncode}): {output}")
            return Failure.acquisition(
                artifact, f"Fetch command exited with status {e.returncode}"
            )
        except subprocess.TimeoutExpired:
            logger.error(f"Timed out fetching {artifact}")
            return Failure.acquisition(
                artifact, f"Fetch timed out after {self._config.fetch_timeout}s"
            )
        except OSError as e:
            logger.error(f"Could not run fetch command for {artifact}: {e}")
            return Failure.acquisition(artifact, f"Fetch command failed: {e}")

        fetched = self.find_sources_archive(coordinate)
        if fetched is None:
            expected = coordinate.archive_path(
                self._config.local_repository, classifier=SOURCES_CLASSIFIER
            )
            logger.error(f"Fetched {artifact} but it is not at {expected}")
            return Failure.resolution(
                artifact, f"Fetch succeeded but archive not found at {expected}"
            )
        return fetched

    def runtime_sources_archive(self) -> Path | None:
        """Locate the runtime's bundled sources archive (probed once)."""
        with self._runtime_lock:
            if self._runtime_archive is _UNSET:
                self._runtime_archive = self._probe_runtime_sources()
            return self._runtime_archive  # type: ignore[return-value]

    def _probe_runtime_sources(self) -> Path | None:
        java_home = self._config.resolved_java_home()
        if java_home is None:
            logger.warning("No Java installation found; built-in sources unavailable")
            return None

        for candidate in RUNTIME_SOURCE_CANDIDATES:
            path = (java_home / candidate).resolve()
            if path.is_file():
                logger.debug(f"Using runtime sources archive {path}")
                return path

        logger.warning(f"No bundled sources archive found below {java_home}")
        return None

    def sources_archive_for(self, origin: Origin) -> Path | Failure:
        """Find the sources archive for a resolved origin.

        Args:
            origin: Origin of the class

        Returns:
            Path to the archive holding the class's source, or a Failure

        """
        match origin.kind:
            case OriginKind.BUILT_IN:
                archive = self.runtime_sources_archive()
                if archive is None:
                    return Failure.not_found(
                        origin.class_name, "Runtime sources archive not found"
                    )
                return archive
            case OriginKind.EXTERNAL_ARCHIVE if origin.archive is not None:
                coordinate = parse_coordinates(
                    origin.archive, self._config.local_repository
                )
                if isinstance(coordinate, Failure):
                    return coordinate
                return self.ensure_sources(coordinate)
            case _:
                return Failure.resolution(
                    origin.class_name, origin.reason or "Class origin unresolved"
                )
