"""Derive artifact coordinates from a jar's location in a local repository.

Expected layout::

    <repository>/<group/path/segments>/<artifactId>/<version>/<artifactId>-<version>.jar
"""

import logging
import re
from pathlib import Path, PurePosixPath

from pydantic import ValidationError

from java_info.failures import Failure
from java_info.models import ArtifactCoordinate

logger = logging.getLogger(__name__)

# Fallback repository root marker when the repository location is unknown
_REPOSITORY_MARKER = re.compile(r"^.*/repository/")

# group (>= 1 segment) + artifact + version + file name
_MIN_SEGMENTS = 4


def _strip_repository_root(archive_path: Path, repository: Path | None) -> str:
    if repository is not None:
        try:
            return archive_path.resolve().relative_to(repository.resolve()).as_posix()
        except ValueError:
            pass
        try:
            return archive_path.relative_to(repository).as_posix()
        except ValueError:
            pass
    return _REPOSITORY_MARKER.sub("", archive_path.as_posix())


def parse_coordinates(
    archive_path: Path, repository: Path | None = None
) -> ArtifactCoordinate | Failure:
    """Parse group, artifact and version from an archive path.

    Args:
        archive_path: Location of the jar that supplied a class
        repository: Local repository root. When the archive lies below it the
            path is taken relative to it; otherwise everything up to and
            including ``/repository/`` is stripped.

    Returns:
        The coordinate, or a ResolutionFailure naming the offending path

    """
    relative = _strip_repository_root(archive_path, repository)
    parts = [part for part in PurePosixPath(relative).parts if part not in ("/", "")]

    if len(parts) < _MIN_SEGMENTS:
        logger.warning(
            f"Cannot parse artifact coordinates from {archive_path}: "
            f"{len(parts)} path segments {parts}"
        )
        return Failure.resolution(
            str(archive_path),
            f"Insufficient path segments to derive coordinates from '{relative}'",
        )

    try:
        return ArtifactCoordinate(
            group_id=".".join(parts[:-3]),
            artifact_id=parts[-3],
            version=parts[-2],
        )
    except ValidationError as e:
        logger.warning(f"Invalid artifact coordinates from {archive_path}: {e}")
        return Failure.resolution(str(archive_path), f"Invalid coordinates: {e}")
