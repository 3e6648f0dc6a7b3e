"""Locate a class's source file inside a sources archive.

Sources archive layouts differ between distributions: plain package paths,
module-prefixed paths (``java.base/java/util/List.java``) or arbitrary
prefixes. ``find_entry`` tries each in turn.
"""

import zipfile

from java_info.classpath import PRIMARY_MODULE

_SOURCE_SUFFIX = ".java"
_DEFAULT_ENCODING = "utf-8"


def class_to_path(class_name: str) -> str:
    """Map a class name to the relative path of its source file.

    Nested binary names resolve to the compilation unit of the outermost
    class: ``a.b.Outer$Inner`` -> ``a/b/Outer.java``.
    """
    package, _, simple = class_name.rpartition(".")
    outer = simple.split("$", 1)[0]
    qualified = f"{package}.{outer}" if package else outer
    return qualified.replace(".", "/") + _SOURCE_SUFFIX


def simple_name(class_name: str) -> str:
    """Innermost simple name of a class (``a.b.Outer$Inner`` -> ``Inner``)."""
    return class_name.rsplit(".", 1)[-1].rsplit("$", 1)[-1]


def find_entry(archive: zipfile.ZipFile, relative_path: str) -> zipfile.ZipInfo | None:
    """Find the archive entry for a relative source path.

    Tries, in order: the exact path, the path under the runtime's primary
    module directory, and finally the first entry whose name ends with
    ``/<relative_path>``.

    Args:
        archive: Open archive to search
        relative_path: Expected relative path (e.g. ``java/util/List.java``)

    Returns:
        Matching entry or None

    """
    for candidate in (relative_path, f"{PRIMARY_MODULE}/{relative_path}"):
        try:
            return archive.getinfo(candidate)
        except KeyError:
            continue

    suffix = f"/{relative_path}"
    for info in archive.infolist():
        if info.filename.endswith(suffix):
            return info
    return None


def read_entry(archive: zipfile.ZipFile, entry: zipfile.ZipInfo) -> bytes:
    """Read the raw bytes of an archive entry."""
    with archive.open(entry) as stream:
        return stream.read()


def decode_source(data: bytes) -> str:
    """Decode source bytes, replacing undecodable sequences."""
    return data.decode(_DEFAULT_ENCODING, errors="replace")
