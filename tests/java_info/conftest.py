"""Shared fixtures: class file bytes, archives and repository layouts."""

import struct
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

ACC_PUBLIC_SUPER = 0x0021

type ClassFileBuilder = Callable[..., bytes]
type ArchiveBuilder = Callable[[Path, dict[str, bytes | str]], Path]


def build_class_file(
    name: str,
    superclass: str | None = "java.lang.Object",
    interfaces: tuple[str, ...] = (),
    access_flags: int = ACC_PUBLIC_SUPER,
    include_long_constant: bool = False,
) -> bytes:
    """Assemble a minimal but well-formed class file header."""
    pool: list[bytes] = []
    next_index = 1

    def add_class(class_name: str) -> int:
        nonlocal next_index
        encoded = class_name.replace(".", "/").encode()
        pool.append(struct.pack(">BH", 1, len(encoded)) + encoded)
        pool.append(struct.pack(">BH", 7, next_index))
        next_index += 2
        return next_index - 1

    if include_long_constant:
        pool.append(struct.pack(">Bq", 5, 42))
        next_index += 2

    this_index = add_class(name)
    super_index = add_class(superclass) if superclass else 0
    interface_indexes = [add_class(interface) for interface in interfaces]

    header = struct.pack(">IHHH", 0xCAFEBABE, 0, 61, next_index)
    tail = struct.pack(
        ">HHHH", access_flags, this_index, super_index, len(interface_indexes)
    )
    tail += b"".join(struct.pack(">H", index) for index in interface_indexes)
    return header + b"".join(pool) + tail


def write_archive(path: Path, entries: dict[str, bytes | str]) -> Path:
    """Write a zip archive with the given member names and contents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        for member, content in entries.items():
            archive.writestr(member, content)
    return path


@pytest.fixture
def class_file() -> ClassFileBuilder:
    """Builder for class file bytes."""
    return build_class_file


@pytest.fixture
def make_archive() -> ArchiveBuilder:
    """Builder for zip/jar archives on disk."""
    return write_archive


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    """Empty local Maven repository root."""
    path = tmp_path / "m2" / "repository"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def java_home(tmp_path: Path) -> Path:
    """Empty runtime installation directory."""
    path = tmp_path / "jdk"
    (path / "bin").mkdir(parents=True)
    return path


def set_compression_method(path: Path, method: int = 9) -> Path:
    """Rewrite every member's compression method in an archive's headers.

    Method 9 (Deflate64) is listed in the archive but cannot be read back.
    """
    data = bytearray(path.read_bytes())
    for signature, offset in ((b"PK\x03\x04", 8), (b"PK\x01\x02", 10)):
        start = data.find(signature)
        while start != -1:
            struct.pack_into("<H", data, start + offset, method)
            start = data.find(signature, start + 4)
    path.write_bytes(bytes(data))
    return path


@pytest.fixture
def unsupported_compression() -> Callable[[Path], Path]:
    """Marks an archive's members with an unsupported compression method."""
    return set_compression_method
