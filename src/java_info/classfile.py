"""Minimal class file header reader.

Reads just enough of a compiled class (JVMS chapter 4) to recover its own
name, its superclass and its directly implemented interfaces: the magic
number, the constant pool, the access flags, ``this_class``,
``super_class`` and the interfaces table.
"""

import struct
from dataclasses import dataclass

CLASS_FILE_MAGIC = 0xCAFEBABE

ACC_INTERFACE = 0x0200

# Constant pool tags
_TAG_UTF8 = 1
_TAG_CLASS = 7
_TAG_LONG = 5
_TAG_DOUBLE = 6

# Fixed payload sizes of the remaining constant pool tags
_TAG_SIZES: dict[int, int] = {
    3: 4,  # Integer
    4: 4,  # Float
    5: 8,  # Long
    6: 8,  # Double
    7: 2,  # Class
    8: 2,  # String
    9: 4,  # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}


class ClassFileFormatError(ValueError):
    """Raised when bytes are not a well-formed class file header."""

    pass


@dataclass(frozen=True)
class ClassFileHeader:
    """Identity and direct supertypes of a compiled class.

    Names are binary names with dots (``java.util.AbstractList``,
    ``a.b.Outer$Inner``).
    """

    name: str
    access_flags: int
    superclass: str | None
    interfaces: tuple[str, ...]

    @property
    def is_interface(self) -> bool:
        """Whether the class file declares an interface."""
        return bool(self.access_flags & ACC_INTERFACE)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def u1(self) -> int:
        return self._unpack(">B", 1)

    def u2(self) -> int:
        return self._unpack(">H", 2)

    def u4(self) -> int:
        return self._unpack(">I", 4)

    def raw(self, length: int) -> bytes:
        end = self._offset + length
        if end > len(self._data):
            raise ClassFileFormatError("Truncated class file")
        chunk = self._data[self._offset : end]
        self._offset = end
        return chunk

    def _unpack(self, fmt: str, size: int) -> int:
        (value,) = struct.unpack(fmt, self.raw(size))
        return value


def read_class_header(data: bytes) -> ClassFileHeader:
    """Parse the header of a class file.

    Args:
        data: Raw class file bytes

    Returns:
        The class's name, access flags, superclass and interfaces

    Raises:
        ClassFileFormatError: If the bytes are not a class file

    """
    reader = _Reader(data)
    if reader.u4() != CLASS_FILE_MAGIC:
        raise ClassFileFormatError("Bad magic number")
    reader.u2()  # minor_version
    reader.u2()  # major_version

    utf8: dict[int, str] = {}
    class_refs: dict[int, int] = {}

    pool_count = reader.u2()
    index = 1
    while index < pool_count:
        tag = reader.u1()
        if tag == _TAG_UTF8:
            length = reader.u2()
            utf8[index] = reader.raw(length).decode("utf-8", errors="replace")
        elif tag == _TAG_CLASS:
            class_refs[index] = reader.u2()
        elif tag in _TAG_SIZES:
            reader.raw(_TAG_SIZES[tag])
        else:
            raise ClassFileFormatError(f"Unknown constant pool tag {tag} at {index}")
        # Long and Double occupy two constant pool slots
        index += 2 if tag in (_TAG_LONG, _TAG_DOUBLE) else 1

    def class_name(class_index: int) -> str:
        try:
            return utf8[class_refs[class_index]].replace("/", ".")
        except KeyError as e:
            raise ClassFileFormatError(f"Bad class reference {class_index}") from e

    access_flags = reader.u2()
    name = class_name(reader.u2())
    super_index = reader.u2()
    superclass = class_name(super_index) if super_index else None
    interfaces = tuple(class_name(reader.u2()) for _ in range(reader.u2()))

    return ClassFileHeader(
        name=name,
        access_flags=access_flags,
        superclass=superclass,
        interfaces=interfaces,
    )
