"""Reading and writing headers of the POSIX "ustar" tar archive format.

Only regular files and directories are supported.  File names that could
escape the extraction directory ("/", "./" and "../" prefixes) are stripped
both when headers are made and when they are parsed.
"""

import enum
from dataclasses import dataclass

USTAR_HEADER_SIZE = 512

_INT_MAX = 2147483647
_ULONG_MAX = 4294967295

# Fixed modification time written into every header: 2006-01-01 08:00 UTC.
_MTIME = 1136102400

# Field layout as (offset, length).
_NAME = (0, 100)
_MODE = (100, 8)
_UID = (108, 8)
_GID = (116, 8)
_SIZE = (124, 12)
_MTIME_FIELD = (136, 12)
_CHKSUM = (148, 8)
_TYPEFLAG = 156
_MAGIC = (257, 6)
_VERSION = (263, 2)
_UNAME = (265, 32)
_GNAME = (297, 32)
_PREFIX = (345, 155)

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class UstarType(enum.IntEnum):
    """Type of an archive entry; values are the bytes used in the format."""

    REGULAR = ord("0")
    DIRECTORY = ord("5")
    EOF = -1


class UstarError(ValueError):
    """A header cannot be made or parsed."""


@dataclass(frozen=True)
class UstarEntry:
    """The parsed contents of one archive header."""

    file_name: str | None
    type: UstarType
    size: int


def strip_antisocial_prefixes(file_name):
    """Drop leading "/", "./" and "../" components from FILE_NAME.

    Returns "." if nothing, or only "..", is left.
    """
    while (
        file_name.startswith("/")
        or file_name.startswith("./")
        or file_name.startswith("../")
    ):
        file_name = file_name[file_name.index("/") + 1 :]
    if file_name == "" or file_name == "..":
        return "."
    return file_name


def _field(header, field):
    offset, length = field
    return header[offset : offset + length]


def _put(header, field, data):
    offset, length = field
    if len(data) > length:
        raise ValueError("field value too long")
    header[offset : offset + len(data)] = data


def _calculate_chksum(header):
    """Sum of the header bytes, counting the checksum field as spaces."""
    offset, length = _CHKSUM
    return (
        sum(header[:offset])
        + ord(" ") * length
        + sum(header[offset + length : USTAR_HEADER_SIZE])
    )


def make_header(file_name, type, size):
    """Return a 512-byte ustar header for a SIZE-byte entry named FILE_NAME.

    TYPE must be UstarType.REGULAR or UstarType.DIRECTORY.  Raises
    UstarError if the (stripped) name is longer than 99 bytes.
    """
    if type not in (UstarType.REGULAR, UstarType.DIRECTORY):
        raise ValueError(f"unsupported entry type: {type!r}")
    if not 0 <= size <= _INT_MAX:
        raise ValueError(f"size out of range: {size}")

    file_name = strip_antisocial_prefixes(file_name)
    encoded = file_name.encode(_ENCODING, _ERRORS)
    if len(encoded) > 99:
        raise UstarError(f"{file_name}: file name too long")

    header = bytearray(USTAR_HEADER_SIZE)
    mode = 0o644 if type == UstarType.REGULAR else 0o755
    _put(header, _NAME, encoded)
    _put(header, _MODE, f"{mode:07o}".encode("ascii"))
    _put(header, _UID, b"0000000")
    _put(header, _GID, b"0000000")
    _put(header, _SIZE, f"{size:011o}".encode("ascii"))
    _put(header, _MTIME_FIELD, f"{_MTIME:011o}".encode("ascii"))
    header[_TYPEFLAG] = int(type)
    _put(header, _MAGIC, b"ustar")
    _put(header, _VERSION, b"00")
    _put(header, _GNAME, b"root")
    _put(header, _UNAME, b"root")

    _put(header, _CHKSUM, f"{_calculate_chksum(header):07o}".encode("ascii"))
    return bytes(header)


def _parse_octal_field(field):
    """Parse an octal field ended by a space or NUL; return None if invalid."""
    value = 0
    for ofs, c in enumerate(field):
        if ord("0") <= c <= ord("7"):
            if value > _ULONG_MAX // 8:
                return None
            value = value * 8 + (c - ord("0"))
        elif c in (ord(" "), 0):
            return value if ofs > 0 else None
        else:
            return None
    return None


def parse_header(header):
    """Parse a 512-byte ustar header and return a UstarEntry.

    An all-zero header marks the end of the archive and yields an entry of
    type UstarType.EOF with no name.  Raises UstarError for invalid headers.
    """
    header = bytes(header)
    if len(header) != USTAR_HEADER_SIZE:
        raise ValueError(
            f"header must be {USTAR_HEADER_SIZE} bytes, got {len(header)}"
        )

    if not any(header):
        return UstarEntry(None, UstarType.EOF, 0)

    if _field(header, _MAGIC) != b"ustar\0":
        raise UstarError("not a ustar archive")
    if _field(header, _VERSION) != b"00":
        raise UstarError("invalid ustar version")
    chksum = _parse_octal_field(_field(header, _CHKSUM))
    if chksum is None:
        raise UstarError("corrupt chksum field")
    if chksum != _calculate_chksum(header):
        raise UstarError("checksum mismatch")
    name_field = _field(header, _NAME)
    if name_field[-1] != 0 or _field(header, _PREFIX)[0] != 0:
        raise UstarError("file name too long")
    typeflag = header[_TYPEFLAG]
    if typeflag not in (UstarType.REGULAR, UstarType.DIRECTORY):
        raise UstarError("unimplemented file type")
    entry_type = UstarType(typeflag)

    if entry_type == UstarType.REGULAR:
        size = _parse_octal_field(_field(header, _SIZE))
        if size is None:
            raise UstarError("corrupt file size field")
        if size > _INT_MAX:
            raise UstarError("file too large")
    else:
        size = 0

    raw_name = name_field.split(b"\0", 1)[0].decode(_ENCODING, _ERRORS)
    return UstarEntry(strip_antisocial_prefixes(raw_name), entry_type, size)