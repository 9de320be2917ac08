import tarfile

import pytest

from crossway.ustar import (
    USTAR_HEADER_SIZE,
    UstarEntry,
    UstarError,
    UstarType,
    make_header,
    parse_header,
    strip_antisocial_prefixes,
)


def _tar_header(name, size=0, kind=tarfile.REGTYPE):
    info = tarfile.TarInfo(name)
    info.size = size
    info.type = kind
    return info.tobuf(format=tarfile.USTAR_FORMAT)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("/etc/hosts", "etc/hosts"),
        ("../../data", "data"),
        ("./a/b", "a/b"),
        ("plain", "plain"),
        ("", "."),
        ("..", "."),
        ("/", "."),
        ("//../", "."),
    ],
)
def test_strip_antisocial_prefixes(name, expected):
    assert strip_antisocial_prefixes(name) == expected


def test_make_header_fixed_fields():
    header = make_header("hello.txt", UstarType.REGULAR, 1234)
    assert len(header) == USTAR_HEADER_SIZE
    assert header[257:263] == b"ustar\0"
    assert header[263:265] == b"00"
    assert header[100:108] == b"0000644\0"
    assert header[156] == ord("0")
    assert header[265:270] == b"root\0"


def test_directory_mode():
    header = make_header("dir", UstarType.DIRECTORY, 0)
    assert header[100:108] == b"0000755\0"
    assert header[156] == ord("5")


def test_round_trip_regular():
    header = make_header("/abs/file.bin", UstarType.REGULAR, 4096)
    assert parse_header(header) == UstarEntry("abs/file.bin", UstarType.REGULAR, 4096)


def test_round_trip_directory_has_zero_size():
    header = make_header("sub", UstarType.DIRECTORY, 77)
    entry = parse_header(header)
    assert entry.type == UstarType.DIRECTORY
    assert entry.size == 0
    assert entry.file_name == "sub"


def test_header_readable_by_tarfile():
    header = make_header("x/y.txt", UstarType.REGULAR, 99)
    info = tarfile.TarInfo.frombuf(header, "utf-8", "surrogateescape")
    assert info.name == "x/y.txt"
    assert info.size == 99
    assert info.mode == 0o644
    assert info.type == tarfile.REGTYPE


def test_parse_tarfile_header():
    entry = parse_header(_tar_header("docs/readme", size=321))
    assert entry == UstarEntry("docs/readme", UstarType.REGULAR, 321)


def test_end_of_archive():
    entry = parse_header(bytes(USTAR_HEADER_SIZE))
    assert entry.type == UstarType.EOF
    assert entry.file_name is None
    assert entry.size == 0


def test_name_too_long_for_make():
    with pytest.raises(UstarError, match="file name too long"):
        make_header("n" * 100, UstarType.REGULAR, 0)


def test_name_of_99_bytes_accepted():
    entry = parse_header(make_header("n" * 99, UstarType.REGULAR, 0))
    assert entry.file_name == "n" * 99


def test_bad_type_rejected_by_make():
    with pytest.raises(ValueError):
        make_header("f", UstarType.EOF, 0)


def test_bad_magic():
    header = bytearray(make_header("f", UstarType.REGULAR, 1))
    header[257:263] = b"xxxxx\0"
    with pytest.raises(UstarError, match="not a ustar archive"):
        parse_header(header)


def test_bad_version():
    header = bytearray(make_header("f", UstarType.REGULAR, 1))
    header[263:265] = b"01"
    with pytest.raises(UstarError, match="invalid ustar version"):
        parse_header(header)


def test_corrupt_chksum_field():
    header = bytearray(make_header("f", UstarType.REGULAR, 1))
    header[148:156] = b"zzzzzzzz"
    with pytest.raises(UstarError, match="corrupt chksum field"):
        parse_header(header)


def test_checksum_mismatch():
    header = bytearray(make_header("file", UstarType.REGULAR, 1))
    header[0] = ord("g")
    with pytest.raises(UstarError, match="checksum mismatch"):
        parse_header(header)


def test_prefix_means_name_too_long():
    header = _tar_header("d" * 60 + "/" + "f" * 60)
    with pytest.raises(UstarError, match="file name too long"):
        parse_header(header)


def test_unimplemented_type():
    header = _tar_header("link", kind=tarfile.SYMTYPE)
    with pytest.raises(UstarError, match="unimplemented file type"):
        parse_header(header)


def test_file_too_large():
    header = _tar_header("big", size=2**31)
    with pytest.raises(UstarError, match="file too large"):
        parse_header(header)


def test_wrong_header_length():
    with pytest.raises(ValueError):
        parse_header(b"\0" * 100)