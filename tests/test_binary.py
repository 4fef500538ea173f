import uuid

import pytest

from ssmchannel.binary import (
    WireFormatError,
    bytes_to_integer,
    bytes_to_long,
    get_bytes,
    get_integer,
    get_long,
    get_string,
    get_uinteger,
    get_ulong,
    get_uuid,
    integer_to_bytes,
    long_to_bytes,
    put_bytes,
    put_integer,
    put_long,
    put_string,
    put_uinteger,
    put_ulong,
    put_uuid,
)

DEFAULT_UUID = "dd01e56b-ff48-483e-a508-b5f073f31b16"
DEFAULT_UUID_WIRE = bytes.fromhex("a508b5f073f31b16dd01e56bff48483e")


@pytest.mark.parametrize("start,end", [(0, 7), (1, 7)])
def test_put_string_success(start, end):
    buffer = bytearray(8)
    put_string(buffer, start, end, "hello")
    assert b"hello" in buffer
    assert buffer[start:start + 5] == b"hello"
    assert buffer[start + 5:end + 1] == b" " * (end - start - 4)


@pytest.mark.parametrize(
    "start,end,value,message",
    [
        (-1, 7, "hello", "Offset is outside"),
        (0, 7, "longinputstring", "Not enough space"),
    ],
)
def test_put_string_errors(start, end, value, message):
    with pytest.raises(WireFormatError, match=message):
        put_string(bytearray(8), start, end, value)


@pytest.mark.parametrize(
    "start,end,expected",
    [
        (0, 3, bytes([0x22, 0x55, 0xFF, 0x22, 0, 0, 0, 0])),
        (1, 4, bytes([0, 0x22, 0x55, 0xFF, 0x22, 0, 0, 0])),
    ],
)
def test_put_bytes_success(start, end, expected):
    buffer = bytearray(8)
    put_bytes(buffer, start, end, bytes([0x22, 0x55, 0xFF, 0x22]))
    assert bytes(buffer) == expected


@pytest.mark.parametrize(
    "start,end,message",
    [(-1, 7, "Offset is outside"), (0, 2, "Not enough space")],
)
def test_put_bytes_errors(start, end, message):
    with pytest.raises(WireFormatError, match=message):
        put_bytes(bytearray(8), start, end, bytes([0x22, 0x55, 0x00, 0x22]))


def test_long_to_bytes():
    assert long_to_bytes(5747283) == bytes([0, 0, 0, 0, 0, 0x57, 0xB2, 0x53])


@pytest.mark.parametrize(
    "size,offset,value,expected",
    [
        (9, 0, 5747283, bytes([0, 0, 0, 0, 0, 0x57, 0xB2, 0x53, 0])),
        (10, 1, 92837273, bytes([0, 0, 0, 0, 0, 0x05, 0x88, 0x95, 0x99, 0])),
        (8, 0, 50, bytes([0, 0, 0, 0, 0, 0, 0, 0x32])),
    ],
)
def test_put_long_success(size, offset, value, expected):
    buffer = bytearray(size)
    put_long(buffer, offset, value)
    assert bytes(buffer) == expected


@pytest.mark.parametrize("size,offset", [(8, 1), (9, -1), (4, 10)])
def test_put_long_errors(size, offset):
    with pytest.raises(WireFormatError, match="Offset is outside"):
        put_long(bytearray(size), offset, 50)


@pytest.mark.parametrize(
    "size,offset,value,expected",
    [
        (5, 0, 324, bytes([0, 0, 0x01, 0x44, 0])),
        (8, 1, 520392, bytes([0, 0, 0x07, 0xF0, 0xC8, 0, 0, 0])),
        (4, 0, 50, bytes([0, 0, 0, 0x32])),
    ],
)
def test_put_integer_success(size, offset, value, expected):
    buffer = bytearray(size)
    put_integer(buffer, offset, value)
    assert bytes(buffer) == expected


@pytest.mark.parametrize("size,offset", [(8, 5), (9, -1), (4, 10)])
def test_put_integer_errors(size, offset):
    with pytest.raises(WireFormatError, match="Offset is outside"):
        put_integer(bytearray(size), offset, 50)


@pytest.mark.parametrize(
    "data,offset,length",
    [(bytes([0x72, 0x77, 0x00]), 0, 2), (bytes([0, 0, 0x72, 0x77, 0]), 2, 2)],
)
def test_get_string_success(data, offset, length):
    assert get_string(data, offset, length) == "rw"


@pytest.mark.parametrize("size,offset,length", [(9, -1, 0), (4, 10, 2)])
def test_get_string_errors(size, offset, length):
    with pytest.raises(WireFormatError, match="Offset is outside"):
        get_string(bytes(size), offset, length)


@pytest.mark.parametrize(
    "data,offset",
    [(bytes([0x72, 0x77, 0x00]), 0), (bytes([0, 0, 0x72, 0x77, 0]), 2)],
)
def test_get_bytes_success(data, offset):
    assert get_bytes(data, offset, 2) == bytes([0x72, 0x77])


@pytest.mark.parametrize("size,offset,length", [(8, -1, 0), (4, 10, 2)])
def test_get_bytes_errors(size, offset, length):
    with pytest.raises(WireFormatError, match="Offset is outside"):
        get_bytes(bytes(size), offset, length)


@pytest.mark.parametrize(
    "data,offset,expected",
    [
        (bytes([0, 0, 0, 0, 0, 0x5A, 0x05, 0x66, 0]), 0, 5899622),
        (bytes([0, 0, 0, 0, 0, 0, 0, 0x5A, 0x05, 0x6A, 0]), 2, 5899626),
        (bytes([0, 0, 0, 0, 0, 0, 0, 0x32]), 0, 50),
    ],
)
def test_get_long_success(data, offset, expected):
    assert get_long(data, offset) == expected


@pytest.mark.parametrize("size,offset", [(8, 1), (9, -1), (4, 10)])
def test_get_long_errors(size, offset):
    with pytest.raises(WireFormatError, match="Offset is outside"):
        get_long(bytes(size), offset)


def test_put_uuid_layout():
    buffer = bytearray(16)
    put_uuid(buffer, 0, uuid.UUID(DEFAULT_UUID))
    assert bytes(buffer) == DEFAULT_UUID_WIRE


def test_put_uuid_nil():
    with pytest.raises(WireFormatError, match="null"):
        put_uuid(bytearray(16), 0, uuid.UUID("00000000-0000-0000-0000-000000000000"))


def test_put_uuid_none():
    with pytest.raises(WireFormatError, match="null"):
        put_uuid(bytearray(16), 0, None)


def test_put_uuid_bad_offset():
    with pytest.raises(WireFormatError, match="Offset is outside"):
        put_uuid(bytearray(8), 8, uuid.UUID(DEFAULT_UUID))


def test_get_uuid_round_trip():
    buffer = bytearray(20)
    put_uuid(buffer, 2, uuid.UUID(DEFAULT_UUID))
    assert str(get_uuid(buffer, 2)) == DEFAULT_UUID
    assert str(get_uuid(DEFAULT_UUID_WIRE, 0)) == DEFAULT_UUID


def test_get_uuid_bad_offset():
    with pytest.raises(WireFormatError):
        get_uuid(bytes(16), 1)


def test_put_get_string():
    data = bytearray([0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 0, 1])
    put_string(data, 1, 8, "hello")
    assert get_string(data, 1, 8) == "hello"


def test_put_get_integer():
    data = bytearray([0, 0, 0, 0, 0xFF, 0])
    put_integer(data, 1, 256)
    assert list(data[1:5]) == [0, 0, 1, 0]
    assert get_integer(data, 1) == 256
    assert get_integer(data, 2) == 65536
    with pytest.raises(WireFormatError):
        get_integer(data, 3)


def test_put_get_long():
    data = bytearray([0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0])
    put_long(data, 1, 4294967296)
    assert list(data[1:9]) == [0, 0, 0, 1, 0, 0, 0, 0]
    assert get_long(data, 1) == 4294967296


def test_integer_to_bytes():
    assert integer_to_bytes(256) == bytes([0, 0, 1, 0])


def test_integer_to_bytes_out_of_range():
    with pytest.raises(WireFormatError):
        integer_to_bytes(2**31)


def test_bytes_to_integer_wrong_size():
    with pytest.raises(WireFormatError, match="not equal to 4"):
        bytes_to_integer(b"\x00\x01")


def test_bytes_to_long_wrong_size():
    with pytest.raises(WireFormatError, match="not equal to 8"):
        bytes_to_long(b"\x00" * 4)


def test_signed_and_unsigned_readers():
    data = b"\xff" * 8
    assert get_integer(data, 0) == -1
    assert get_uinteger(data, 0) == 0xFFFFFFFF
    assert get_long(data, 0) == -1
    assert get_ulong(data, 0) == 0xFFFFFFFFFFFFFFFF


def test_unsigned_writers_round_trip():
    buffer = bytearray(12)
    put_uinteger(buffer, 0, 0xFFFFFFFE)
    put_ulong(buffer, 4, 1503434274948)
    assert get_uinteger(buffer, 0) == 0xFFFFFFFE
    assert get_ulong(buffer, 4) == 1503434274948


def test_put_uinteger_rejects_negative():
    with pytest.raises(WireFormatError):
        put_uinteger(bytearray(4), 0, -1)