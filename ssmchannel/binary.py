"""Big-endian field readers and writers for the client message wire format."""

from __future__ import annotations

import struct
import uuid

_INT = struct.Struct(">i")
_UINT = struct.Struct(">I")
_LONG = struct.Struct(">q")
_ULONG = struct.Struct(">Q")


class WireFormatError(ValueError):
    """Raised when a field cannot be read from or written to a buffer."""


def _outside(data: bytes | bytearray, offset: int, length: int) -> bool:
    size = len(data)
    return offset < 0 or offset > size - 1 or offset + length > size


def get_string(data: bytes | bytearray, offset: int, length: int) -> str:
    """Read a fixed-width text field, dropping NUL padding and surrounding whitespace."""
    size = len(data)
    if offset > size - 1 or offset + length - 1 > size - 1 or offset < 0:
        raise WireFormatError("Offset is outside the byte array.")
    raw = bytes(data[offset:offset + length]).strip(b"\x00")
    return raw.decode("utf-8", errors="replace").strip()


def bytes_to_integer(data: bytes | bytearray) -> int:
    """Decode four bytes as a signed 32-bit integer."""
    if len(data) != 4:
        raise WireFormatError("Input array size is not equal to 4.")
    return _INT.unpack(bytes(data))[0]


def bytes_to_long(data: bytes | bytearray) -> int:
    """Decode eight bytes as a signed 64-bit integer."""
    if len(data) != 8:
        raise WireFormatError("Input array size is not equal to 8.")
    return _LONG.unpack(bytes(data))[0]


def get_integer(data: bytes | bytearray, offset: int) -> int:
    """Read a signed 32-bit integer at offset."""
    if _outside(data, offset, 4):
        raise WireFormatError("Offset is bigger than the byte array.")
    return bytes_to_integer(data[offset:offset + 4])


def get_uinteger(data: bytes | bytearray, offset: int) -> int:
    """Read an unsigned 32-bit integer at offset."""
    return get_integer(data, offset) & 0xFFFFFFFF


def get_long(data: bytes | bytearray, offset: int) -> int:
    """Read a signed 64-bit integer at offset."""
    if _outside(data, offset, 8):
        raise WireFormatError("Offset is outside the byte array.")
    return bytes_to_long(data[offset:offset + 8])


def get_ulong(data: bytes | bytearray, offset: int) -> int:
    """Read an unsigned 64-bit integer at offset."""
    return get_long(data, offset) & 0xFFFFFFFFFFFFFFFF


def get_uuid(data: bytes | bytearray, offset: int) -> uuid.UUID:
    """Read a UUID stored as its low eight bytes followed by its high eight bytes."""
    if _outside(data, offset, 16):
        raise WireFormatError("Offset is outside the byte array.")
    low = bytes(data[offset:offset + 8])
    high = bytes(data[offset + 8:offset + 16])
    return uuid.UUID(bytes=high + low)


def get_bytes(data: bytes | bytearray, offset: int, length: int) -> bytes:
    """Read length raw bytes at offset."""
    size = len(data)
    if offset > size - 1 or offset + length - 1 > size - 1 or offset < 0:
        raise WireFormatError("Offset is outside the byte array.")
    return bytes(data[offset:offset + length])


def integer_to_bytes(value: int) -> bytes:
    """Encode a signed 32-bit integer big-endian."""
    try:
        return _INT.pack(value)
    except struct.error as exc:
        raise WireFormatError(f"Value {value} does not fit in 32 bits.") from exc


def long_to_bytes(value: int) -> bytes:
    """Encode a signed 64-bit integer big-endian."""
    try:
        return _LONG.pack(value)
    except struct.error as exc:
        raise WireFormatError(f"Value {value} does not fit in 64 bits.") from exc


def _check_range(buffer: bytearray, offset_start: int, offset_end: int) -> None:
    size = len(buffer)
    if (
        offset_start > size - 1
        or offset_end > size - 1
        or offset_start > offset_end
        or offset_start < 0
    ):
        raise WireFormatError("Offset is outside the byte array.")


def put_string(buffer: bytearray, offset_start: int, offset_end: int, value: str) -> None:
    """Write text into the inclusive range, padding the rest with spaces."""
    _check_range(buffer, offset_start, offset_end)
    encoded = value.encode("utf-8")
    width = offset_end - offset_start + 1
    if width < len(encoded):
        raise WireFormatError("Not enough space to save the string.")
    buffer[offset_start:offset_end + 1] = encoded.ljust(width, b" ")


def put_bytes(buffer: bytearray, offset_start: int, offset_end: int, value: bytes) -> None:
    """Write bytes that exactly fill the inclusive range."""
    _check_range(buffer, offset_start, offset_end)
    if offset_end - offset_start + 1 != len(value):
        raise WireFormatError("Not enough space to save the bytes.")
    buffer[offset_start:offset_end + 1] = value


def _put_packed(buffer: bytearray, offset: int, packed: bytes) -> None:
    if _outside(buffer, offset, len(packed)):
        raise WireFormatError("Offset is outside the byte array.")
    buffer[offset:offset + len(packed)] = packed


def put_integer(buffer: bytearray, offset: int, value: int) -> None:
    """Write a signed 32-bit integer at offset."""
    if _outside(buffer, offset, 4):
        raise WireFormatError("Offset is outside the byte array.")
    _put_packed(buffer, offset, integer_to_bytes(value))


def put_uinteger(buffer: bytearray, offset: int, value: int) -> None:
    """Write an unsigned 32-bit integer at offset."""
    if _outside(buffer, offset, 4):
        raise WireFormatError("Offset is outside the byte array.")
    try:
        packed = _UINT.pack(value)
    except struct.error as exc:
        raise WireFormatError(f"Value {value} does not fit in 32 bits.") from exc
    _put_packed(buffer, offset, packed)


def put_long(buffer: bytearray, offset: int, value: int) -> None:
    """Write a signed 64-bit integer at offset."""
    if _outside(buffer, offset, 8):
        raise WireFormatError("Offset is outside the byte array.")
    _put_packed(buffer, offset, long_to_bytes(value))


def put_ulong(buffer: bytearray, offset: int, value: int) -> None:
    """Write an unsigned 64-bit integer at offset."""
    if _outside(buffer, offset, 8):
        raise WireFormatError("Offset is outside the byte array.")
    try:
        packed = _ULONG.pack(value)
    except struct.error as exc:
        raise WireFormatError(f"Value {value} does not fit in 64 bits.") from exc
    _put_packed(buffer, offset, packed)


def put_uuid(buffer: bytearray, offset: int, value: uuid.UUID | None) -> None:
    """Write a UUID as its low eight bytes followed by its high eight bytes."""
    if value is None or value.int == 0:
        raise WireFormatError("putUuid failed: input is null.")
    if _outside(buffer, offset, 16):
        raise WireFormatError("Offset is outside the byte array.")
    raw = value.bytes
    buffer[offset:offset + 8] = raw[8:16]
    buffer[offset + 8:offset + 16] = raw[0:8]