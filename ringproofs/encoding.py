"""Serialization primitives of the wire format: VarInts, scalars and points."""

from __future__ import annotations

from typing import BinaryIO, Callable, Optional, Sequence, TypeVar

from .ed25519 import Point, scalar_from_canonical_bytes, scalar_to_bytes

T = TypeVar("T")

_CONTINUATION = 0x80
_U64_MAX = (1 << 64) - 1


class DecodeError(ValueError):
    """Raised when data read off a stream is malformed."""


def _check_u64(value: int) -> None:
    if value < 0 or value > _U64_MAX:
        raise ValueError("varint exceeded u64")


def varint_len(value: int) -> int:
    """The number of bytes the value takes as a VarInt."""
    _check_u64(value)
    return max(value.bit_length() - 1, 0) // 7 + 1


def encode_varint(value: int) -> bytes:
    _check_u64(value)
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            byte |= _CONTINUATION
        out.append(byte)
        if not value:
            return bytes(out)


def write_byte(byte: int, stream: BinaryIO) -> None:
    stream.write(bytes([byte]))


def write_varint(value: int, stream: BinaryIO) -> None:
    stream.write(encode_varint(value))


def write_scalar(scalar: int, stream: BinaryIO) -> None:
    stream.write(scalar_to_bytes(scalar))


def write_point(point: Point, stream: BinaryIO) -> None:
    stream.write(point.compress())


def write_raw_vec(
    writer: Callable[[T, BinaryIO], None], values: Sequence[T], stream: BinaryIO
) -> None:
    for value in values:
        writer(value, stream)


def write_vec(
    writer: Callable[[T, BinaryIO], None], values: Sequence[T], stream: BinaryIO
) -> None:
    write_varint(len(values), stream)
    write_raw_vec(writer, values, stream)


def read_bytes(stream: BinaryIO, length: int) -> bytes:
    data = stream.read(length)
    if data is None or len(data) != length:
        raise DecodeError("unexpected end of data")
    return data


def read_byte(stream: BinaryIO) -> int:
    return read_bytes(stream, 1)[0]


def read_u16(stream: BinaryIO) -> int:
    return int.from_bytes(read_bytes(stream, 2), "little")


def read_u32(stream: BinaryIO) -> int:
    return int.from_bytes(read_bytes(stream, 4), "little")


def read_u64(stream: BinaryIO) -> int:
    return int.from_bytes(read_bytes(stream, 8), "little")


def read_varint(stream: BinaryIO, bits: int = 64) -> int:
    """Read a canonically-encoded VarInt into an unsigned integer of `bits` bits."""
    shift = 0
    result = 0
    while True:
        byte = read_byte(stream)
        if shift and byte == 0:
            raise DecodeError("non-canonical varint")
        if shift + 7 >= bits and (shift >= bits or byte >= (1 << (bits - shift))):
            raise DecodeError("varint overflow")
        result += (byte & 0x7F) << shift
        shift += 7
        if not byte & _CONTINUATION:
            break
    if result >= (1 << bits):
        raise DecodeError("VarInt does not fit into integer type")
    return result


def read_scalar(stream: BinaryIO) -> int:
    try:
        return scalar_from_canonical_bytes(read_bytes(stream, 32))
    except DecodeError:
        raise
    except ValueError as exc:
        raise DecodeError("unreduced scalar") from exc


def decompress_point(data: bytes) -> Optional[Point]:
    """Decompress a canonically-encoded point, or return None."""
    point = Point.decompress(bytes(data))
    if point is None or point.compress() != bytes(data):
        return None
    return point


def read_point(stream: BinaryIO) -> Point:
    point = decompress_point(read_bytes(stream, 32))
    if point is None:
        raise DecodeError("invalid point")
    return point


def read_torsion_free_point(stream: BinaryIO) -> Point:
    try:
        point = read_point(stream)
    except DecodeError:
        point = None
    if point is None or not point.is_torsion_free():
        raise DecodeError("invalid point")
    return point


def read_raw_vec(
    reader: Callable[[BinaryIO], T], length: int, stream: BinaryIO
) -> list[T]:
    return [reader(stream) for _ in range(length)]


def read_array(
    reader: Callable[[BinaryIO], T], length: int, stream: BinaryIO
) -> tuple[T, ...]:
    return tuple(read_raw_vec(reader, length, stream))


def read_vec(
    reader: Callable[[BinaryIO], T],
    stream: BinaryIO,
    length_bound: Optional[int] = None,
) -> list[T]:
    length = read_varint(stream)
    if length_bound is not None and length > length_bound:
        raise DecodeError("vector exceeds bound on length")
    return read_raw_vec(reader, length, stream)