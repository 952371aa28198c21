"""Field-described message encoding on top of msgpack.

A message is a msgpack array whose header counts every field descriptor,
followed by one item per encoded field. Conditional fields can drop the
fields that follow them from the stream.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from itertools import islice
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence

import msgpack

from ecoframe.compress import compress_rle, decompress_rle

PKT_BUFSIZ = 4_000_000
HEADER_ELEMENTS = 3
_UINT16_MAX = 0xFFFF


class MessageId(IntEnum):
    INIT = 0
    WELCOME = 1
    LIBRG_UPDATE = 2
    SEND_KEYSTATE = 3
    SEND_BLOCKPOS = 4
    SWITCH_VIEWER = 5
    SEND_NOTIFICATION = 6
    SEND_CODE = 7
    NEXT_FREE_ID = 8
    MAX_PACKETS = 256


class FieldKind(Enum):
    UINT = "uint"
    SINT = "sint"
    REAL = "real"
    HALF = "half"
    ARRAY = "array"
    SKIP = "skip"


class PacketError(ValueError):
    """Raised when a message cannot be encoded or decoded."""


@dataclass(frozen=True)
class Field:
    """Describes one member of a message table."""

    name: str
    kind: FieldKind
    size: int
    skip_count: int = 0
    skip_eq: int = 0


@dataclass
class PacketHeader:
    id: int
    view_id: int
    data: bytes
    udata: Any = field(default=None, compare=False)


def uint(name: str, size: int = 8) -> Field:
    return Field(name, FieldKind.UINT, size)


def sint(name: str, size: int = 8) -> Field:
    return Field(name, FieldKind.SINT, size)


def real(name: str, size: int = 8) -> Field:
    return Field(name, FieldKind.REAL, size)


def half(name: str, size: int = 4) -> Field:
    return Field(name, FieldKind.HALF, size)


def array(name: str, size: int) -> Field:
    return Field(name, FieldKind.ARRAY, size)


def skip_if(name: str, eq: int, count: int) -> Field:
    """Drop the next ``count`` fields when the byte value of ``name`` equals ``eq``."""
    return Field(name, FieldKind.SKIP, 1, skip_count=count, skip_eq=eq)


def keep_if(name: str, eq: int, count: int) -> Field:
    """Keep the next ``count`` fields only when the byte value of ``name`` equals ``eq``."""
    return Field(name, FieldKind.SKIP, 1, skip_count=-count, skip_eq=eq)


def _skip(fields: Iterator[Field], count: int) -> None:
    next(islice(fields, count, count), None)


def _value(values: Mapping[str, Any], name: str) -> Any:
    try:
        return values[name]
    except KeyError:
        raise PacketError(f"missing value for field {name!r}") from None


def _should_skip(fld: Field, values: Mapping[str, Any]) -> bool:
    byte = int(_value(values, fld.name)) & 0xFF
    if fld.skip_count > 0:
        return byte == fld.skip_eq
    return byte != fld.skip_eq


def _pack_item(fld: Field, value: Any) -> bytes:
    if fld.kind is FieldKind.UINT:
        number = int(value)
        if not 0 <= number < 1 << (8 * fld.size):
            raise PacketError(f"{fld.name!r} does not fit in {fld.size} unsigned bytes")
        return msgpack.packb(number)
    if fld.kind is FieldKind.SINT:
        number = int(value)
        bound = 1 << (8 * fld.size - 1)
        if not -bound <= number < bound:
            raise PacketError(f"{fld.name!r} does not fit in {fld.size} signed bytes")
        return msgpack.packb(number)
    if fld.kind is FieldKind.REAL:
        return msgpack.packb(float(value), use_single_float=False)
    if fld.kind is FieldKind.HALF:
        return msgpack.packb(float(value), use_single_float=True)
    if fld.kind is FieldKind.ARRAY:
        if fld.size >= PKT_BUFSIZ:
            raise PacketError(f"{fld.name!r} is too big")
        blob = bytes(value)
        if len(blob) != fld.size:
            raise PacketError(f"{fld.name!r} must be exactly {fld.size} bytes")
        return msgpack.packb(compress_rle(blob), use_bin_type=True)
    raise PacketError(f"unsupported field kind {fld.kind}")


def pack_struct(fields: Sequence[Field], values: Mapping[str, Any]) -> bytes:
    """Encode the items of ``values`` described by ``fields``, without an array header."""
    out = bytearray()
    remaining = iter(fields)
    for fld in remaining:
        if fld.kind is FieldKind.SKIP:
            if _should_skip(fld, values):
                count = abs(fld.skip_count)
                out += msgpack.packb(count)
                _skip(remaining, count)
            else:
                out += msgpack.packb(0)
            continue
        out += _pack_item(fld, _value(values, fld.name))
    return bytes(out)


def _is_int(item: Any) -> bool:
    return isinstance(item, int) and not isinstance(item, bool)


def _unpack_item(fld: Field, item: Any) -> Any:
    kind = fld.kind
    if kind is FieldKind.UINT:
        if not (_is_int(item) and item >= 0):
            raise PacketError(f"unexpected item for {fld.name!r}")
        return item & ((1 << (8 * fld.size)) - 1)
    if kind is FieldKind.SINT:
        if not (_is_int(item) and item < 0):
            raise PacketError(f"unexpected item for {fld.name!r}")
        bits = 8 * fld.size
        truncated = item & ((1 << bits) - 1)
        return truncated - (1 << bits) if truncated >= 1 << (bits - 1) else truncated
    if kind is FieldKind.REAL:
        if not isinstance(item, float):
            raise PacketError(f"unexpected item for {fld.name!r}")
        return item
    if kind is FieldKind.HALF:
        if not isinstance(item, float):
            raise PacketError(f"unexpected item for {fld.name!r}")
        return struct.unpack("<f", struct.pack("<f", item))[0] if math.isfinite(item) else item
    if kind is FieldKind.ARRAY:
        if not isinstance(item, bytes):
            raise PacketError(f"unexpected item for {fld.name!r}")
        if len(item) >= PKT_BUFSIZ:
            raise PacketError(f"{fld.name!r} blob is too big")
        try:
            blob = decompress_rle(item)
        except ValueError as exc:
            raise PacketError(f"{fld.name!r} is not valid run-length data") from exc
        if len(blob) != fld.size:
            raise PacketError(f"{fld.name!r} has {len(blob)} bytes, expected {fld.size}")
        return blob
    raise PacketError(f"unsupported field kind {kind}")


def unpack_struct(items: Iterator[Any], fields: Sequence[Field]) -> dict[str, Any]:
    """Read the fields described by ``fields`` from an iterator of decoded items."""
    items = iter(items)
    result: dict[str, Any] = {}
    remaining = iter(fields)
    for fld in remaining:
        try:
            item = next(items)
        except StopIteration:
            raise PacketError(f"message ended before field {fld.name!r}") from None
        if fld.kind is FieldKind.SKIP:
            if not (_is_int(item) and item >= 0):
                raise PacketError(f"unexpected skip marker for {fld.name!r}")
            _skip(remaining, item)
            continue
        result[fld.name] = _unpack_item(fld, item)
    return result


def _open_message(data: bytes, count: int) -> msgpack.Unpacker:
    unpacker = msgpack.Unpacker(raw=False, strict_map_key=False)
    unpacker.feed(bytes(data))
    try:
        size = unpacker.read_array_header()
    except (ValueError, msgpack.UnpackException) as exc:
        raise PacketError("message is not an array") from exc
    if size != count:
        raise PacketError(f"message has {size} elements, expected {count}")
    return unpacker


def _iter_items(unpacker: msgpack.Unpacker) -> Iterator[Any]:
    while True:
        try:
            yield unpacker.unpack()
        except msgpack.OutOfData:
            return
        except (ValueError, msgpack.UnpackException) as exc:
            raise PacketError("malformed message item") from exc


def _expect_end(unpacker: msgpack.Unpacker, length: int) -> None:
    if unpacker.tell() != length:
        raise PacketError("trailing data after message")


def encode_table(fields: Sequence[Field], values: Mapping[str, Any]) -> bytes:
    """Encode a whole message table."""
    header = msgpack.Packer().pack_array_header(len(fields))
    return header + pack_struct(fields, values)


def decode_table(data: bytes, fields: Sequence[Field]) -> dict[str, Any]:
    """Decode a message table produced by :func:`encode_table`."""
    data = bytes(data)
    unpacker = _open_message(data, len(fields))
    result = unpack_struct(_iter_items(unpacker), fields)
    _expect_end(unpacker, len(data))
    return result


def encode_header(msg_id: int, view_id: int, payload: bytes) -> bytes:
    """Wrap an encoded table with its message id and view id."""
    packer = msgpack.Packer(use_bin_type=True)
    return (
        packer.pack_array_header(HEADER_ELEMENTS)
        + packer.pack(int(msg_id))
        + packer.pack(int(view_id))
        + packer.pack(bytes(payload))
    )


def _header_number(item: Any, what: str) -> int:
    if not (_is_int(item) and 0 <= item <= _UINT16_MAX):
        raise PacketError(f"invalid {what}")
    return item


def decode_header(data: bytes) -> PacketHeader:
    """Split a wire message into its header fields and payload."""
    data = bytes(data)
    unpacker = _open_message(data, HEADER_ELEMENTS)
    items = _iter_items(unpacker)
    msg_id = _header_number(next(items, None), "packet id")
    view_id = _header_number(next(items, None), "view id")
    payload = next(items, None)
    if not isinstance(payload, bytes):
        raise PacketError("invalid packet payload")
    _expect_end(unpacker, len(data))
    return PacketHeader(id=msg_id, view_id=view_id, data=payload)


def dump_struct(fields: Sequence[Field], values: Mapping[str, Any]) -> str:
    """Human-readable listing of a message table."""
    lines = ["{"]
    remaining = iter(fields)
    for fld in remaining:
        if fld.kind is FieldKind.SKIP:
            if _should_skip(fld, values):
                _skip(remaining, abs(fld.skip_count))
            continue
        value = _value(values, fld.name)
        if fld.kind in (FieldKind.UINT, FieldKind.SINT):
            text = str(int(value))
        elif fld.kind in (FieldKind.REAL, FieldKind.HALF):
            text = f"{float(value):f}"
        else:
            text = "[" + ", ".join(f"0x{b:02x}" for b in bytes(value)) + "]"
        lines.append(f'  "{fld.name}": {text}')
    lines.append("}")
    return "\n".join(lines) + "\n"


Handler = Callable[[PacketHeader], Any]


class Dispatcher:
    """Routes decoded messages to the handler registered for their id."""

    def __init__(self) -> None:
        self._handlers: dict[int, Handler] = {}

    def register(self, msg_id: int, handler: Handler) -> None:
        self._handlers[int(msg_id)] = handler

    def dispatch(self, data: bytes, udata: Optional[Any] = None) -> Any:
        header = decode_header(data)
        header.udata = udata
        handler = self._handlers.get(header.id)
        if handler is None:
            raise PacketError(f"no handler for packet id {header.id}")
        return handler(header)