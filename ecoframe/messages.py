"""Typed game messages and their table encodings."""

from __future__ import annotations

import struct
from collections import deque
from dataclasses import dataclass
from typing import ClassVar

import msgpack

from ecoframe.codec import (
    Field,
    MessageId,
    PacketError,
    array,
    decode_table,
    encode_table,
    real,
    uint,
)

MAX_PLACEMENTS = 20
CODE_PARAMS = 4
CODE_DATA_SIZE = 128
TITLE_SIZE = 64
TEXT_SIZE = 1024
SMOOTH_SAMPLES = 128

_PARAMS = struct.Struct(f"<{CODE_PARAMS}I")
_PLACEMENT = struct.Struct("<ff")
_UINT32_MAX = 0xFFFFFFFF
_UINT8_MAX = 0xFF


def _fixed_bytes(value: bytes, size: int, name: str) -> bytes:
    blob = bytes(value)
    if len(blob) > size:
        raise ValueError(f"{name} holds at most {size} bytes")
    return blob.ljust(size, b"\0")


def _c_string(text: str, size: int) -> bytes:
    return text.encode("utf-8")[:size].ljust(size, b"\0")


def _read_c_string(blob: bytes) -> str:
    return blob.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass(frozen=True)
class InitPacket:
    """Sent by a client to ask for a player entity in a view."""

    view_id: int

    MESSAGE_ID: ClassVar[MessageId] = MessageId.INIT
    FIELDS: ClassVar[tuple[Field, ...]] = (uint("view_id", 2),)

    def encode(self) -> bytes:
        return encode_table(self.FIELDS, {"view_id": self.view_id})

    @classmethod
    def decode(cls, data: bytes) -> InitPacket:
        values = decode_table(data, cls.FIELDS)
        return cls(view_id=values["view_id"])


@dataclass(frozen=True)
class WelcomePacket:
    """Server reply describing the world a client has joined."""

    seed: int
    ent_id: int
    chunk_size: int
    world_size: int

    MESSAGE_ID: ClassVar[MessageId] = MessageId.WELCOME
    FIELDS: ClassVar[tuple[Field, ...]] = (
        uint("seed", 4),
        uint("ent_id", 8),
        uint("chunk_size", 2),
        uint("world_size", 2),
    )

    def encode(self) -> bytes:
        return encode_table(
            self.FIELDS,
            {
                "seed": self.seed,
                "ent_id": self.ent_id,
                "chunk_size": self.chunk_size,
                "world_size": self.world_size,
            },
        )

    @classmethod
    def decode(cls, data: bytes) -> WelcomePacket:
        values = decode_table(data, cls.FIELDS)
        return cls(**values)


@dataclass(frozen=True)
class CodePacket:
    """A coded command with four numeric parameters and a fixed data block."""

    code: int = 0
    params: tuple[int, ...] = (0,) * CODE_PARAMS
    data: bytes = b""

    MESSAGE_ID: ClassVar[MessageId] = MessageId.SEND_CODE
    FIELDS: ClassVar[tuple[Field, ...]] = (
        uint("code", 8),
        array("params", _PARAMS.size),
        array("data", CODE_DATA_SIZE),
    )

    def __post_init__(self) -> None:
        params = tuple(int(p) for p in self.params)
        if len(params) > CODE_PARAMS:
            raise ValueError(f"at most {CODE_PARAMS} params are allowed")
        if any(not 0 <= p <= _UINT32_MAX for p in params):
            raise ValueError("params must fit in 32 unsigned bits")
        params += (0,) * (CODE_PARAMS - len(params))
        object.__setattr__(self, "params", params)
        object.__setattr__(self, "data", _fixed_bytes(self.data, CODE_DATA_SIZE, "data"))

    def encode(self) -> bytes:
        return encode_table(
            self.FIELDS,
            {"code": self.code, "params": _PARAMS.pack(*self.params), "data": self.data},
        )

    @classmethod
    def decode(cls, data: bytes) -> CodePacket:
        values = decode_table(data, cls.FIELDS)
        return cls(
            code=values["code"],
            params=_PARAMS.unpack(values["params"]),
            data=values["data"],
        )


_KEYSTATE_FLAGS = (
    "use",
    "sprint",
    "ctrl",
    "pick",
    "storage_action",
    "selected_item",
    "storage_selected_item",
    "drop",
    "swap",
    "swap_storage",
    "swap_from",
    "swap_to",
)


@dataclass(frozen=True)
class KeystatePacket:
    """Client input for one frame: movement, inventory actions and placements."""

    x: float = 0.0
    y: float = 0.0
    mx: float = 0.0
    my: float = 0.0
    use: int = 0
    sprint: int = 0
    ctrl: int = 0
    pick: int = 0
    storage_action: int = 0
    selected_item: int = 0
    storage_selected_item: int = 0
    drop: int = 0
    swap: int = 0
    swap_storage: int = 0
    swap_from: int = 0
    swap_to: int = 0
    craft_item: int = 0
    placement_num: int = 0
    deletion_mode: int = 0
    placements: tuple[tuple[float, float], ...] = ()

    MESSAGE_ID: ClassVar[MessageId] = MessageId.SEND_KEYSTATE
    FIELDS: ClassVar[tuple[Field, ...]] = (
        real("x", 4),
        real("y", 4),
        real("mx", 4),
        real("my", 4),
        *(uint(name, 1) for name in _KEYSTATE_FLAGS),
        uint("craft_item", 2),
        uint("placement_num", 1),
        uint("deletion_mode", 1),
        array("placements", MAX_PLACEMENTS * _PLACEMENT.size),
    )

    def __post_init__(self) -> None:
        placements = tuple((float(px), float(py)) for px, py in self.placements)
        if len(placements) > MAX_PLACEMENTS:
            raise ValueError(f"at most {MAX_PLACEMENTS} placements are allowed")
        object.__setattr__(self, "placements", placements)

    def encode(self) -> bytes:
        blob = b"".join(_PLACEMENT.pack(px, py) for px, py in self.placements)
        values = {f.name: getattr(self, f.name) for f in self.FIELDS[:-1]}
        values["placements"] = blob.ljust(MAX_PLACEMENTS * _PLACEMENT.size, b"\0")
        return encode_table(self.FIELDS, values)

    @classmethod
    def decode(cls, data: bytes) -> KeystatePacket:
        values = decode_table(data, cls.FIELDS)
        count = min(values["placement_num"], MAX_PLACEMENTS)
        pairs = list(_PLACEMENT.iter_unpack(values.pop("placements")))[:count]
        return cls(**values, placements=tuple(pairs))


@dataclass(frozen=True)
class BlockposPacket:
    """Position of the block under the client's cursor."""

    mx: float
    my: float

    MESSAGE_ID: ClassVar[MessageId] = MessageId.SEND_BLOCKPOS
    FIELDS: ClassVar[tuple[Field, ...]] = (real("mx", 4), real("my", 4))

    def encode(self) -> bytes:
        return encode_table(self.FIELDS, {"mx": self.mx, "my": self.my})

    @classmethod
    def decode(cls, data: bytes) -> BlockposPacket:
        values = decode_table(data, cls.FIELDS)
        return cls(mx=values["mx"], my=values["my"])


@dataclass(frozen=True)
class NotificationPacket:
    """A titled notice shown to a player; both texts are cut to their fixed sizes."""

    title: str
    text: str

    MESSAGE_ID: ClassVar[MessageId] = MessageId.SEND_NOTIFICATION
    FIELDS: ClassVar[tuple[Field, ...]] = (
        array("title", TITLE_SIZE),
        array("text", TEXT_SIZE),
    )

    def encode(self) -> bytes:
        return encode_table(
            self.FIELDS,
            {"title": _c_string(self.title, TITLE_SIZE), "text": _c_string(self.text, TEXT_SIZE)},
        )

    @classmethod
    def decode(cls, data: bytes) -> NotificationPacket:
        values = decode_table(data, cls.FIELDS)
        return cls(title=_read_c_string(values["title"]), text=_read_c_string(values["text"]))


@dataclass(frozen=True)
class SwitchViewerPacket:
    """Asks the server to make another of the client's views the active one."""

    view_id: int

    MESSAGE_ID: ClassVar[MessageId] = MessageId.SWITCH_VIEWER
    FIELDS: ClassVar[tuple[Field, ...]] = (uint("view_id", 2),)

    def encode(self) -> bytes:
        return encode_table(self.FIELDS, {"view_id": self.view_id})

    @classmethod
    def decode(cls, data: bytes) -> SwitchViewerPacket:
        values = decode_table(data, cls.FIELDS)
        return cls(view_id=values["view_id"])


def encode_librg_update(data: bytes, layer_id: int) -> bytes:
    """Wrap a world-state blob together with the layer it belongs to."""
    layer_id = int(layer_id)
    if not 0 <= layer_id <= _UINT8_MAX:
        raise PacketError("layer id must fit in one byte")
    packer = msgpack.Packer(use_bin_type=True)
    return packer.pack_array_header(2) + packer.pack(layer_id) + packer.pack(bytes(data))


def decode_librg_update(payload: bytes) -> tuple[int, bytes]:
    """Split a world-state update into ``(layer_id, blob)``."""
    unpacker = msgpack.Unpacker(raw=False)
    unpacker.feed(bytes(payload))
    try:
        size = unpacker.read_array_header()
        layer = unpacker.unpack() if size == 2 else None
        blob = unpacker.unpack() if size == 2 else None
    except (msgpack.OutOfData, msgpack.UnpackException, ValueError) as exc:
        raise PacketError("malformed world update") from exc
    if size != 2:
        raise PacketError(f"world update has {size} elements, expected 2")
    if not isinstance(layer, int) or isinstance(layer, bool) or layer < 0:
        raise PacketError("invalid layer id")
    if not isinstance(blob, bytes):
        raise PacketError("invalid world update blob")
    return layer & _UINT8_MAX, blob


class TimeSmoother:
    """Caps update intervals at twice the average of the recent ones."""

    def __init__(self, samples: int = SMOOTH_SAMPLES) -> None:
        self._samples: deque[float] = deque([0.0] * samples, maxlen=samples)

    def smooth(self, time: float) -> float:
        self._samples.append(time)
        average = sum(self._samples) / len(self._samples)
        return min(time, average * 2)