# ecoframe

Building blocks for a networked, tile-based 2D sandbox simulation. The modules
hold the parts of a game core that are plain logic, and each of them can be used
on its own.

## Modules

- `ecoframe.assets`: the `AssetId` enumeration of built-in assets and
  `asset_name()`, which returns names such as `"ASSET_PLAYER"`. It raises
  `ValueError` for ids outside the internal range.
- `ecoframe.compress`: the run-length codec `compress_rle()` and
  `decompress_rle()`. Each run is a little-endian 16-bit count followed by the
  byte. Runs longer than 65535 are split.
- `ecoframe.codec`: message encoding on msgpack.
  - Field descriptors: `uint`, `sint`, `real`, `half`, `array`, and the
    conditional `skip_if` and `keep_if`.
  - Table encoding: `pack_struct`, `unpack_struct`, `encode_table`,
    `decode_table` and `dump_struct`.
  - Header framing: `encode_header` and `decode_header`. `decode_header` returns
    a `PacketHeader`.
  - `MessageId`, and `PacketError` for malformed data.
  - A `Dispatcher` that decodes a header and calls the handler registered for
    its id.
- `ecoframe.messages`: the game messages as frozen dataclasses. Each has
  `encode()` and a `decode()` classmethod. The messages are `InitPacket`,
  `WelcomePacket`, `CodePacket`, `KeystatePacket`, `BlockposPacket`,
  `NotificationPacket` and `SwitchViewerPacket`. The module also provides:
  - `encode_librg_update()` and `decode_librg_update()` for layer-tagged world
    blobs.
  - `TimeSmoother`, which caps an interval at twice the average of the last 128
    intervals.
- `ecoframe.physics`: the `Vec2` type, plus `safe_dt`, `tick_var`,
  `physics_correction`, `check_aabb`, `lookahead`, `mass_ratio`, `apply_drag`,
  `integrate` and `closest_interactable`.
- `ecoframe.health`: `Health` and the rules for hazard damage, regeneration,
  applying damage and heal delays. Applying damage returns a `DamageOutcome`.
- `ecoframe.creatures`: `Creature` needs (`check_needs` returns
  `CreatureNeeds`), `seek_velocity` and `roam_velocity`. `roam_velocity` takes
  any object that has `randrange`, such as `random.Random`.
- `ecoframe.profiler`: `Profiler` and `ProfilerKind`. A `Profiler` keeps named
  timers, averages them over a 0.5 s collation window, and ignores the first
  3 s of frames. Both figures can be configured, and so can the clock.
- `ecoframe.input`: the `Action` to key bindings (`get_map`, `is_down`,
  `is_pressed`, `is_released`). Key states are queried through an object that
  follows the `InputBackend` protocol.
- `ecoframe.drawing`: helpers that need no graphics library:
  - `Color`, `lerp` and `blend_color`
  - `texture_path` and `text_spacing`
  - `sprite_frame_rect`
  - circle and rectangle outline segments
  - `SpriteAnimation`
- `ecoframe.netstats`: `BandwidthSampler`. It turns `PeerCounters` into
  `ClientStats`. Bandwidth is a rolling mean of eight measurements, taken about
  once a second.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from ecoframe.codec import Dispatcher, MessageId, encode_header
from ecoframe.messages import WelcomePacket

packet = WelcomePacket(seed=42, ent_id=7, chunk_size=16, world_size=32)
payload = packet.encode()
assert WelcomePacket.decode(payload) == packet

dispatcher = Dispatcher()
dispatcher.register(MessageId.WELCOME, lambda header: WelcomePacket.decode(header.data))
wire = encode_header(MessageId.WELCOME, 0, payload)
assert dispatcher.dispatch(wire) == packet
```

```python
from ecoframe.compress import compress_rle, decompress_rle

data = b"\x00" * 10 + b"\x01\x01"
assert compress_rle(data) == b"\x0a\x00\x00\x02\x00\x01"
assert decompress_rle(compress_rle(data)) == data
```

```python
from ecoframe.profiler import Profiler, ProfilerKind

profiler = Profiler(warmup=0.0)
with profiler.measure(ProfilerKind.RENDER):
    ...
profiler.collate(frame_time=0.5)
print(profiler.name(ProfilerKind.RENDER), profiler.delta(ProfilerKind.RENDER))
```

## What it does not do

ecoframe has no window, renderer, sound or command-line program. It has no
network transport either: messages are encoded to bytes and decoded from bytes,
and sending them is left to the caller. `BandwidthSampler` only works on the
counters it is given. The package does not hold a world, chunks, blocks or an
entity store. The physics, health and creature functions work on the values
passed to them, and the caller decides which entities they apply to.