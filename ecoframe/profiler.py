"""Accumulating timers for named parts of the main loop."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterator

COLLATE_WINDOW = 0.5
DEFAULT_WARMUP = 3.0


class ProfilerKind(IntEnum):
    TOTAL_TIME = 0
    MAIN_LOOP = 1
    WORLD_WRITE = 2
    RENDER = 3
    UPDATE_SYSTEMS = 4
    ENTITY_LERP = 5
    INTEGRATE_POS = 6
    PHYS_BLOCK_COLS = 7
    PHYS_BODY_COLS = 8
    RENDER_PUSH_AND_SORT_ENTRIES = 9


_NAMES = {
    ProfilerKind.TOTAL_TIME: "measured time",
    ProfilerKind.MAIN_LOOP: "main loop",
    ProfilerKind.WORLD_WRITE: "world write",
    ProfilerKind.RENDER: "render",
    ProfilerKind.UPDATE_SYSTEMS: "update systems",
    ProfilerKind.ENTITY_LERP: "entity lerp",
    ProfilerKind.INTEGRATE_POS: "entity movement",
    ProfilerKind.PHYS_BLOCK_COLS: "block collisions",
    ProfilerKind.PHYS_BODY_COLS: "body collisions",
    ProfilerKind.RENDER_PUSH_AND_SORT_ENTRIES: "push&sort entries",
}


@dataclass
class _Slot:
    num_invocations: int = 0
    start_time: float = 0.0
    delta_time: float = 0.0
    total_time: float = 0.0


class Profiler:
    """Collects per-kind timings and averages them over a collate window."""

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter,
        warmup: float = DEFAULT_WARMUP,
        window: float = COLLATE_WINDOW,
    ) -> None:
        self._clock = clock
        self._warmup = warmup
        self._window = window
        self._slots = {kind: _Slot() for kind in ProfilerKind}
        self._frame_counter = 0.0
        self._frames = 0

    def reset(self, kind: ProfilerKind) -> None:
        slot = self._slots[ProfilerKind(kind)]
        slot.num_invocations = 0
        slot.total_time = 0.0

    def start(self, kind: ProfilerKind) -> None:
        self._slots[ProfilerKind(kind)].start_time = self._clock()

    def stop(self, kind: ProfilerKind) -> None:
        slot = self._slots[ProfilerKind(kind)]
        slot.num_invocations += 1
        slot.total_time += self._clock() - slot.start_time
        slot.start_time = 0.0

    @contextmanager
    def measure(self, kind: ProfilerKind) -> Iterator[None]:
        """Time the enclosed block under ``kind``."""
        self.start(kind)
        try:
            yield
        finally:
            self.stop(kind)

    def collate(self, frame_time: float) -> None:
        """Account one frame of ``frame_time`` seconds and refresh averages."""
        measured = [k for k in ProfilerKind if k != ProfilerKind.TOTAL_TIME]
        if self._warmup > 0:
            self._warmup -= frame_time
            for kind in measured:
                self.reset(kind)
            return

        self._frame_counter += frame_time
        self._frames += 1
        if self._frame_counter >= self._window:
            self._slots[ProfilerKind.TOTAL_TIME].delta_time = self._frame_counter / self._frames
            for kind in measured:
                slot = self._slots[kind]
                slot.delta_time = (
                    slot.total_time / slot.num_invocations if slot.num_invocations else 0.0
                )
            self._frame_counter = 0.0
            self._frames = 0

    def delta(self, kind: ProfilerKind) -> float:
        return self._slots[ProfilerKind(kind)].delta_time

    def name(self, kind: ProfilerKind) -> str:
        return _NAMES[ProfilerKind(kind)]