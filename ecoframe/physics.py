"""Movement and collision math shared by the simulation systems."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Hashable, Iterable, Optional, TypeVar

TICK_RATE = 1.0 / 20.0
MAX_SAFE_DT = 0.03334
WALK_DRAG = 4.23
LOOKAHEAD_DISTANCE = 16.0
MOVING_THRESHOLD = 0.001
PLAYER_MAX_INTERACT_RANGE = 35.0
INFINITE_MASS = math.inf
F32_MAX = 3.4028234663852886e38

EntityT = TypeVar("EntityT", bound=Hashable)


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.hypot(self.x, self.y)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _imposed(component: float) -> float:
    """Block-imposed velocity component; a negative zero counts as zero."""
    magnitude = max(0.0, abs(component))
    return magnitude if component >= 0.0 else -magnitude


def safe_dt(delta_time: float) -> float:
    """Frame delta capped so a slow frame cannot make bodies tunnel."""
    return min(delta_time, MAX_SAFE_DT)


def tick_var(value: int) -> int:
    """Count a tick-based timer down by one, never below zero."""
    return max(value - 1, 0)


def physics_correction(x: float, vx: float, bounce: float, dim: float) -> float:
    """Velocity that pushes a body out of a block it penetrates."""
    push = max(0.0, dim - abs(x)) * dim
    if x < 0.0:
        push = -push
    return push - vx * bounce


def check_aabb(
    a1x: float, a2x: float, a1y: float, a2y: float,
    b1x: float, b2x: float, b1y: float, b2y: float,
) -> bool:
    """Whether two axis-aligned boxes overlap (touching edges do not count)."""
    return a1x < b2x and a2x > b1x and a1y < b2y and a2y > b1y


def lookahead(v: float) -> float:
    """Distance ahead of a body, in the direction of ``v``, to probe for blocks."""
    return LOOKAHEAD_DISTANCE if v >= 0.0 else -LOOKAHEAD_DISTANCE


def mass_ratio(mass: float, other_mass: float) -> float:
    """Share of a collision response that a body of ``mass`` takes from ``other_mass``."""
    m1 = mass if other_mass == INFINITE_MASS else other_mass
    m2 = (F32_MAX - 1.0) if mass == INFINITE_MASS else mass
    return m1 / m2


def apply_drag(
    velocity: Vec2, block_velocity: Vec2, drag: float, friction: float, dt: float
) -> Vec2:
    """Pull ``velocity`` toward the velocity imposed by the block underneath.

    ``dt`` is the raw frame delta; it is capped with :func:`safe_dt`.
    A body that is practically at rest is left untouched.
    """
    if abs(velocity.x) < MOVING_THRESHOLD and abs(velocity.y) < MOVING_THRESHOLD:
        return velocity
    drag = min(max(drag, 0.0), 1.0)
    t = WALK_DRAG * drag * friction * safe_dt(dt)
    target_x = _imposed(block_velocity.x)
    target_y = _imposed(block_velocity.y)
    return Vec2(_lerp(velocity.x, target_x, t), _lerp(velocity.y, target_y, t))


def integrate(position: Vec2, velocity: Vec2, dt: float) -> Vec2:
    """Advance ``position`` by ``velocity`` over the capped frame delta."""
    step = safe_dt(dt)
    return Vec2(position.x + velocity.x * step, position.y + velocity.y * step)


def closest_interactable(
    origin: Vec2,
    positions: Iterable[tuple[EntityT, Optional[Vec2]]],
    max_range: float = PLAYER_MAX_INTERACT_RANGE,
) -> Optional[EntityT]:
    """Entity nearest to ``origin`` within ``max_range``, or None.

    ``positions`` yields ``(entity, position)`` pairs; entities without a
    position are ignored. On a tie the first entity wins.
    """
    closest: Optional[EntityT] = None
    best = F32_MAX
    for entity, position in positions:
        if position is None:
            continue
        distance = (position - origin).length()
        if distance <= max_range and distance < best:
            best = distance
            closest = entity
    return closest