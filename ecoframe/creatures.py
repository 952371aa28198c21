"""Needs and movement of the demo creatures."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from ecoframe.physics import Vec2, safe_dt, tick_var

FOOD_SATISFY_FOR = 200
MATING_SATISFY_FOR = 300
INTERACT_RANGE = 5625.0
SEEK_FOOD_MOVEMENT_SPEED = 0.98
SEEK_MATE_MOVEMENT_SPEED = 0.357
SEEK_ROAM_MOVEMENT_SPEED = 50.0
_STILL_THRESHOLD = 0.1


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


@dataclass
class Creature:
    hunger_satisfied: int = FOOD_SATISFY_FOR
    mating_satisfied: int = MATING_SATISFY_FOR
    life_remaining: int = 0


@dataclass(frozen=True)
class CreatureNeeds:
    seeks_food: bool
    seeks_companion: bool
    dies: bool


def check_needs(creature: Creature) -> CreatureNeeds:
    """Report what the creature needs and tick its counters down.

    A creature that dies of old age keeps its counters unchanged.
    """
    needs = CreatureNeeds(
        seeks_food=creature.hunger_satisfied < 1,
        seeks_companion=creature.mating_satisfied < 1,
        dies=creature.life_remaining < 1,
    )
    if not needs.dies:
        creature.hunger_satisfied = tick_var(creature.hunger_satisfied)
        creature.mating_satisfied = tick_var(creature.mating_satisfied)
        creature.life_remaining = tick_var(creature.life_remaining)
    return needs


def seek_velocity(origin: Vec2, target: Vec2) -> Vec2:
    """Velocity drifting a creature from ``origin`` toward ``target``."""
    return (target - origin) * SEEK_MATE_MOVEMENT_SPEED


def roam_velocity(velocity: Vec2, dt: float, steer_speed: float, rng: RandomSource) -> Vec2:
    """Next velocity of a wandering creature.

    Near-zero components are replaced by a random speed in 0..4, then the
    velocity is pushed along its direction and steered by a random angle.
    """
    magnitude_sq = velocity.x * velocity.x + velocity.y * velocity.y
    inv_len = 1.0 / math.sqrt(magnitude_sq) if magnitude_sq > 0.0 else 0.0
    vx, vy = velocity.x, velocity.y
    if abs(vx) < _STILL_THRESHOLD:
        vx = float(rng.randrange(5))
    if abs(vy) < _STILL_THRESHOLD:
        vy = float(rng.randrange(5))
    step = safe_dt(dt)
    angle_x = math.radians(float(rng.randrange(360)))
    vx += vx * inv_len * SEEK_ROAM_MOVEMENT_SPEED * step + math.cos(angle_x) * steer_speed * step
    angle_y = math.radians(float(rng.randrange(360)))
    vy += vy * inv_len * SEEK_ROAM_MOVEMENT_SPEED * step + math.sin(angle_y) * steer_speed * step
    return Vec2(vx, vy)