"""Health, damage and regeneration rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ecoframe.physics import tick_var

HAZARD_BLOCK_DMG = 5.0
HEAL_DELAY = 10


@dataclass
class Health:
    hp: float
    max_hp: float
    dmg: float = 0.0


@dataclass(frozen=True)
class DamageOutcome:
    """What happened when pending damage was applied."""

    heal_delay: int
    dead: bool


def hurt_on_hazard(health: Health, on_hazard: bool) -> bool:
    """Queue hazard damage if standing on a hazardous block; return whether it was."""
    if on_hazard:
        health.dmg += HAZARD_BLOCK_DMG
    return on_hazard


def regenerate(health: Health, amount: float) -> bool:
    """Restore up to ``amount`` hp without exceeding the maximum.

    Returns True when the health changed.
    """
    if health.hp < health.max_hp:
        health.hp = min(health.max_hp, health.hp + amount)
        return True
    return False


def process_damage(health: Health) -> Optional[DamageOutcome]:
    """Apply pending damage, or return None when there is none."""
    if health.dmg <= 0.0:
        return None
    health.hp = max(health.hp - health.dmg, 0.0)
    health.dmg = 0.0
    return DamageOutcome(heal_delay=HEAL_DELAY, dead=health.hp <= 0.0)


def tick_heal_delay(delay: int) -> Optional[int]:
    """Count a heal delay down; None means the delay has run out."""
    remaining = tick_var(delay)
    return remaining if remaining > 0 else None