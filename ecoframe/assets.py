"""Identifiers of the built-in game assets."""

from __future__ import annotations

from enum import IntEnum

ASSET_INVALID = 0xFF


class AssetId(IntEnum):
    """Numeric identifiers of internal assets, in their fixed order."""

    EMPTY = 0
    BLANK = 1
    BLOCK_FRAME = 2
    BUILDMODE_HIGHLIGHT = 3
    PLAYER = 4
    THING = 5
    CREATURE = 6
    CREATURE_FOOD = 7
    CHEST = 8
    SPLITTER = 9
    ASSEMBLER = 10
    FURNACE = 11
    CRAFTBENCH = 12
    BLUEPRINT_BEGIN = 13
    BLUEPRINT = 14
    BLUEPRINT_DEMO_HOUSE = 15
    BLUEPRINT_END = 16
    FENCE = 17
    DEV = 18
    GROUND = 19
    DIRT = 20
    WATER = 21
    LAVA = 22
    WALL = 23
    HILL = 24
    HILL_SNOW = 25
    HOLE = 26
    WOOD = 27
    TREE = 28
    COAL = 29
    IRON_ORE = 30
    IRON_INGOT = 31
    IRON_PLATES = 32
    SCREWS = 33
    LOG = 34
    PLANK = 35
    TEST_TALL = 36
    BELT = 37
    BELT_LEFT = 38
    BELT_RIGHT = 39
    BELT_UP = 40
    BELT_DOWN = 41
    MAX_INTERNAL_ASSETS = 42
    NEXT_FREE_ASSET = 42
    MAX_ASSETS = 255


def asset_name(asset_id: int) -> str:
    """Return the symbolic name (e.g. ``ASSET_PLAYER``) of an internal asset."""
    if not 0 <= int(asset_id) < AssetId.MAX_INTERNAL_ASSETS:
        raise ValueError(f"not an internal asset id: {asset_id}")
    return f"ASSET_{AssetId(int(asset_id)).name}"