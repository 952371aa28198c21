import pytest

from ecoframe.assets import ASSET_INVALID, AssetId, asset_name


def test_first_asset_is_zero():
    assert asset_name(0) == "ASSET_EMPTY"
    assert AssetId(0) is AssetId.EMPTY


def test_internal_assets_end_after_last_belt():
    assert asset_name(AssetId.MAX_INTERNAL_ASSETS - 1) == "ASSET_BELT_DOWN"
    assert AssetId(AssetId.BELT_DOWN + 1) is AssetId.NEXT_FREE_ASSET


def test_max_assets_and_invalid():
    assert AssetId(255) is AssetId.MAX_ASSETS
    assert ASSET_INVALID == 0xFF
    with pytest.raises(ValueError):
        asset_name(AssetId.MAX_ASSETS)


def test_asset_name_uses_macro_name():
    assert asset_name(AssetId.PLAYER) == "ASSET_PLAYER"


def test_asset_name_round_trip():
    for value in range(AssetId.MAX_INTERNAL_ASSETS):
        name = asset_name(value)
        assert name.startswith("ASSET_")
        assert AssetId[name[len("ASSET_"):]] == value


def test_asset_name_rejects_invalid():
    with pytest.raises(ValueError):
        asset_name(ASSET_INVALID)
    with pytest.raises(ValueError):
        asset_name(AssetId.MAX_INTERNAL_ASSETS)