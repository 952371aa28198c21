import math

import pytest

from ecoframe.physics import (
    INFINITE_MASS,
    LOOKAHEAD_DISTANCE,
    MAX_SAFE_DT,
    Vec2,
    apply_drag,
    check_aabb,
    closest_interactable,
    integrate,
    lookahead,
    mass_ratio,
    physics_correction,
    safe_dt,
    tick_var,
)


def test_safe_dt_passes_small_values():
    assert safe_dt(0.01) == 0.01


def test_safe_dt_caps_large_values():
    assert safe_dt(1.0) == MAX_SAFE_DT
    assert safe_dt(1.0) == 0.03334


@pytest.mark.parametrize("value", [1, 2, 7, 100])
def test_tick_var_counts_down_by_one(value):
    assert tick_var(value) + 1 == value


def test_tick_var_stops_at_zero():
    assert tick_var(0) == 0


def test_lookahead_follows_sign():
    assert lookahead(3.0) == LOOKAHEAD_DISTANCE
    assert lookahead(-2.0) == -LOOKAHEAD_DISTANCE
    assert lookahead(0.0) == 16.0


def test_check_aabb_overlap():
    assert check_aabb(0, 2, 0, 2, 1, 3, 1, 3)


def test_check_aabb_disjoint():
    assert not check_aabb(0, 1, 0, 1, 5, 6, 5, 6)


def test_check_aabb_touching_edges_do_not_overlap():
    assert not check_aabb(0, 1, 0, 1, 1, 2, 0, 1)


def test_check_aabb_symmetric():
    a = (0, 4, 0, 4)
    b = (3, 5, -1, 1)
    assert check_aabb(*a, *b) == check_aabb(*b, *a)


def test_physics_correction_outside_block_only_bounces():
    assert physics_correction(20.0, 5.0, 0.5, 8.0) == pytest.approx(-5.0 * 0.5)


def test_physics_correction_pushes_away_from_center():
    right = physics_correction(1.0, 0.0, 0.0, 8.0)
    left = physics_correction(-1.0, 0.0, 0.0, 8.0)
    assert right > 0
    assert left == pytest.approx(-right)


def test_mass_ratio_equal_masses():
    assert mass_ratio(3.0, 3.0) == 1.0


def test_mass_ratio_against_immovable_body():
    assert mass_ratio(4.0, INFINITE_MASS) == 1.0


def test_mass_ratio_immovable_body_barely_moves():
    ratio = mass_ratio(INFINITE_MASS, 5.0)
    assert 0.0 < ratio < 1e-30


def test_apply_drag_leaves_resting_body():
    v = Vec2(0.0001, -0.0002)
    assert apply_drag(v, Vec2(), 1.0, 1.0, 0.02) == v


def test_apply_drag_without_drag_keeps_velocity():
    v = Vec2(10.0, -4.0)
    assert apply_drag(v, Vec2(), 0.0, 1.0, 0.02) == v


def test_apply_drag_moves_toward_block_velocity():
    v = Vec2(10.0, -4.0)
    target = Vec2(2.0, 1.0)
    new = apply_drag(v, target, 1.0, 1.0, 0.02)
    assert (new - target).length() < (v - target).length()


def test_apply_drag_caps_dt():
    v = Vec2(10.0, 10.0)
    assert apply_drag(v, Vec2(), 1.0, 1.0, 5.0) == apply_drag(v, Vec2(), 1.0, 1.0, MAX_SAFE_DT)


def test_integrate_without_velocity_keeps_position():
    p = Vec2(3.0, 4.0)
    assert integrate(p, Vec2(), 0.02) == p


def test_integrate_moves_along_velocity():
    new = integrate(Vec2(1.0, 2.0), Vec2(10.0, 0.0), 0.01)
    assert new.x == pytest.approx(1.1)
    assert new.y == 2.0


def test_integrate_caps_dt():
    p, v = Vec2(0.0, 0.0), Vec2(100.0, -50.0)
    assert integrate(p, v, 2.0) == integrate(p, v, MAX_SAFE_DT)


def test_closest_interactable_picks_nearest():
    origin = Vec2(0.0, 0.0)
    entities = [(1, Vec2(20.0, 0.0)), (2, Vec2(5.0, 5.0)), (3, Vec2(0.0, 30.0))]
    assert closest_interactable(origin, entities) == 2


def test_closest_interactable_ignores_out_of_range():
    assert closest_interactable(Vec2(), [(1, Vec2(100.0, 0.0))]) is None


def test_closest_interactable_skips_missing_positions():
    assert closest_interactable(Vec2(), [(1, None), (2, Vec2(1.0, 1.0))]) == 2


def test_closest_interactable_first_wins_tie():
    entities = [(7, Vec2(3.0, 0.0)), (8, Vec2(0.0, 3.0))]
    assert closest_interactable(Vec2(), entities) == 7


def test_closest_interactable_custom_range():
    entities = [(1, Vec2(50.0, 0.0))]
    assert closest_interactable(Vec2(), entities, max_range=60.0) == 1


def test_vec2_length():
    assert Vec2(3.0, 4.0).length() == pytest.approx(math.hypot(3.0, 4.0))