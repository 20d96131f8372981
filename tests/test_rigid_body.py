import math

import numpy as np
import pytest

from compflow.eos import cons_to_prim
from compflow.rigid_body import RigidState, initial_conditions, rigid_state


@pytest.mark.parametrize("case_id", [1, 2, 3, 4])
def test_shock_cases_have_static_body(case_id):
    state = rigid_state(case_id, 0.3, 0.4)
    assert state == RigidState((0.6, 0.5), (0.0, 0.0))


def test_case_5_static_circle():
    assert rigid_state(5, 0.7, 1.0) == RigidState((0.5, 0.5), (0.0, 0.0))


def test_case_6_moves_left_at_unit_speed():
    start = rigid_state(6, 0.0, 1.0)
    later = rigid_state(6, 0.25, 1.0)
    assert start.center == pytest.approx((1.5, 0.5))
    assert later.velocity == (-1.0, 0.0)
    assert start.center[0] - later.center[0] == pytest.approx(0.25)


def test_case_7_track_points():
    assert rigid_state(7, 0.0, 1.0).center == pytest.approx((0.2, 0.5))
    assert rigid_state(7, 0.25, 1.0).center == pytest.approx((0.5, 0.2))
    assert rigid_state(7, 0.5, 1.0).center == pytest.approx((0.8, 0.5))
    assert rigid_state(7, 0.75, 1.0).center == pytest.approx((0.5, 0.8))


@pytest.mark.parametrize("t", [0.0, 0.1, 0.37, 0.9])
def test_case_7_circular_motion_invariants(t):
    t_stop = 2.0
    state = rigid_state(7, t, t_stop)
    rx, ry = state.center[0] - 0.5, state.center[1] - 0.5
    vx, vy = state.velocity
    assert math.hypot(rx, ry) == pytest.approx(0.3)
    assert math.hypot(vx, vy) == pytest.approx(2 * math.pi * 0.3 / t_stop)
    assert rx * vx + ry * vy == pytest.approx(0.0, abs=1e-12)


def test_unknown_case_raises():
    with pytest.raises(ValueError):
        rigid_state(9, 0.0, 1.0)
    with pytest.raises(ValueError):
        initial_conditions(4, 4, 0.0, 0.25, 1.4, 0.0, 0)


def test_shock_initial_data():
    u = initial_conditions(10, 6, 0.0, 0.1, 1.4, 0.0, 1)
    assert u.shape == (14, 10, 4)
    prim = cons_to_prim(u, 1.4, 0.0)
    assert np.allclose(prim[2, 3], [1.3764, 0.394, 0.0, 1.5698])
    assert np.allclose(prim[3, 5], [1.3764, 0.394, 0.0, 1.5698])
    assert np.allclose(prim[4, 3], [1.0, 0.0, 0.0, 1.0])
    assert np.allclose(prim[11, 7], [1.0, 0.0, 0.0, 1.0])
    assert np.array_equal(u[0], u[2])
    assert np.array_equal(u[13], u[11])
    assert np.array_equal(u[5, 0], u[5, 2])


def test_stream_initial_data_fills_ghosts():
    u = initial_conditions(5, 5, 0.0, 0.2, 1.4, 0.0, 5)
    prim = cons_to_prim(u, 1.4, 0.0)
    assert np.allclose(prim, np.broadcast_to([1.0, 1.0, 0.0, 1.0], prim.shape))


def test_reflective_case_with_still_fluid():
    u = initial_conditions(6, 6, 0.0, 1.0 / 6, 1.4, 0.0, 7)
    prim = cons_to_prim(u, 1.4, 0.0)
    assert np.allclose(prim, np.broadcast_to([1.0, 0.0, 0.0, 1.0], prim.shape))