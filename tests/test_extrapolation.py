import numpy as np
import pytest

from compflow.extrapolation import constant_extrapolation
from compflow.levelset import level_set, locate_interface


def _circle_setup(n=20, dx=0.05):
    phi = level_set((0.6, 0.5), n, n, 0.0, 0.0, dx, dx, 1)
    marks = locate_interface(phi)
    return phi, marks


def test_uniform_state_fills_ghost_region():
    phi, marks = _circle_setup()
    state = np.array([1.0, 0.5, 0.0, 2.5])
    u = np.tile(state, (24, 24, 1))
    ghost = (marks == 0) & (phi < 0)
    assert ghost.any()
    result = constant_extrapolation(u, phi, marks, 0.05, 0.05)
    assert result is u
    assert np.allclose(u, state)


def test_fluid_and_interface_cells_are_untouched():
    phi, marks = _circle_setup()
    rng = np.random.default_rng(7)
    u = 1.0 + rng.random((24, 24, 4))
    before = u.copy()
    constant_extrapolation(u, phi, marks, 0.05, 0.05)
    kept = (marks == 1) | (phi >= 0)
    assert np.array_equal(u[kept], before[kept])


def test_ghost_values_lie_within_interface_ghost_values():
    phi, marks = _circle_setup()
    rng = np.random.default_rng(3)
    u = 1.0 + rng.random((24, 24, 4))
    constant_extrapolation(u, phi, marks, 0.05, 0.05)
    sources = u[(marks == 1) & (phi < 0)]
    filled = u[(marks == 0) & (phi < 0)]
    assert filled.size > 0
    assert np.all(filled <= sources.max(axis=0) + 1e-9)
    assert np.all(filled >= sources.min(axis=0) - 1e-9)


def test_flat_level_set_leaves_reset_value():
    phi = -np.ones((8, 8))
    marks = np.zeros((8, 8), dtype=int)
    u = np.random.default_rng(0).random((8, 8, 4))
    result = constant_extrapolation(u, phi, marks, 0.1, 0.1)
    assert result is u
    assert np.array_equal(result, np.full((8, 8, 4), 10000.0))


def test_mismatched_shapes_are_rejected():
    with pytest.raises(ValueError):
        constant_extrapolation(np.zeros((6, 6, 4)), np.ones((7, 7)),
                               np.zeros((7, 7), dtype=int), 0.1, 0.1)