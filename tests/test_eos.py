import math

import numpy as np
import pytest

from compflow.eos import cons_to_prim, normal_vector, prim_to_cons


def test_prim_to_cons_at_rest():
    cons = prim_to_cons([1.0, 0.0, 0.0, 1.0], 1.4)
    assert cons == pytest.approx([1.0, 0.0, 0.0, 2.5])


def test_prim_to_cons_momentum():
    cons = prim_to_cons([2.0, 3.0, -1.0, 1.0], 1.4)
    assert cons[0] == pytest.approx(2.0)
    assert cons[1] == pytest.approx(6.0)
    assert cons[2] == pytest.approx(-2.0)


@pytest.mark.parametrize("p_inf", [0.0, 0.5, 3.0])
@pytest.mark.parametrize("prim", [
    [1.0, 0.0, 0.0, 1.0],
    [0.125, 0.3, -0.7, 0.1],
    [1.3764, 0.394, 0.0, 1.5698],
])
def test_round_trip(prim, p_inf):
    back = cons_to_prim(prim_to_cons(prim, 1.4, p_inf), 1.4, p_inf)
    assert back == pytest.approx(prim)


def test_p_inf_raises_energy():
    plain = prim_to_cons([1.0, 0.0, 0.0, 1.0], 1.4, 0.0)
    stiff = prim_to_cons([1.0, 0.0, 0.0, 1.0], 1.4, 1.0)
    assert stiff[3] - plain[3] == pytest.approx(1.4 / 0.4)


def test_vectorised_over_grid():
    grid = np.empty((3, 5, 4))
    grid[...] = [1.0, 0.5, -0.25, 2.0]
    cons = prim_to_cons(grid, 1.4)
    assert cons.shape == (3, 5, 4)
    assert cons_to_prim(cons, 1.4) == pytest.approx(grid)


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        prim_to_cons([1.0, 2.0, 3.0], 1.4)
    with pytest.raises(ValueError):
        cons_to_prim([1.0, 2.0], 1.4)


def test_normal_vector_linear_in_x():
    phi = [[float(i) for _ in range(3)] for i in range(3)]
    assert normal_vector(phi, 1, 1, 0.1, 0.1) == pytest.approx((1.0, 0.0))


def test_normal_vector_flat_is_zero():
    phi = np.zeros((3, 3))
    assert normal_vector(phi, 1, 1, 0.1, 0.2) == (0.0, 0.0)


def test_normal_vector_is_unit_and_points_outward():
    xs = np.arange(5) * 0.1
    phi = np.sqrt((xs[:, None] - 0.05) ** 2 + (xs[None, :] - 0.05) ** 2)
    n_x, n_y = normal_vector(phi, 3, 2, 0.1, 0.1)
    assert math.hypot(n_x, n_y) == pytest.approx(1.0)
    assert n_x > 0 and n_y > 0