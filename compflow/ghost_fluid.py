"""Riemann-problem based ghost fluid states next to a rigid-body interface."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from compflow.eos import cons_to_prim, normal_vector
from compflow.riemann import RiemannSolver

__all__ = ["bilinear", "interpolate_state", "interface_probe_state", "ghost_state"]


def bilinear(q11, q12, q21, q22, x1: float, x2: float, y1: float, y2: float,
             x: float, y: float):
    """Bilinear interpolation of corner values q(x1, y1) ... q(x2, y2) at (x, y).

    The corner values may be scalars or arrays of equal shape.
    """
    wx1 = (x2 - x) / (x2 - x1)
    wx2 = (x - x1) / (x2 - x1)
    q_y1 = wx1 * q11 + wx2 * q21
    q_y2 = wx1 * q12 + wx2 * q22
    return (y2 - y) / (y2 - y1) * q_y1 + (y - y1) / (y2 - y1) * q_y2


def interpolate_state(u, i: float, j: float, dx: float, dy: float,
                      x0: float, y0: float) -> np.ndarray:
    """Conserved state at the fractional cell index (i, j).

    Between four cell centres the state is interpolated bilinearly; on a
    grid line the nearest cell's state is taken instead.
    """
    u = np.asarray(u, dtype=float)
    i_1, i_2 = math.floor(i), math.ceil(i)
    j_1, j_2 = math.floor(j), math.ceil(j)

    if i_1 == i_2 or j_1 == j_2:
        row = i_1 if i <= 0.5 * (i_1 + i_2) else i_2
        col = j_1 if j <= 0.5 * (j_1 + j_2) else j_2
        return u[row, col].copy()

    x_1 = x0 + (i_1 - 1.5) * dx
    x_2 = x0 + (i_2 - 1.5) * dx
    y_1 = y0 + (j_1 - 1.5) * dy
    y_2 = y0 + (j_2 - 1.5) * dy
    x = x0 + (i - 1.5) * dx
    y = y0 + (j - 1.5) * dy
    return bilinear(u[i_1, j_1], u[i_1, j_2], u[i_2, j_1], u[i_2, j_2],
                    x_1, x_2, y_1, y_2, x, y)


def interface_probe_state(u, phi_value: float, normal: Sequence[float],
                          position: Sequence[float], dx: float, dy: float,
                          x0: float, y0: float) -> np.ndarray:
    """Fluid state one and a half cells from the interface along the normal.

    The interface point is found by moving from ``position`` against the
    normal by the level-set value; the normal points into the fluid.
    """
    n_x, n_y = normal
    interface_x = position[0] - phi_value * n_x
    interface_y = position[1] - phi_value * n_y
    probe_x = interface_x + 1.5 * dx * n_x
    probe_y = interface_y + 1.5 * dy * n_y
    probe_i = (probe_x - x0) / dx + 1.5
    probe_j = (probe_y - y0) / dy + 1.5
    return interpolate_state(u, probe_i, probe_j, dx, dy, x0, y0)


def ghost_state(u, phi, i: int, j: int, dx: float, dy: float, x0: float, y0: float,
                gamma: float, p_inf: float, tolerance: float,
                v_rigid: Sequence[float]) -> np.ndarray:
    """Primitive state (rho, u, v, p) for a ghost cell next to a rigid body.

    A Riemann problem between the nearby fluid and its mirror image, taken in
    the frame of the moving body, gives the normal velocity, pressure and
    density; the tangential velocity and the body velocity are added back.
    """
    phi = np.asarray(phi, dtype=float)
    cur_phi = float(phi[i, j])
    n_x, n_y = normal_vector(phi, i, j, dx, dy)
    position = (x0 + (i - 1.5) * dx, y0 + (j - 1.5) * dy)
    probe = interface_probe_state(u, cur_phi, (n_x, n_y), position, dx, dy, x0, y0)

    rho_r, vx_r, vy_r, p_r = (float(q) for q in cons_to_prim(probe, gamma, p_inf))
    rel_x = vx_r - v_rigid[0]
    rel_y = vy_r - v_rigid[1]
    vn_r = rel_x * n_x + rel_y * n_y
    vt_x = rel_x - vn_r * n_x
    vt_y = rel_y - vn_r * n_y

    solver = RiemannSolver((rho_r, -vn_r, p_r), (rho_r, vn_r, p_r))
    solver.solve_pressure(gamma, gamma, p_inf, p_inf, tolerance)
    solver.solve_star_values(gamma, gamma, p_inf, p_inf)

    v_n = solver.v_star
    return np.array([
        solver.rho_star_r,
        v_n * n_x + vt_x + v_rigid[0],
        v_n * n_y + vt_y + v_rigid[1],
        solver.p_star,
    ])