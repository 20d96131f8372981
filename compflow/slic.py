"""SLIC scheme building blocks: reconstruction, half-step evolution and FORCE fluxes."""

from __future__ import annotations

import enum
from typing import Callable, Optional

import numpy as np

from compflow.boundary import apply_transmissive
from compflow.eos import cons_to_prim, prim_to_cons

__all__ = [
    "Limiter",
    "limiter",
    "reconstruct_scalar",
    "reconstruct",
    "half_step_x",
    "half_step_y",
    "force_flux_x",
    "force_flux_y",
    "time_step",
    "update_x",
    "update_y",
]

_STEEP_RATIO = 99999.0

Reconstructor = Callable[[np.ndarray, np.ndarray, np.ndarray], tuple]
Boundary = Callable[[np.ndarray], object]


class Limiter(enum.Enum):
    """Slope limiters available to the reconstruction."""

    MINBEE = "minbee"
    SUPERBEE = "superbee"


def _maybe_scalar(value):
    value = np.asarray(value, dtype=float)
    return float(value) if value.ndim == 0 else value


def limiter(r, kind: Limiter = Limiter.MINBEE):
    """Slope limiter value for a ratio of successive gradients."""
    r = np.asarray(r, dtype=float)
    with np.errstate(all="ignore"):
        if kind is Limiter.MINBEE:
            conditions = [r <= 0.0, r <= 1.0, r > 1.0]
            choices = [0.0, r, np.minimum(1.0, 2.0 / (1.0 + r))]
        elif kind is Limiter.SUPERBEE:
            conditions = [r <= 0.0, r <= 0.5, r <= 1.0, r > 1.0]
            choices = [0.0, 2.0 * r, 1.0,
                       np.minimum(np.minimum(r, 2.0 / (1.0 + r)), 2.0)]
        else:
            raise ValueError(f"unknown limiter: {kind!r}")
        return _maybe_scalar(np.select(conditions, choices, default=0.0))


def reconstruct_scalar(q_prev, q, q_next, kind: Limiter = Limiter.MINBEE):
    """Limited linear reconstruction; returns the (backward, forward) face values."""
    q_prev = np.asarray(q_prev, dtype=float)
    q = np.asarray(q, dtype=float)
    q_next = np.asarray(q_next, dtype=float)
    with np.errstate(all="ignore"):
        delta_left = q - q_prev
        delta_right = q_next - q
        ratio = np.where(
            delta_right == 0.0,
            np.where(delta_left != 0.0, _STEEP_RATIO, 1.0),
            delta_left / delta_right,
        )
        slope = limiter(ratio, kind)
        delta = 0.5 * (delta_left + delta_right)
        backward = q - 0.5 * slope * delta
        forward = q + 0.5 * slope * delta
    return _maybe_scalar(backward), _maybe_scalar(forward)


def _reconstruct_primitive(u_prev, u, u_next, gamma, p_inf):
    prims = [cons_to_prim(state, gamma, p_inf) for state in (u_prev, u, u_next)]
    backward, forward = reconstruct_scalar(*prims)
    return prim_to_cons(backward, gamma, p_inf), prim_to_cons(forward, gamma, p_inf)


def reconstruct(u_prev, u, u_next, gamma: float, p_inf: float = 0.0):
    """Reconstruct conserved states in primitive variables.

    Returns the conserved (backward, forward) face states of the middle cell.
    Accepts single states or arrays whose last axis has length 4.
    """
    return _reconstruct_primitive(u_prev, u, u_next, gamma, p_inf)


def _components(state):
    return np.moveaxis(np.asarray(state, dtype=float), -1, 0)


def half_step_x(left, right, dx: float, dt: float, gamma: float, p_inf: float = 0.0):
    """Evolve the face states of a cell by half a time step in x."""
    left = np.asarray(left, dtype=float)
    right = np.asarray(right, dtype=float)
    with np.errstate(all="ignore"):
        rho_l, mx_l, _, e_l = _components(left)
        rho_r, mx_r, _, e_r = _components(right)
        _, vx_l, vy_l, p_l = _components(cons_to_prim(left, gamma, p_inf))
        _, _, vy_r, p_r = _components(cons_to_prim(right, gamma, p_inf))
        # the normal velocity of the left state is used on both sides
        vx_r = vx_l
        c = 0.5 * (dt / dx)
        update = np.stack([
            c * (mx_r - mx_l),
            c * (rho_r * vx_r ** 2 + p_r - rho_l * vx_l ** 2 - p_l),
            c * ((rho_r * vy_r) * vx_r - (rho_l * vy_l) * vx_l),
            c * ((e_r + p_r) * vx_r - (e_l + p_l) * vx_l),
        ], axis=-1)
        return left - update, right - update


def half_step_y(down, up, dy: float, dt: float, gamma: float, p_inf: float = 0.0):
    """Evolve the face states of a cell by half a time step in y."""
    down = np.asarray(down, dtype=float)
    up = np.asarray(up, dtype=float)
    with np.errstate(all="ignore"):
        rho_d, _, my_d, e_d = _components(down)
        rho_u, _, my_u, e_u = _components(up)
        _, vx_d, vy_d, p_d = _components(cons_to_prim(down, gamma, p_inf))
        _, vx_u, vy_u, p_u = _components(cons_to_prim(up, gamma, p_inf))
        c = 0.5 * (dt / dy)
        update = np.stack([
            c * (my_u - my_d),
            c * ((rho_u * vx_u) * vy_u - (rho_d * vx_d) * vy_d),
            c * (rho_u * vy_u ** 2 + p_u - rho_d * vy_d ** 2 - p_d),
            c * ((e_u + p_u) * vy_u - (e_d + p_d) * vy_d),
        ], axis=-1)
        return down - update, up - update


def _physical_flux(cons, vx, vy, p, axis):
    rho, mx, my, energy = _components(cons)
    if axis == 0:
        v_n, v_t, m_n = vx, vy, mx
    else:
        v_n, v_t, m_n = vy, vx, my
    normal = rho * v_n ** 2 + p
    tangential = (rho * v_t) * v_n
    energy_flux = (energy + p) * v_n
    if axis == 0:
        return np.stack([m_n, normal, tangential, energy_flux], axis=-1)
    return np.stack([m_n, tangential, normal, energy_flux], axis=-1)


def _force_flux(u_left, u_right, d, dt, gamma, p_inf, axis):
    u_left = np.asarray(u_left, dtype=float)
    u_right = np.asarray(u_right, dtype=float)
    with np.errstate(all="ignore"):
        _, vx_l, vy_l, p_l = _components(cons_to_prim(u_left, gamma, p_inf))
        _, vx_r, vy_r, p_r = _components(cons_to_prim(u_right, gamma, p_inf))
        flux_l = _physical_flux(u_left, vx_l, vy_l, p_l, axis)
        flux_r = _physical_flux(u_right, vx_r, vy_r, p_r, axis)

        lax_friedrichs = 0.5 * d / dt * (u_left - u_right) + 0.5 * (flux_l + flux_r)

        half = 0.5 * (u_left + u_right) - 0.5 * dt / d * (flux_r - flux_l)
        rho, mx, my, energy = _components(half)
        vx = mx / rho
        vy = my / rho
        p = (gamma - 1.0) * (energy - 0.5 * mx ** 2 / rho - 0.5 * my ** 2 / rho)
        richtmyer = _physical_flux(half, vx, vy, p, axis)

        return 0.5 * (lax_friedrichs + richtmyer)


def force_flux_x(u_left, u_right, dx: float, dt: float, gamma: float, p_inf: float = 0.0):
    """FORCE flux through an x-face between two conserved states."""
    return _force_flux(u_left, u_right, dx, dt, gamma, p_inf, axis=0)


def force_flux_y(u_left, u_right, dy: float, dt: float, gamma: float, p_inf: float = 0.0):
    """FORCE flux through a y-face between two conserved states."""
    return _force_flux(u_left, u_right, dy, dt, gamma, p_inf, axis=1)


def time_step(u, cfl: float, dx: float, dy: float, gamma: float, p_inf: float = 0.0) -> float:
    """Stable time step from the largest wave speed in the interior cells."""
    u = np.asarray(u, dtype=float)
    interior = u[2:-2, 2:-2]
    if interior.size == 0:
        raise ValueError("the grid has no interior cells")
    with np.errstate(all="ignore"):
        rho, vx, vy, p = _components(cons_to_prim(interior, gamma, p_inf))
        speed = np.sqrt(vx ** 2 + vy ** 2) + np.sqrt(gamma * (p + p_inf) / rho)
    bad = np.argwhere(np.isnan(speed))
    if bad.size:
        i, j = (int(k) + 2 for k in bad[0])
        raise FloatingPointError(
            f"wave speed undefined at cell ({i}, {j}): "
            f"rho={float(rho[i - 2, j - 2])}, p={float(p[i - 2, j - 2])}")
    return float(cfl * min(dx, dy) / speed.max())


def _default_reconstructor(gamma, p_inf):
    def reconstructor(u_prev, u, u_next):
        return _reconstruct_primitive(u_prev, u, u_next, gamma, p_inf)
    return reconstructor


def update_x(u, dx: float, dt: float, gamma: float, p_inf: float = 0.0,
             reconstruct: Optional[Reconstructor] = None,
             boundary: Optional[Boundary] = None) -> np.ndarray:
    """Advance a grid of conserved states by one SLIC step in x.

    ``reconstruct`` maps (previous, current, next) states to the
    (backward, forward) face states; ``boundary`` fills ghost cells in place.
    """
    u = np.asarray(u, dtype=float)
    recon = reconstruct or _default_reconstructor(gamma, p_inf)
    fill = boundary or apply_transmissive
    nx, ny = u.shape[0] - 4, u.shape[1] - 4
    rows, cols = slice(2, nx + 2), slice(2, ny + 2)

    left = np.zeros_like(u)
    right = np.zeros_like(u)
    left[rows, cols], right[rows, cols] = recon(u[1:nx + 1, cols], u[rows, cols], u[3:nx + 3, cols])
    fill(left)
    fill(right)

    left_half, right_half = half_step_x(left, right, dx, dt, gamma, p_inf)
    flux = force_flux_x(right_half[:-1, :-1], left_half[1:, :-1], dx, dt, gamma, p_inf)

    result = np.zeros_like(u)
    result[rows, cols] = u[rows, cols] - dt / dx * (flux[rows, cols] - flux[1:nx + 1, cols])
    fill(result)
    return result


def update_y(u, dy: float, dt: float, gamma: float, p_inf: float = 0.0,
             reconstruct: Optional[Reconstructor] = None,
             boundary: Optional[Boundary] = None) -> np.ndarray:
    """Advance a grid of conserved states by one SLIC step in y.

    ``reconstruct`` maps (previous, current, next) states to the
    (backward, forward) face states; ``boundary`` fills ghost cells in place.
    """
    u = np.asarray(u, dtype=float)
    recon = reconstruct or _default_reconstructor(gamma, p_inf)
    fill = boundary or apply_transmissive
    nx, ny = u.shape[0] - 4, u.shape[1] - 4
    rows, cols = slice(2, nx + 2), slice(2, ny + 2)

    down = np.zeros_like(u)
    up = np.zeros_like(u)
    down[rows, cols], up[rows, cols] = recon(u[rows, 1:ny + 1], u[rows, cols], u[rows, 3:ny + 3])
    fill(down)
    fill(up)

    down_half, up_half = half_step_y(down, up, dy, dt, gamma, p_inf)
    flux = force_flux_y(up_half[:-1, :-1], down_half[:-1, 1:], dy, dt, gamma, p_inf)

    result = np.zeros_like(u)
    result[rows, cols] = u[rows, cols] - dt / dy * (flux[rows, cols] - flux[rows, 1:ny + 1])
    fill(result)
    return result