"""Stiffened-gas equation of state and small geometric helpers."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

__all__ = ["prim_to_cons", "cons_to_prim", "normal_vector"]


def prim_to_cons(prim, gamma: float, p_inf: float = 0.0) -> np.ndarray:
    """Convert primitive states (rho, u, v, p) to conserved (rho, mx, my, E).

    Works on a single state or on any array whose last axis has length 4.
    """
    state = np.asarray(prim, dtype=float)
    if state.shape[-1] != 4:
        raise ValueError("a state must have four components")
    rho, u, v, p = np.moveaxis(state, -1, 0)
    energy = (p + gamma * p_inf) / (gamma - 1.0) + 0.5 * rho * (u * u + v * v)
    return np.stack([rho, rho * u, rho * v, energy], axis=-1)


def cons_to_prim(cons, gamma: float, p_inf: float = 0.0) -> np.ndarray:
    """Convert conserved states (rho, mx, my, E) to primitive (rho, u, v, p).

    Works on a single state or on any array whose last axis has length 4.
    """
    state = np.asarray(cons, dtype=float)
    if state.shape[-1] != 4:
        raise ValueError("a state must have four components")
    rho, mom_x, mom_y, energy = np.moveaxis(state, -1, 0)
    with np.errstate(all="ignore"):
        kinetic = 0.5 * mom_x * mom_x / rho + 0.5 * mom_y * mom_y / rho
        pressure = (gamma - 1.0) * (energy - kinetic) - gamma * p_inf
        return np.stack([rho, mom_x / rho, mom_y / rho, pressure], axis=-1)


def normal_vector(phi: Sequence[Sequence[float]], i: int, j: int,
                  dx: float, dy: float) -> tuple[float, float]:
    """Unit normal of the level set at cell (i, j) by centred differences.

    A vanishing gradient yields the zero vector.
    """
    n_x = (phi[i + 1][j] - phi[i - 1][j]) / (2.0 * dx)
    n_y = (phi[i][j + 1] - phi[i][j - 1]) / (2.0 * dy)
    length = math.hypot(n_x, n_y)
    if length == 0.0:
        length = 1.0
    return float(n_x / length), float(n_y / length)