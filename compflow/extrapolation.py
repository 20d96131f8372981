"""Constant extrapolation of fluid states into the ghost-fluid region."""

from __future__ import annotations

from typing import Iterator

import numpy as np

from compflow.eos import normal_vector

__all__ = ["constant_extrapolation"]

_HUGE = 10000.0


def _sweep_orders(nx: int, ny: int) -> Iterator[Iterator[tuple[int, int]]]:
    xs = range(2, nx + 2)
    ys = range(2, ny + 2)
    yield ((i, j) for j in ys for i in xs)
    yield ((i, j) for i in reversed(xs) for j in ys)
    yield ((i, j) for j in reversed(ys) for i in reversed(xs))
    yield ((i, j) for i in xs for j in reversed(ys))


def _extrapolate_cell(states: list, phi: list, i: int, j: int, dx: float, dy: float) -> None:
    n_x, n_y = normal_vector(phi, i, j, dx, dy)
    coeff_x = abs(n_x) / dx
    coeff_y = abs(n_y) / dy
    total = coeff_x + coeff_y
    if total == 0.0:
        return

    if phi[i][j] > 0:
        from_x = states[i + 1][j] if phi[i + 1][j] < phi[i - 1][j] else states[i - 1][j]
        from_y = states[i][j + 1] if phi[i][j + 1] < phi[i][j - 1] else states[i][j - 1]
    else:
        from_x = states[i + 1][j] if phi[i + 1][j] > phi[i - 1][j] else states[i - 1][j]
        from_y = states[i][j + 1] if phi[i][j + 1] > phi[i][j - 1] else states[i][j - 1]

    current = states[i][j]
    updated = []
    for q_x, q_y, q in zip(from_x, from_y, current):
        q_hat = (coeff_x * q_x + coeff_y * q_y) / total
        updated.append(q_hat if abs(q_hat) < abs(q) else q)
    states[i][j] = updated


def constant_extrapolation(u: np.ndarray, phi, interface, dx: float, dy: float) -> np.ndarray:
    """Fill the ghost-fluid region with states carried along the interface normal.

    Cells with negative level set that do not touch the interface are reset
    to a large value and then filled by four sweeps from the states nearer
    the interface. ``u`` has shape (nx + 4, ny + 4, 4) and is changed in
    place; it is also returned.
    """
    phi = np.asarray(phi, dtype=float)
    marks = np.asarray(interface)
    if u.shape[:2] != phi.shape or marks.shape != phi.shape:
        raise ValueError("states, level set and interface marks differ in shape")

    ghost = (marks == 0) & (phi < 0)
    u[ghost] = _HUGE

    states = u.tolist()
    values = phi.tolist()
    flags = ghost.tolist()
    nx, ny = phi.shape[0] - 4, phi.shape[1] - 4
    for order in _sweep_orders(nx, ny):
        for i, j in order:
            if flags[i][j]:
                _extrapolate_cell(states, values, i, j, dx, dy)
    u[...] = states
    return u