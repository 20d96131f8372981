"""Level-set description of rigid bodies and its reinitialisation by fast sweeping."""

from __future__ import annotations

import math
from typing import Iterator, Sequence

import numpy as np

from compflow.boundary import set_level_set_boundary

__all__ = [
    "NoInterfaceError",
    "advect",
    "level_set",
    "locate_interface",
    "solve_eikonal",
    "reinitialise",
]

_HUGE = 10000.0


class NoInterfaceError(ValueError):
    """The level-set field changes sign nowhere in the interior."""


def advect(phi: Sequence[Sequence[float]], i: int, j: int, vx: float, vy: float,
           dx: float, dy: float, dt: float) -> float:
    """First-order upwind advection of the level set at cell (i, j) over one step."""
    if vx > 0:
        diff_x = phi[i][j] - phi[i - 1][j]
    else:
        diff_x = phi[i + 1][j] - phi[i][j]
    if vy > 0:
        diff_y = phi[i][j] - phi[i][j - 1]
    else:
        diff_y = phi[i][j + 1] - phi[i][j]
    return float(phi[i][j] - vx * (dt / dx) * diff_x - vy * (dt / dy) * diff_y)


def _circle(x, y, cx, cy, radius):
    return np.sqrt((x - cx) ** 2 + (y - cy) ** 2) - radius


def _square(x, y, cx, cy, edge):
    up, down = cy + edge / 2, cy - edge / 2
    left, right = cx - edge / 2, cx + edge / 2
    in_cross = ((left <= x) & (x <= right)) | ((y <= up) & (y >= down))
    box = np.maximum(np.maximum(left - x, x - right), np.maximum(y - up, down - y))
    off_x = np.where(x > right, x - right, x - left)
    off_y = np.where(y > up, y - up, y - down)
    corner = np.sqrt(off_x ** 2 + off_y ** 2)
    return np.where(in_cross, box, corner)


def level_set(center, nx: int, ny: int, x0: float, y0: float, dx: float, dy: float,
              case_id: int) -> np.ndarray:
    """Signed-distance level set of the rigid body of a test case.

    The field has shape (nx + 4, ny + 4), is negative inside the body and has
    its ghost cells filled transmissively.
    """
    if nx < 1 or ny < 1:
        raise ValueError("at least one cell in each direction is needed")
    cx, cy = (float(c) for c in center)
    xs = x0 + (np.arange(2, nx + 2) - 1.5) * dx
    ys = y0 + (np.arange(2, ny + 2) - 1.5) * dy
    x, y = np.meshgrid(xs, ys, indexing="ij")

    if case_id in (1, 5, 6):
        interior = _circle(x, y, cx, cy, 0.2)
    elif case_id == 2:
        interior = _square(x, y, cx, cy, 0.4)
    elif case_id == 3:
        interior = np.fmin(_circle(x, y, 0.6, 0.25, 0.2), _circle(x, y, 0.6, 0.75, 0.2))
    elif case_id == 4:
        interior = np.fmin(_circle(x, y, 0.6, 0.35, 0.2), _circle(x, y, 0.6, 0.65, 0.2))
    elif case_id == 7:
        interior = _circle(x, y, cx, cy, 0.1)
    else:
        raise ValueError(f"unknown case: {case_id}")

    phi = np.zeros((nx + 4, ny + 4))
    phi[2:nx + 2, 2:ny + 2] = interior
    set_level_set_boundary(phi)

    if case_id == 4:
        # the union of overlapping circles is not a distance function
        reinitialise(phi, locate_interface(phi), dx, dy)
        set_level_set_boundary(phi)
    return phi


def locate_interface(phi) -> np.ndarray:
    """Mark interior cells whose level set changes sign towards a neighbour.

    Returns an integer array of the shape of ``phi`` holding 1 at such cells.
    """
    phi = np.asarray(phi, dtype=float)
    if phi.ndim != 2 or phi.shape[0] < 5 or phi.shape[1] < 5:
        raise ValueError("a level set needs interior cells and two ghost layers")
    centre = phi[2:-2, 2:-2]
    mask = ((centre * phi[2:-2, 3:-1] < 0)
            | (centre * phi[2:-2, 1:-3] < 0)
            | (centre * phi[3:-1, 2:-2] < 0)
            | (centre * phi[1:-3, 2:-2] < 0))
    if not mask.any():
        raise NoInterfaceError("the level set has no interface in the interior")
    marks = np.zeros(phi.shape, dtype=int)
    marks[2:-2, 2:-2] = mask
    return marks


def solve_eikonal(phi_x: float, phi_y: float, dx: float, dy: float):
    """Roots (larger, smaller) of the discrete Eikonal equation at a cell.

    When the two-sided equation has no real root, the one-sided equation
    along the neighbour of smaller magnitude is solved instead. Returns
    ``None`` if that fails too.
    """
    a = 1.0 / dx ** 2 + 1.0 / dy ** 2
    b = -2.0 * (phi_x / dx ** 2 + phi_y / dy ** 2)
    c = phi_x ** 2 / dx ** 2 + phi_y ** 2 / dy ** 2 - 1.0
    delta = b * b - 4.0 * a * c
    if delta < 0:
        if abs(phi_x) > abs(phi_y):
            a, b, c = 1.0 / dy ** 2, -2.0 * phi_y / dy ** 2, phi_y ** 2 / dy ** 2 - 1.0
        else:
            a, b, c = 1.0 / dx ** 2, -2.0 * phi_x / dx ** 2, phi_x ** 2 / dx ** 2 - 1.0
        delta = b * b - 4.0 * a * c
        if delta < 0:
            return None
    root = math.sqrt(delta)
    return (-b + root) / (2.0 * a), (-b - root) / (2.0 * a)


def _sweep_orders(nx: int, ny: int) -> Iterator[Iterator[tuple[int, int]]]:
    xs = range(2, nx + 2)
    ys = range(2, ny + 2)
    yield ((i, j) for j in ys for i in xs)
    yield ((i, j) for i in reversed(xs) for j in ys)
    yield ((i, j) for j in reversed(ys) for i in reversed(xs))
    yield ((i, j) for i in xs for j in reversed(ys))


def _relax(values: list, i: int, j: int, dx: float, dy: float) -> None:
    current = values[i][j]
    if current > 0:
        phi_x = min(values[i - 1][j], values[i + 1][j])
        phi_y = min(values[i][j - 1], values[i][j + 1])
    else:
        phi_x = max(values[i - 1][j], values[i + 1][j])
        phi_y = max(values[i][j - 1], values[i][j + 1])
    roots = solve_eikonal(phi_x, phi_y, dx, dy)
    if roots is None:
        return
    larger, smaller = roots
    if current > 0 and abs(larger) < abs(current):
        values[i][j] = larger
    if current < 0 and abs(smaller) < abs(current):
        values[i][j] = smaller


def reinitialise(phi: np.ndarray, interface, dx: float, dy: float) -> np.ndarray:
    """Rebuild a signed distance away from the interface by fast sweeping, in place.

    Cells next to the interface keep their values; all others, ghost cells
    included, are first reset to a large value of their own sign.
    """
    marks = np.asarray(interface)
    if marks.shape != phi.shape:
        raise ValueError("level set and interface marks differ in shape")
    far = marks == 0
    phi[far] = np.where(phi[far] > 0, _HUGE, -_HUGE)

    values = phi.tolist()
    flags = marks.tolist()
    nx, ny = phi.shape[0] - 4, phi.shape[1] - 4
    for order in _sweep_orders(nx, ny):
        found = False
        for i, j in order:
            if flags[i][j]:
                found = True
            elif found:
                _relax(values, i, j, dx, dy)
    phi[...] = values
    return phi