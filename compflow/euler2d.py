"""Two-dimensional Euler equations solved with a dimensionally split SLIC scheme."""

from __future__ import annotations

import argparse
import enum
from pathlib import Path
from typing import Callable, Optional, Sequence

import numpy as np

from compflow.boundary import apply_transmissive
from compflow.eos import cons_to_prim, prim_to_cons
from compflow.slic import Limiter, limiter, time_step, update_x, update_y

__all__ = [
    "TestCase",
    "reconstruct_conserved",
    "initial_state",
    "simulate",
    "write_result",
    "main",
]

_HIGH = (1.0, 0.0, 0.0, 1.0)
_LOW = (0.125, 0.0, 0.0, 0.1)

Progress = Callable[[int, float], object]


class TestCase(enum.IntEnum):
    """Initial data available to the two-dimensional solver."""

    SOD_X = 1
    SOD_Y = 2
    EXPLOSION = 3


def reconstruct_conserved(u_prev, u, u_next):
    """Superbee-limited reconstruction applied directly to conserved variables.

    Returns the (backward, forward) face states of the middle cell. The
    averaged slope uses the difference across the whole three-cell stencil
    as its right-hand part. Works on single states or arrays of states.
    """
    q_prev = np.asarray(u_prev, dtype=float)
    q = np.asarray(u, dtype=float)
    q_next = np.asarray(u_next, dtype=float)
    with np.errstate(all="ignore"):
        delta_left = q - q_prev
        ratio = delta_left / (q_next - q)
        slope = np.asarray(limiter(ratio, Limiter.SUPERBEE), dtype=float)
        delta = 0.5 * (delta_left + (q_next - q_prev))
        backward = q - 0.5 * slope * delta
        forward = q + 0.5 * slope * delta
    return backward, forward


def initial_state(case, n_cells: int, x0: float, y0: float, dx: float,
                  gamma: float) -> np.ndarray:
    """Conserved initial data on an (n + 4) x (n + 4) grid with filled ghost cells.

    Both cell-centre coordinates are computed with the spacing ``dx``.
    """
    case = TestCase(case)
    if n_cells < 1:
        raise ValueError("at least one cell is needed")
    centres = (np.arange(2, n_cells + 2) - 1.5) * dx
    x, y = np.meshgrid(x0 + centres, y0 + centres, indexing="ij")

    if case is TestCase.SOD_X:
        high = x <= 0.5
    elif case is TestCase.SOD_Y:
        high = y <= 0.5
    else:
        high = np.hypot(x - 1.0, y - 1.0) <= 0.4

    prim = np.where(high[..., None], np.array(_HIGH), np.array(_LOW))
    u = np.zeros((n_cells + 4, n_cells + 4, 4))
    u[2:n_cells + 2, 2:n_cells + 2] = prim_to_cons(prim, gamma)
    return apply_transmissive(u)


def simulate(case, n_cells: int = 200, x0: float = 0.0, x1: float = 2.0,
             y0: float = 0.0, y1: float = 2.0, t_stop: float = 0.25,
             cfl: float = 0.8, gamma: float = 1.4,
             progress: Optional[Progress] = None):
    """Run a test case until ``t_stop``; at least one step is always taken.

    ``progress`` is called with the step number (from 1) and the new time.
    Returns the final time and the grid of conserved states.
    """
    dx = (x1 - x0) / n_cells
    dy = (y1 - y0) / n_cells
    u = initial_state(case, n_cells, x0, y0, dx, gamma)

    t = 0.0
    step = 0
    while True:
        dt = time_step(u, cfl, dx, dy, gamma, 0.0)
        t += dt
        step += 1
        if progress is not None:
            progress(step, t)
        u = update_x(u, dx, dt, gamma, 0.0,
                     reconstruct=reconstruct_conserved, boundary=apply_transmissive)
        u = update_y(u, dy, dt, gamma, 0.0,
                     reconstruct=reconstruct_conserved, boundary=apply_transmissive)
        if not t < t_stop:
            break
    return t, u


def write_result(directory, t: float, u, x0: float, y0: float, dx: float,
                 dy: float, gamma: float) -> Path:
    """Write the interior primitive states to ``T=<t>.txt`` and return its path.

    Each line holds x, y, rho, u, v and p.
    """
    u = np.asarray(u, dtype=float)
    prim = cons_to_prim(u, gamma)
    nx, ny = u.shape[0] - 4, u.shape[1] - 4
    folder = Path(directory)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"T={t:.2g}.txt"
    with path.open("w") as out:
        for i in range(2, nx + 2):
            x = x0 + (i - 1.5) * dx
            for j in range(2, ny + 2):
                y = y0 + (j - 1.5) * dy
                rho, vx, vy, p = prim[i, j]
                out.write(f"{x:g}, {y:g}, {rho:g}, {vx:g}, {vy:g}, {p:g}\n")
    return path


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Two-dimensional SLIC/FORCE Euler solver.")
    parser.add_argument("--case", type=int, choices=[c.value for c in TestCase],
                        default=TestCase.EXPLOSION.value)
    parser.add_argument("--cells", type=int, default=200)
    parser.add_argument("--t-stop", type=float, default=0.25)
    parser.add_argument("--cfl", type=float, default=0.8)
    parser.add_argument("--gamma", type=float, default=1.4)
    parser.add_argument("--output", default="res")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run a test case and write the final state below the output directory."""
    args = _parser().parse_args(argv)
    x0 = y0 = 0.0
    x1 = y1 = 2.0

    def report(step: int, t: float) -> None:
        print(f"ite = {step}, time = {t:g}")

    t, u = simulate(args.case, args.cells, x0, x1, y0, y1, args.t_stop,
                    args.cfl, args.gamma, report)
    dx = (x1 - x0) / args.cells
    dy = (y1 - y0) / args.cells
    write_result(Path(args.output) / f"Case_{args.case}", t, u, x0, y0, dx, dy, args.gamma)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())