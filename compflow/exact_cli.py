"""Exact solution profile of a one-dimensional Riemann problem."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from compflow.riemann import RiemannSolver

__all__ = ["exact_profile", "write_profile", "main"]


def exact_profile(left, right, time: float, center: float, x0: float, x1: float,
                  n_cells: int, gamma: float, p_inf: float = 0.0,
                  tolerance: float = 1e-7):
    """Sample the exact solution at cell centres.

    Returns the cell-centre positions and the (rho, v, p) state of each cell.
    """
    if n_cells < 1:
        raise ValueError("at least one cell is needed")
    solver = RiemannSolver(left, right, time, center)
    solver.solve_pressure(gamma, gamma, p_inf, p_inf, tolerance)
    solver.solve_star_values(gamma, gamma, p_inf, p_inf)
    solver.classify_waves(gamma, p_inf)

    dx = (x1 - x0) / n_cells
    xs = [x0 + (i + 0.5) * dx for i in range(n_cells)]
    states = [tuple(solver.sample(gamma, x)) for x in xs]
    return xs, states


def write_profile(directory, time: float, xs, states) -> Path:
    """Write a profile as ``T=<time>.txt`` in the directory and return its path.

    Each line holds x, y = 0.5, rho, u, v = 0 and p.
    """
    if len(xs) != len(states):
        raise ValueError("positions and states differ in length")
    folder = Path(directory)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"T={time:.2g}.txt"
    with path.open("w") as out:
        for x, (rho, v, p) in zip(xs, states):
            out.write(f"{x:g}, 0.5, {rho:g}, {v:g}, 0, {p:g}\n")
    return path


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exact Riemann problem profile.")
    parser.add_argument("--left", type=float, nargs=3, default=[1.0, 0.0, 1.0],
                        metavar=("RHO", "V", "P"))
    parser.add_argument("--right", type=float, nargs=3, default=[0.125, 0.0, 0.1],
                        metavar=("RHO", "V", "P"))
    parser.add_argument("--gamma", type=float, default=1.4)
    parser.add_argument("--p-inf", type=float, default=0.0)
    parser.add_argument("--tolerance", type=float, default=10e-8)
    parser.add_argument("--time", type=float, default=0.25)
    parser.add_argument("--x0", type=float, default=0.0)
    parser.add_argument("--center", type=float, default=0.5)
    parser.add_argument("--x1", type=float, default=1.0)
    parser.add_argument("--cells", type=int, default=200)
    parser.add_argument("--output", default="res")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Compute the exact profile and write it to the output directory."""
    args = _parser().parse_args(argv)
    xs, states = exact_profile(args.left, args.right, args.time, args.center,
                               args.x0, args.x1, args.cells, args.gamma,
                               args.p_inf, args.tolerance)
    write_profile(args.output, args.time, xs, states)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())