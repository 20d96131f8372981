"""Compressible flow around rigid bodies: ghost-fluid method with a SLIC solver."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

import numpy as np

from compflow.boundary import set_boundary_condition
from compflow.eos import cons_to_prim, prim_to_cons
from compflow.extrapolation import constant_extrapolation
from compflow.ghost_fluid import ghost_state
from compflow.levelset import level_set, locate_interface
from compflow.rigid_body import initial_conditions, rigid_state
from compflow.slic import time_step, update_x, update_y

__all__ = [
    "CaseConfig",
    "case_config",
    "populate_ghost_region",
    "simulate",
    "write_snapshot",
    "main",
]

logger = logging.getLogger(__name__)

_ALL_CASES = (1, 2, 3, 4, 5, 6, 7)
_RECORD_FRACTIONS = (0.25, 0.5, 0.75, 1.0)


@dataclass(frozen=True)
class CaseConfig:
    """Grid, domain and end time of one rigid-body test case."""

    case_id: int
    nx: int
    ny: int
    x0: float
    y0: float
    x1: float
    y1: float
    t_stop: float

    @property
    def dx(self) -> float:
        return (self.x1 - self.x0) / self.nx

    @property
    def dy(self) -> float:
        return (self.y1 - self.y0) / self.ny


def case_config(case_id: int, n_cells: int = 500) -> CaseConfig:
    """Configuration of a test case on an n x n grid.

    Cases 1 to 4 run on the unit square until 0.4, cases 5 and 6 on
    [0, 2] x [0, 1] until 1.0 and case 7 on the unit square until 1.0.
    """
    if n_cells < 1:
        raise ValueError("at least one cell in each direction is needed")
    if case_id in (1, 2, 3, 4):
        return CaseConfig(case_id, n_cells, n_cells, 0.0, 0.0, 1.0, 1.0, 0.4)
    if case_id in (5, 6):
        return CaseConfig(case_id, n_cells, n_cells, 0.0, 0.0, 2.0, 1.0, 1.0)
    if case_id == 7:
        return CaseConfig(case_id, n_cells, n_cells, 0.0, 0.0, 1.0, 1.0, 1.0)
    raise ValueError(f"unknown case: {case_id}")


def populate_ghost_region(u: np.ndarray, phi, interface, config: CaseConfig,
                          v_rigid: Sequence[float], gamma: float, p_inf: float,
                          tolerance: float) -> np.ndarray:
    """Fill the ghost fluid inside the rigid body, in place.

    Ghost cells next to the interface get states from a Riemann problem;
    the rest of the body is filled by constant extrapolation, and the
    domain boundary condition of the case is applied. ``u`` is returned.
    """
    phi = np.asarray(phi, dtype=float)
    marks = np.asarray(interface)
    if u.shape[:2] != phi.shape or marks.shape != phi.shape:
        raise ValueError("states, level set and interface marks differ in shape")

    dx, dy = config.dx, config.dy
    adjacent = (marks[2:-2, 2:-2] == 1) & (phi[2:-2, 2:-2] < 0)
    # cells are updated one after another, later ones see earlier results
    for i, j in np.argwhere(adjacent) + 2:
        prim = ghost_state(u, phi, int(i), int(j), dx, dy, config.x0, config.y0,
                           gamma, p_inf, tolerance, v_rigid)
        u[i, j] = prim_to_cons(prim, gamma, p_inf)

    constant_extrapolation(u, phi, marks, dx, dy)
    set_boundary_condition(u, config.case_id)
    return u


def simulate(config: CaseConfig, gamma: float = 1.4, p_inf: float = 0.0,
             tolerance: float = 1e-8, cfl: float = 0.8
             ) -> Iterator[tuple[float, np.ndarray, np.ndarray]]:
    """Run a test case, yielding (t, u, phi) at the recording times.

    A snapshot is taken after the first step that reaches each quarter of
    the simulated period, at most one per step. ``u`` holds conserved
    states and ``phi`` the level set used during that step.
    """
    dx, dy = config.dx, config.dy
    u = initial_conditions(config.nx, config.ny, config.x0, dx, gamma, p_inf,
                           config.case_id)
    records = [config.t_stop * fraction for fraction in _RECORD_FRACTIONS]

    def boundary(grid: np.ndarray) -> np.ndarray:
        return set_boundary_condition(grid, config.case_id)

    t = 0.0
    record_index = 0
    step = 0
    while True:
        logger.info("Starting iteration %d", step + 1)
        body = rigid_state(config.case_id, t, config.t_stop)
        phi = level_set(body.center, config.nx, config.ny, config.x0, config.y0,
                        dx, dy, config.case_id)
        interface = locate_interface(phi)
        populate_ghost_region(u, phi, interface, config, body.velocity,
                              gamma, p_inf, tolerance)

        dt = time_step(u, cfl, dx, dy, gamma, p_inf)
        t += dt
        logger.info("t = %g", t)

        u = update_x(u, dx, dt, gamma, p_inf, boundary=boundary)
        u = update_y(u, dy, dt, gamma, p_inf, boundary=boundary)
        step += 1

        if record_index < len(records) and t >= records[record_index]:
            record_index += 1
            yield t, u.copy(), phi.copy()

        if not t < config.t_stop:
            break


def write_snapshot(directory, config: CaseConfig, t: float, u, phi,
                   gamma: float, p_inf: float = 0.0) -> Path:
    """Write interior primitive states and level set to ``Case_<id>/T=<t>.txt``.

    Each line holds x, y, rho, u, v, p and phi. Returns the file path.
    """
    u = np.asarray(u, dtype=float)
    phi = np.asarray(phi, dtype=float)
    prim = cons_to_prim(u, gamma, p_inf)
    folder = Path(directory) / f"Case_{config.case_id}"
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"T={t:.2g}.txt"
    with path.open("w") as out:
        for i in range(2, config.nx + 2):
            x = config.x0 + (i - 1.5) * config.dx
            for j in range(2, config.ny + 2):
                y = config.y0 + (j - 1.5) * config.dy
                rho, vx, vy, p = prim[i, j]
                out.write(f"{x:g}, {y:g}, {rho:g}, {vx:g}, {vy:g}, {p:g}, {phi[i, j]:g}\n")
    return path


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shock and flow interaction with rigid bodies.")
    parser.add_argument("--cases", type=int, nargs="+", choices=_ALL_CASES,
                        default=list(_ALL_CASES))
    parser.add_argument("--cells", type=int, default=500)
    parser.add_argument("--t-stop", type=float, default=None,
                        help="override the end time of every case")
    parser.add_argument("--gamma", type=float, default=1.4)
    parser.add_argument("--p-inf", type=float, default=0.0)
    parser.add_argument("--tolerance", type=float, default=1e-8)
    parser.add_argument("--cfl", type=float, default=0.8)
    parser.add_argument("--output", default="res")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the selected cases and write their snapshots below the output directory."""
    args = _parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    for case_id in args.cases:
        config = case_config(case_id, args.cells)
        if args.t_stop is not None:
            config = dataclasses.replace(config, t_stop=args.t_stop)
        for t, u, phi in simulate(config, args.gamma, args.p_inf, args.tolerance, args.cfl):
            print(f"Recording: t = {t:g}")
            write_snapshot(args.output, config, t, u, phi, args.gamma, args.p_inf)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())