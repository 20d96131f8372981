# compflow

Finite-volume tools for the compressible Euler equations with a stiffened-gas
equation of state:

- an exact Riemann solver (`compflow.riemann.RiemannSolver`) for
  one-dimensional shock-tube problems;
- a dimensionally split 2D SLIC scheme with FORCE fluxes (`compflow.slic`,
  `compflow.euler2d`);
- rigid bodies embedded in the flow through level sets and a Riemann-based
  ghost-fluid method (`compflow.levelset`, `compflow.extrapolation`,
  `compflow.ghost_fluid`, `compflow.rigid_body`, `compflow.rigid_sim`).

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Command-line programs

Each program writes comma-separated text files named `T=<time>.txt`, by
default below a `res/` directory (change it with `--output`).

```
compflow-exact
```

Samples the exact solution of the Sod shock tube (left state
`rho=1, v=0, p=1`, right state `rho=0.125, v=0, p=0.1`, discontinuity at
x = 0.5) at t = 0.25 on 200 cells of [0, 1] and writes `x, y, rho, u, v, p`
rows to `res/`, with y fixed at 0.5 and v at 0. Options: `--left`, `--right`,
`--gamma`, `--p-inf`, `--tolerance`, `--time`, `--x0`, `--center`, `--x1`,
`--cells`, `--output`.

```
compflow-euler2d
```

Runs the 2D SLIC/FORCE solver on [0, 2] x [0, 2] for one test case
(`--case 1` Sod in x, `--case 2` Sod in y, `--case 3` cylindrical explosion,
the default), printing the step number and time of every step, and writes
the final `x, y, rho, u, v, p` rows to `res/Case_<n>/`. Options: `--case`,
`--cells`, `--t-stop`, `--cfl`, `--gamma`, `--output`.

```
compflow-rigid
```

Runs the rigid-body ghost-fluid cases on a 500 x 500 grid by default:

1. a shock hitting a circle,
2. a shock hitting a square,
3. a shock hitting two circles,
4. a shock hitting two overlapping circles,
5. uniform flow past a static circle,
6. a circle moving through still gas,
7. a circle moving on a circular track inside a reflective box.

Snapshots are written to `res/Case_<n>/` after the first step reaching a
quarter, half, three quarters and the end of each run, with rows
`x, y, rho, u, v, p, phi` (the last column is the level-set value).
Options: `--cases`, `--cells`, `--t-stop` (overrides every case's end time),
`--gamma`, `--p-inf`, `--tolerance`, `--cfl`, `--output`.

Each program can also be started as `python -m compflow.exact_cli`,
`python -m compflow.euler2d` or `python -m compflow.rigid_sim`. Pass
`--help` to see the options.

## Library use

```python
from compflow.riemann import RiemannSolver

solver = RiemannSolver((1.0, 0.0, 1.0), (0.125, 0.0, 0.1), 0.25, 0.5)
solver.solve_pressure(1.4, 1.4, 0.0, 0.0, 1e-8)
solver.solve_star_values(1.4, 1.4, 0.0, 0.0)
solver.classify_waves(1.4, 0.0)
rho, u, p = solver.sample(1.4, 0.7)
```

`solve_pressure` raises `compflow.riemann.ConvergenceError` when the
damped Newton iteration breaks down or does not converge; `classify_waves`
returns a `WavePattern`.

```python
from compflow.exact_cli import exact_profile, write_profile

xs, states = exact_profile((1.0, 0.0, 1.0), (0.125, 0.0, 0.1), 0.25, 0.5,
                           0.0, 1.0, 200, 1.4, 0.0, 1e-8)
write_profile("res", 0.25, xs, states)
```

```python
from compflow.euler2d import TestCase, simulate

t, u = simulate(TestCase.EXPLOSION, n_cells=50, t_stop=0.1)
```

```python
from compflow.rigid_sim import case_config, simulate, write_snapshot

config = case_config(1, n_cells=100)
for t, u, phi in simulate(config):
    write_snapshot("res", config, t, u, phi, 1.4)
```

Grids are NumPy arrays of shape `(nx + 4, ny + 4, 4)` holding conserved
variables `(rho, rho*u, rho*v, E)`, with two ghost layers on every side.
`compflow.eos.prim_to_cons` and `compflow.eos.cons_to_prim` convert between
conserved and primitive `(rho, u, v, p)` states. The building blocks of the
scheme — `reconstruct`, `half_step_x`/`half_step_y`,
`force_flux_x`/`force_flux_y`, `time_step`, `update_x`/`update_y` — are in
`compflow.slic`; boundary conditions are in `compflow.boundary`.

## Limitations

- Output is plain text only; there is no plotting or binary storage.
- The rigid bodies are fixed to the built-in test cases; their motion is
  prescribed and not driven by the fluid forces.
- The solvers are written with NumPy and plain Python loops; the rigid-body
  cases at the default 500 x 500 resolution take a long time.