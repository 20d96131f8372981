import dataclasses

import numpy as np
import pytest

from compflow.eos import cons_to_prim, normal_vector
from compflow.levelset import level_set, locate_interface
from compflow.rigid_body import initial_conditions
from compflow.rigid_sim import (
    CaseConfig,
    case_config,
    main,
    populate_ghost_region,
    simulate,
    write_snapshot,
)


def test_case_config_shock_cases():
    config = case_config(1, 40)
    assert config.t_stop == 0.4
    assert (config.x0, config.y0, config.x1, config.y1) == (0.0, 0.0, 1.0, 1.0)
    assert config.nx == config.ny == 40
    assert config.dx == pytest.approx(1.0 / 40)


def test_case_config_wide_domain():
    config = case_config(5, 20)
    assert config.x1 == 2.0
    assert config.y1 == 1.0
    assert config.t_stop == 1.0
    assert config.dx == pytest.approx(2.0 / 20)
    assert config.dy == pytest.approx(1.0 / 20)


def test_case_config_default_resolution():
    assert case_config(7).nx == 500


def test_case_config_rejects_unknown_case():
    with pytest.raises(ValueError):
        case_config(8, 10)


def test_case_config_rejects_empty_grid():
    with pytest.raises(ValueError):
        case_config(1, 0)


def _static_setup(n=20):
    config = case_config(6, n)
    u = initial_conditions(config.nx, config.ny, config.x0, config.dx, 1.4, 0.0, 6)
    phi = level_set((1.0, 0.5), config.nx, config.ny, config.x0, config.y0,
                    config.dx, config.dy, 6)
    interface = locate_interface(phi)
    return config, u, phi, interface


def test_populate_static_body_in_fluid_at_rest():
    config, u, phi, interface = _static_setup()
    before = u.copy()
    result = populate_ghost_region(u, phi, interface, config, (0.0, 0.0), 1.4, 0.0, 1e-8)
    assert result is u

    adjacent = (interface == 1) & (phi < 0)
    assert adjacent.any()
    assert np.allclose(u[adjacent], [1.0, 0.0, 0.0, 2.5])

    fluid = np.zeros_like(phi, dtype=bool)
    fluid[2:-2, 2:-2] = phi[2:-2, 2:-2] > 0
    assert np.array_equal(u[fluid], before[fluid])


def test_populate_moving_body_compresses_ahead_and_expands_behind():
    config, u, phi, interface = _static_setup()
    populate_ghost_region(u, phi, interface, config, (0.3, 0.0), 1.4, 0.0, 1e-8)

    ahead, behind = [], []
    for i, j in np.argwhere((interface == 1) & (phi < 0)):
        n_x, _ = normal_vector(phi, int(i), int(j), config.dx, config.dy)
        pressure = float(cons_to_prim(u[i, j], 1.4, 0.0)[3])
        if n_x > 0.9:
            ahead.append(pressure)
        elif n_x < -0.9:
            behind.append(pressure)
    assert ahead and behind
    assert all(p > 1.0 for p in ahead)
    assert all(p < 1.0 for p in behind)


def test_populate_rejects_mismatched_shapes():
    config, u, phi, interface = _static_setup()
    with pytest.raises(ValueError):
        populate_ghost_region(u[:-1], phi, interface, config, (0.0, 0.0), 1.4, 0.0, 1e-8)


def test_simulate_records_increasing_snapshots():
    config = dataclasses.replace(case_config(1, 20), t_stop=0.06)
    snapshots = list(simulate(config, 1.4, 0.0, 1e-8, 0.8))

    assert 1 <= len(snapshots) <= 4
    times = [t for t, _, _ in snapshots]
    assert times == sorted(times)
    assert times[-1] >= config.t_stop
    for index, t in enumerate(times):
        assert t >= config.t_stop * (index + 1) / 4

    for _, u, phi in snapshots:
        assert u.shape == (24, 24, 4)
        assert phi.shape == (24, 24)
        fluid = u[2:-2, 2:-2][phi[2:-2, 2:-2] > 0]
        assert np.all(np.isfinite(fluid))
        assert np.all(fluid[:, 0] > 0.0)


def test_simulate_snapshots_are_independent_copies():
    config = dataclasses.replace(case_config(1, 16), t_stop=0.08)
    snapshots = list(simulate(config, 1.4, 0.0, 1e-8, 0.8))
    assert len(snapshots) >= 2
    first_u = snapshots[0][1]
    last_u = snapshots[-1][1]
    assert first_u is not last_u
    assert not np.array_equal(first_u, last_u)


def test_write_snapshot_format(tmp_path):
    config = case_config(1, 10)
    u = initial_conditions(10, 10, 0.0, config.dx, 1.4, 0.0, 1)
    phi = level_set((0.6, 0.5), 10, 10, 0.0, 0.0, config.dx, config.dy, 1)

    path = write_snapshot(tmp_path, config, 0.4, u, phi, 1.4, 0.0)
    assert path == tmp_path / "Case_1" / "T=0.4.txt"

    lines = path.read_text().splitlines()
    assert len(lines) == 100
    fields = [float(value) for value in lines[0].split(", ")]
    assert len(fields) == 7
    assert fields[0] == pytest.approx(config.dx / 2)
    assert fields[1] == pytest.approx(config.dy / 2)
    assert fields[2:6] == pytest.approx([1.3764, 0.394, 0.0, 1.5698], rel=1e-5)
    assert fields[6] == pytest.approx(phi[2, 2], rel=1e-5)


def test_main_writes_snapshots(tmp_path):
    status = main(["--cases", "1", "--cells", "16", "--t-stop", "0.05",
                   "--output", str(tmp_path)])
    assert status == 0
    files = sorted((tmp_path / "Case_1").glob("T=*.txt"))
    assert files
    for file in files:
        lines = file.read_text().splitlines()
        assert len(lines) == 256
        assert all(len(line.split(", ")) == 7 for line in lines)


def test_case_config_is_frozen():
    config = case_config(2, 10)
    assert isinstance(config, CaseConfig)
    assert config.nx == 10
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.nx = 5
    assert config.nx == 10
    assert config.t_stop == 0.4