import pytest

from compflow.exact_cli import exact_profile, main, write_profile

SOD_LEFT = (1.0, 0.0, 1.0)
SOD_RIGHT = (0.125, 0.0, 0.1)


def _sod(n_cells=200):
    return exact_profile(SOD_LEFT, SOD_RIGHT, 0.25, 0.5, 0.0, 1.0, n_cells, 1.4, 0.0, 1e-7)


def test_profile_cell_centres():
    xs, states = _sod()
    assert len(xs) == len(states) == 200
    assert xs[0] == pytest.approx(0.5 / 200)
    assert xs[-1] == pytest.approx(1.0 - 0.5 / 200)


def test_profile_keeps_undisturbed_states_at_ends():
    _, states = _sod()
    assert states[0] == pytest.approx(SOD_LEFT)
    assert states[-1] == pytest.approx(SOD_RIGHT)


def test_sod_profile_is_monotone():
    _, states = _sod()
    rho = [s[0] for s in states]
    v = [s[1] for s in states]
    p = [s[2] for s in states]
    assert all(a >= b - 1e-12 for a, b in zip(rho, rho[1:]))
    assert all(a >= b - 1e-12 for a, b in zip(p, p[1:]))
    assert all(value >= -1e-12 for value in v)


def test_profile_needs_cells():
    with pytest.raises(ValueError):
        _sod(0)


def test_write_profile_format(tmp_path):
    xs, states = _sod()
    path = write_profile(tmp_path / "out", 0.25, xs, states)
    assert path.name == "T=0.25.txt"
    lines = path.read_text().splitlines()
    assert len(lines) == 200
    assert lines[0] == "0.0025, 0.5, 1, 0, 0, 1"


def test_write_profile_rejects_mismatch(tmp_path):
    with pytest.raises(ValueError):
        write_profile(tmp_path, 0.25, [0.0, 1.0], [(1.0, 0.0, 1.0)])


def test_main_writes_file(tmp_path):
    assert main(["--output", str(tmp_path), "--cells", "20"]) == 0
    written = tmp_path / "T=0.25.txt"
    lines = written.read_text().splitlines()
    assert len(lines) == 20
    assert lines[-1].endswith(", 0, 0.1")