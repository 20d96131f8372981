"""Exact Riemann solver for the one-dimensional Euler equations."""

from __future__ import annotations

import enum
from typing import Sequence

import numpy as np

__all__ = ["ConvergenceError", "WavePattern", "RiemannSolver"]

_MAX_ITERATIONS = 10000
_DAMPING = 0.1


class ConvergenceError(ArithmeticError):
    """The star-region pressure iteration failed."""


class WavePattern(enum.IntEnum):
    """Wave structure of the solution, left wave first."""

    TWO_SHOCKS = 1
    SHOCK_RAREFACTION = 2
    RAREFACTION_SHOCK = 3
    TWO_RAREFACTIONS = 4
    NO_WAVE = 5


def _pressure_function(p, rho_k, p_k, gamma, p_inf):
    """Value and derivative of the pressure function for one side."""
    if p > p_k:
        a_k = 2.0 / ((gamma + 1.0) * rho_k)
        b_k = (gamma - 1.0) * p_k / (gamma + 1.0) + 2.0 * gamma * p_inf / (gamma + 1.0)
        root = np.sqrt(a_k / (p + b_k))
        f = (p - p_k) * root
        df = root - 0.5 * (p - p_k) * np.sqrt(a_k / (p + b_k) ** 3)
    else:
        cs_k = np.sqrt(gamma * (p_k + p_inf) / rho_k)
        ratio = (p + p_inf) / (p_k + p_inf)
        f = 2.0 * cs_k / (gamma - 1.0) * (ratio ** ((gamma - 1.0) / (2.0 * gamma)) - 1.0)
        df = cs_k / (gamma * (p_k + p_inf)) * (1.0 / ratio) ** ((gamma + 1.0) / (2.0 * gamma))
    return f, df


def _as_state(values: Sequence[float]) -> tuple[float, float, float]:
    state = tuple(float(v) for v in values)
    if len(state) != 3:
        raise ValueError("a Riemann state is (rho, v, p)")
    return state


class RiemannSolver:
    """Exact solver for one Riemann problem given left and right (rho, v, p)."""

    def __init__(self, left, right, final_time: float = 0.0, center: float = 0.0):
        self.left = _as_state(left)
        self.right = _as_state(right)
        self.final_time = float(final_time)
        self.center = float(center)
        self.rho_star_l = 0.0
        self.rho_star_r = 0.0
        self.p_star = 0.0
        self.v_star = 0.0
        self.pattern: WavePattern | None = None
        self.shock_l = 0.0
        self.shock_r = 0.0
        self.head_l = 0.0
        self.tail_l = 0.0
        self.head_r = 0.0
        self.tail_r = 0.0

    def solve_pressure(self, gamma_l, gamma_r, p_inf_l, p_inf_r, tolerance) -> float:
        """Find the star-region pressure by damped Newton iteration."""
        rho_l, v_l, p_l = map(np.float64, self.left)
        rho_r, v_r, p_r = map(np.float64, self.right)
        g_l, g_r = np.float64(gamma_l), np.float64(gamma_r)
        pi_l, pi_r = np.float64(p_inf_l), np.float64(p_inf_r)

        with np.errstate(all="ignore"):
            p_star = 0.5 * (p_l + p_r)
            iteration = 0
            while True:
                f_l, df_l = _pressure_function(p_star, rho_l, p_l, g_l, pi_l)
                f_r, df_r = _pressure_function(p_star, rho_r, p_r, g_r, pi_r)
                f = f_l + f_r + (v_r - v_l)
                df = df_l + df_r
                previous = p_star
                p_star = p_star - _DAMPING * f / df
                iteration += 1
                if np.isnan(f) or np.isnan(df):
                    raise ConvergenceError(
                        f"pressure function undefined at iteration {iteration}: "
                        f"p_l={float(p_l)}, p_r={float(p_r)}")
                change = abs(p_star - previous) / previous
                if not (change > tolerance and iteration < _MAX_ITERATIONS):
                    break

        if iteration >= _MAX_ITERATIONS:
            raise ConvergenceError("pressure iteration did not converge")
        self.p_star = float(p_star)
        return self.p_star

    def solve_star_values(self, gamma_l, gamma_r, p_inf_l, p_inf_r) -> None:
        """Compute star densities, star velocity and shock speeds."""
        rho_l, v_l, p_l = map(np.float64, self.left)
        rho_r, v_r, p_r = map(np.float64, self.right)
        g_l, g_r = np.float64(gamma_l), np.float64(gamma_r)
        pi_l, pi_r = np.float64(p_inf_l), np.float64(p_inf_r)
        p_star = np.float64(self.p_star)

        with np.errstate(all="ignore"):
            f_l, _ = _pressure_function(p_star, rho_l, p_l, g_l, pi_l)
            f_r, _ = _pressure_function(p_star, rho_r, p_r, g_r, pi_r)

            if p_star > p_l:
                k1 = (g_l - 1.0) / (g_l + 1.0)
                k2 = (g_l + 1.0) / (2.0 * g_l)
                k3 = (g_l - 1.0) / (2.0 * g_l)
                cs_l = np.sqrt(g_l * (p_l + pi_l) / rho_l)
                self.shock_l = float(v_l - cs_l * np.sqrt(k2 * p_star / p_l + k3))
                self.rho_star_l = float(rho_l * (p_star / p_l + k1) / (k1 * p_star / p_l + 1.0))
            else:
                self.rho_star_l = float(rho_l * (p_star / p_l) ** (1.0 / g_l))

            if p_star > p_r:
                k1 = (g_r - 1.0) / (g_r + 1.0)
                k2 = (g_r + 1.0) / (2.0 * g_r)
                k3 = (g_r - 1.0) / (2.0 * g_r)
                cs_r = np.sqrt(g_r * (p_r + pi_r) / rho_r)
                self.shock_r = float(v_r + cs_r * np.sqrt(k2 * p_star / p_r + k3))
                self.rho_star_r = float(rho_r * (p_star / p_r + k1) / (k1 * p_star / p_r + 1.0))
            else:
                self.rho_star_r = float(rho_r * (p_star / p_r) ** (1.0 / g_r))

            self.v_star = float(0.5 * (v_l + v_r) + 0.5 * (f_r - f_l))

    def classify_waves(self, gamma, p_inf) -> WavePattern:
        """Determine the wave pattern and the rarefaction head and tail speeds."""
        rho_l, v_l, p_l = self.left
        rho_r, v_r, p_r = self.right
        p_star = self.p_star
        with np.errstate(all="ignore"):
            cs_l = float(np.sqrt(gamma * (p_l + p_inf) / np.float64(rho_l)))
            cs_r = float(np.sqrt(gamma * (p_r + p_inf) / np.float64(rho_r)))
            tail_l = float(self.v_star - np.sqrt(gamma * p_star / np.float64(self.rho_star_l)))
            tail_r = float(self.v_star + np.sqrt(gamma * p_star / np.float64(self.rho_star_r)))

        left_fan = p_star < p_l
        right_fan = p_star < p_r
        if p_star > p_l and p_star > p_r:
            self.pattern = WavePattern.TWO_SHOCKS
        elif p_star > p_l and right_fan:
            self.pattern = WavePattern.SHOCK_RAREFACTION
        elif left_fan and p_star > p_r:
            self.pattern = WavePattern.RAREFACTION_SHOCK
        elif left_fan and right_fan:
            self.pattern = WavePattern.TWO_RAREFACTIONS
        else:
            self.pattern = WavePattern.NO_WAVE

        if self.pattern in (WavePattern.RAREFACTION_SHOCK, WavePattern.TWO_RAREFACTIONS):
            self.head_l = v_l - cs_l
            self.tail_l = tail_l
        if self.pattern in (WavePattern.SHOCK_RAREFACTION, WavePattern.TWO_RAREFACTIONS):
            self.head_r = v_r + cs_r
            self.tail_r = tail_r
        return self.pattern

    def _left_fan(self, gamma, speed):
        rho_l, v_l, p_l = self.left
        cs_l = (gamma * p_l / rho_l) ** 0.5
        base = 2.0 / (gamma + 1.0) + (gamma - 1.0) / ((gamma + 1.0) * cs_l) * (v_l - speed)
        rho = rho_l * float(np.float64(base) ** (2.0 / (gamma - 1.0)))
        v = 2.0 / (gamma + 1.0) * (cs_l + (gamma - 1.0) / 2.0 * v_l + speed)
        return rho, v, p_l * (rho / rho_l) ** gamma

    def _right_fan(self, gamma, speed):
        rho_r, v_r, p_r = self.right
        cs_r = (gamma * p_r / rho_r) ** 0.5
        base = 2.0 / (gamma + 1.0) - (gamma - 1.0) / ((gamma + 1.0) * cs_r) * (v_r - speed)
        rho = rho_r * float(np.float64(base) ** (2.0 / (gamma - 1.0)))
        v = 2.0 / (gamma + 1.0) * (-cs_r + (gamma - 1.0) / 2.0 * v_r + speed)
        return rho, v, p_r * (rho / rho_r) ** gamma

    def sample(self, gamma, x) -> tuple[float, float, float]:
        """Return (rho, v, p) at position x at the final time."""
        if self.pattern is None:
            raise RuntimeError("classify_waves must be called before sample")
        xi = x - self.center
        t = self.final_time
        star_l = (self.rho_star_l, self.v_star, self.p_star)
        star_r = (self.rho_star_r, self.v_star, self.p_star)
        pattern = self.pattern

        if pattern is WavePattern.NO_WAVE:
            return self.left

        with np.errstate(all="ignore"):
            if pattern in (WavePattern.TWO_SHOCKS, WavePattern.SHOCK_RAREFACTION):
                if xi - self.shock_l * t < 0:
                    return self.left
            else:
                if xi - self.head_l * t < 0:
                    return self.left
                if xi - self.tail_l * t < 0:
                    return self._left_fan(gamma, xi / t)

            if xi - self.v_star * t < 0:
                return star_l

            if pattern in (WavePattern.TWO_SHOCKS, WavePattern.RAREFACTION_SHOCK):
                if xi - self.shock_r * t < 0:
                    return star_r
                return self.right
            if xi - self.tail_r * t < 0:
                return star_r
            if xi - self.head_r * t < 0:
                return self._right_fan(gamma, xi / t)
            return self.right