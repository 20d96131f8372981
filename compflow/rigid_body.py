"""Rigid-body motion and initial fluid data of the rigid-body test cases."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from compflow.boundary import set_boundary_condition
from compflow.eos import prim_to_cons

__all__ = ["RigidState", "rigid_state", "initial_conditions"]

_SHOCK_CASES = frozenset({1, 2, 3, 4})
_TRACK_CENTER = (0.5, 0.5)
_TRACK_RADIUS = 0.3

_POST_SHOCK = (1.3764, 0.394, 0.0, 1.5698)
_AMBIENT = (1.0, 0.0, 0.0, 1.0)
_STREAM = (1.0, 1.0, 0.0, 1.0)


@dataclass(frozen=True)
class RigidState:
    """Centre position and velocity of a rigid body."""

    center: tuple[float, float]
    velocity: tuple[float, float]


def rigid_state(case_id: int, t: float, t_stop: float) -> RigidState:
    """Position and velocity of the rigid body of a test case at time t.

    Case 7 moves once around a circular track during ``t_stop``.
    """
    if case_id in _SHOCK_CASES:
        return RigidState((0.6, 0.5), (0.0, 0.0))
    if case_id == 5:
        return RigidState((0.5, 0.5), (0.0, 0.0))
    if case_id == 6:
        return RigidState((1.5 - 1.0 * t, 0.5), (-1.0, 0.0))
    if case_id == 7:
        angular_velocity = 2.0 * math.pi / t_stop
        angle = math.pi + angular_velocity * t
        velocity = (-math.sin(angle) * angular_velocity * _TRACK_RADIUS,
                    math.cos(angle) * angular_velocity * _TRACK_RADIUS)
        center = (_TRACK_CENTER[0] + math.cos(angle) * _TRACK_RADIUS,
                  _TRACK_CENTER[1] + math.sin(angle) * _TRACK_RADIUS)
        return RigidState(center, velocity)
    raise ValueError(f"unknown case: {case_id}")


def initial_conditions(nx: int, ny: int, x0: float, dx: float, gamma: float,
                       p_inf: float, case_id: int) -> np.ndarray:
    """Conserved initial data of shape (nx + 4, ny + 4, 4) with ghost cells filled."""
    if nx < 1 or ny < 1:
        raise ValueError("at least one cell in each direction is needed")

    if case_id in _SHOCK_CASES:
        x = x0 + (np.arange(2, nx + 2) - 1.5) * dx
        shocked = np.broadcast_to((x <= 0.2)[:, None, None], (nx, ny, 1))
        prim = np.where(shocked, np.array(_POST_SHOCK), np.array(_AMBIENT))
    elif case_id == 5:
        prim = np.broadcast_to(np.array(_STREAM), (nx, ny, 4))
    elif case_id in (6, 7):
        prim = np.broadcast_to(np.array(_AMBIENT), (nx, ny, 4))
    else:
        raise ValueError(f"unknown case: {case_id}")

    u = np.zeros((nx + 4, ny + 4, 4))
    u[2:nx + 2, 2:ny + 2] = prim_to_cons(prim, gamma, p_inf)
    return set_boundary_condition(u, case_id)