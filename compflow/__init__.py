"""Compressible Euler solvers: exact Riemann, 2D SLIC/FORCE and ghost-fluid rigid bodies."""

__version__ = "0.1.0"

__all__ = [
    "boundary",
    "eos",
    "euler2d",
    "exact_cli",
    "extrapolation",
    "ghost_fluid",
    "levelset",
    "riemann",
    "rigid_body",
    "rigid_sim",
    "slic",
]