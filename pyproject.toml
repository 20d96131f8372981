[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "compflow"
version = "0.1.0"
description = "Finite-volume solvers for the compressible Euler equations: exact Riemann solver, 2D SLIC/FORCE scheme and ghost-fluid rigid-body coupling."
requires-python = ">=3.10"
keywords = [
    "cfd",
    "euler-equations",
    "riemann-solver",
    "slic",
    "force-scheme",
    "level-set",
    "ghost-fluid-method",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
compflow-exact = "compflow.exact_cli:main"
compflow-euler2d = "compflow.euler2d:main"
compflow-rigid = "compflow.rigid_sim:main"

[tool.hatch.build.targets.wheel]
packages = ["compflow"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
