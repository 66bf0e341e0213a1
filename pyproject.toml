[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eikonal"
version = "0.1.0"
description = "Anisotropic eikonal equation solver on triangular and tetrahedral meshes"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "eikonal",
    "anisotropic",
    "mesh",
    "line search",
    "optimization",
    "newton",
    "bfgs",
    "vtk",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
eikonal = "eikonal.cli:main"
eikonal-local = "eikonal.local_problem:main"

[tool.hatch.build.targets.wheel]
packages = ["eikonal"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
