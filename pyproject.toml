[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cosmovol"
version = "0.1.0"
description = "Delaunay volume estimates and halo domain assignment for particles in a periodic cosmological box"
requires-python = ">=3.10"
keywords = [
    "cosmology",
    "delaunay",
    "tessellation",
    "density field",
    "halos",
    "n-body",
    "periodic boundary",
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
    "Topic :: Scientific/Engineering :: Astronomy",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cosmovol = "cosmovol.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cosmovol"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
