[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sphfluid"
version = "0.1.0"
description = "Interactive 2D smoothed-particle hydrodynamics fluid simulation"
requires-python = ">=3.10"
keywords = ["sph", "fluid", "simulation", "particles", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sphfluid = "sphfluid.app:main"

[tool.hatch.build.targets.wheel]
packages = ["sphfluid"]

[tool.pytest.ini_options]
addopts = "-ra"
