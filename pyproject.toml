[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pxlkit"
version = "0.1.0"
description = "Particles, vertices, typed user records, logging and SFTP file access for high-energy-physics analyses"
requires-python = ">=3.10"
dependencies = [
    "paramiko",
]
keywords = ["physics", "hep", "particle", "vertex", "four-vector", "sftp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pxlkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
