[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "createsim"
version = "0.1.0"
description = "Simulated sensors, interface buttons and motion-control helpers for a Create 3 style mobile robot"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "simulation", "sensors", "mobile-robot", "motion-control"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["createsim"]

[tool.pytest.ini_options]
addopts = "-ra"
