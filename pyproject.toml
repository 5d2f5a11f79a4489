[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qoremotion"
version = "0.1.0"
description = "Motion device configuration, position graphs and logging for motion-control stations"
requires-python = ">=3.10"
dependencies = []
keywords = ["motion control", "configuration", "graph", "positions", "logging"]
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["qoremotion"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
