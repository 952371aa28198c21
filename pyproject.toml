[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecoframe"
version = "0.1.0"
description = "Plain-logic core of a networked 2D sandbox simulation: msgpack packet codec, typed messages, physics and health rules, profiling and input bindings."
requires-python = ">=3.10"
dependencies = [
    "msgpack",
]
keywords = ["game", "simulation", "msgpack", "networking", "physics", "sandbox", "run-length"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ecoframe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
