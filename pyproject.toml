[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weatherchain"
version = "0.1.0"
description = "Hash-linked chain and SQLite store for encrypted IoT weather sensor readings, with history, analytics and dashboard queries."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "iot",
    "weather",
    "sensors",
    "blockchain",
    "blake3",
    "chacha20",
    "sqlite",
]
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
    "Topic :: Scientific/Engineering :: Atmospheric Science",
    "Topic :: Database",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["weatherchain"]

[tool.hatch.build.targets.sdist]
include = ["weatherchain", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
