[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "apuec"
version = "1.0.0"
description = "Esports championship management: team registration, match scheduling, spectator seating and result statistics"
requires-python = ">=3.10"
dependencies = []
keywords = ["esports", "tournament", "scheduling", "registration", "spectators"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["apuec*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
