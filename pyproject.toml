[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "darkbrem"
version = "2.2.0"
description = "Dark bremsstrahlung cross sections and dark brem event libraries for leptons on nuclear targets"
requires-python = ">=3.10"
dependencies = [
    "scipy",
]
keywords = [
    "dark photon",
    "dark bremsstrahlung",
    "particle physics",
    "cross section",
    "madgraph",
    "lhe",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
darkbrem-extract-library = "darkbrem.extract_library:main"

[tool.hatch.build.targets.wheel]
packages = ["darkbrem"]

[tool.pytest.ini_options]
addopts = "-ra"
