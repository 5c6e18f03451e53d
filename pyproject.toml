[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "miratope"
version = "0.4.15"
description = "Coxeter diagrams, Coxeter groups, symmetry groups and n-dimensional geometry for polytopes."
requires-python = ">=3.10"
keywords = ["polytope", "dimension", "geometry", "coxeter", "symmetry", "group"]
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
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["miratope"]

[tool.pytest.ini_options]
addopts = "-ra"
