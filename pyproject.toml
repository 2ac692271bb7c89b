[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cgsolver"
version = "0.1.0"
description = "Conjugate gradient solver for sparse and dense systems read from Matrix Market files"
requires-python = ">=3.10"
keywords = ["conjugate gradient", "linear solver", "matrix market", "sparse matrix", "numerical"]
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
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cgsolver = "cgsolver.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cgsolver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
