"""Conjugate gradient solvers for Matrix Market matrices, with sparse, dense and partitioned storage."""

__version__ = "0.1.0"