"""Conjugate gradient solvers for A x = b with a sparse or dense matrix."""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from .coo import MatrixCOO
from .dense import DenseMatrix

NEARZERO = 1.0e-14
DEFAULT_TOLERANCE = 1e-10

MatVec = Callable[[np.ndarray], np.ndarray]
Reporter = Callable[[int, float], None]


@dataclass
class CGResult:
    """Outcome of a conjugate gradient run.

    ``step`` is the index of the last iteration (the iteration count when the
    loop ran out without converging) and ``residual`` is the square root of the
    last accepted squared residual norm.
    """

    x: np.ndarray
    step: int
    residual: float
    converged: bool


def source_term(n: int, h: float) -> np.ndarray:
    """Right-hand side b[i] = -2 i pi^2 sin^2(10 pi i h)."""
    i = np.arange(n, dtype=float)
    return -2.0 * i * math.pi * math.pi * np.sin(10.0 * math.pi * i * h) ** 2


def conjugate_gradient(
    mat_vec: MatVec,
    b: Sequence[float],
    x: Sequence[float],
    tolerance: float = DEFAULT_TOLERANCE,
    report: Optional[Reporter] = None,
) -> CGResult:
    """Solve A x = b starting from x, where mat_vec computes A @ v.

    At most len(b) iterations are made; the loop stops once the residual norm
    falls below ``tolerance``. ``report`` is called with the step index and the
    residual norm after every non-final iteration.
    """
    b = np.asarray(b, dtype=float)
    x = np.array(x, dtype=float)
    n = b.size
    if x.shape != b.shape:
        raise ValueError(f"x has shape {x.shape}, expected {b.shape}")

    with np.errstate(divide="ignore", invalid="ignore"):
        r = b - mat_vec(x)
        p = r.copy()
        rsold = np.float64(r @ r)
        converged = False
        k = 0
        while k < n:
            ap = mat_vec(p)
            alpha = rsold / max(np.float64(p @ ap), rsold * NEARZERO)
            x += alpha * p
            r -= alpha * ap
            rsnew = np.float64(r @ r)
            if np.sqrt(rsnew) < tolerance:
                converged = True
                break
            p = r + (rsnew / rsold) * p
            rsold = rsnew
            if report is not None:
                report(k, float(np.sqrt(rsold)))
            k += 1

    return CGResult(x=x, step=k, residual=float(np.sqrt(rsold)), converged=converged)


def _print_step(k: int, residual: float) -> None:
    print(f"\t[STEP {k}] residual = {residual:.6e}", end="\r", flush=True)


def _summary_line(result: CGResult, mat_vec: MatVec, b: np.ndarray) -> str:
    with np.errstate(divide="ignore", invalid="ignore"):
        r = mat_vec(result.x) - b
        res = np.sqrt(r @ r) / np.sqrt(b @ b)
        nx = np.sqrt(result.x @ result.x)
    return (
        f"\t[STEP {result.step}] residual = {result.residual:.6e}, "
        f"||x|| = {nx:.6e}, ||Ax - b||/||b|| = {res:.6e}"
    )


class Solver(abc.ABC):
    """A conjugate gradient solver holding a matrix and a source term."""

    default_verbose = False

    def __init__(self, matrix=None, *, tolerance: float = DEFAULT_TOLERANCE, verbose: Optional[bool] = None):
        self.matrix = None
        self.m = 0
        self.n = 0
        self.b = np.zeros(0, dtype=float)
        self.tolerance = tolerance
        self.verbose = self.default_verbose if verbose is None else verbose
        if matrix is not None:
            self._set_matrix(matrix)

    def _set_matrix(self, matrix) -> None:
        self.matrix = matrix
        self.m = matrix.m
        self.n = matrix.n

    @abc.abstractmethod
    def read_matrix(self, path) -> None:
        """Load the system matrix from a Matrix Market file."""

    def init_source_term(self, h: float) -> None:
        """Set b to the standard source term for grid spacing h."""
        self.b = source_term(self.n, h)

    def solve(self, x: Sequence[float]) -> CGResult:
        """Run conjugate gradient from the initial guess x."""
        if self.matrix is None:
            raise ValueError("no matrix has been loaded")
        report = _print_step if self.verbose else None
        result = conjugate_gradient(self.matrix.mat_vec, self.b, x, self.tolerance, report)
        if self.verbose:
            print(_summary_line(result, self.matrix.mat_vec, self.b))
        return result


class CGSolverSparse(Solver):
    """Conjugate gradient on a coordinate-format sparse matrix."""

    def read_matrix(self, path) -> None:
        self._set_matrix(MatrixCOO.read(path))


class CGSolverDense(Solver):
    """Conjugate gradient on a dense matrix."""

    default_verbose = True

    def read_matrix(self, path) -> None:
        self._set_matrix(DenseMatrix.read(path))