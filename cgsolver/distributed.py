"""Conjugate gradient with the matrix entries split across several workers."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from .coo import MatrixCOO
from .solver import DEFAULT_TOLERANCE, NEARZERO, CGResult, _summary_line, source_term


def partition_entries(matrix: MatrixCOO, size: int) -> list[MatrixCOO]:
    """Split the stored entries into ``size`` contiguous, nearly equal chunks."""
    if size < 1:
        raise ValueError("size must be at least 1")
    total = matrix.nz
    parts = []
    for p in range(size):
        start = total * p // size
        end = total * (p + 1) // size
        parts.append(
            MatrixCOO(
                m=matrix.m,
                n=matrix.n,
                irn=matrix.irn[start:end],
                jcn=matrix.jcn[start:end],
                a=matrix.a[start:end],
                is_sym=matrix.is_sym,
            )
        )
    return parts


class CGSolverSparseDistributed:
    """Sparse conjugate gradient whose matrix-vector product sums partial products."""

    def __init__(self, size: int = 1, *, tolerance: float = DEFAULT_TOLERANCE, verbose: bool = True):
        if size < 1:
            raise ValueError("size must be at least 1")
        self.size = size
        self.tolerance = tolerance
        self.verbose = verbose
        self.m = 0
        self.n = 0
        self.parts: list[MatrixCOO] = []
        self.b = np.zeros(0, dtype=float)

    def read_matrix(self, path) -> None:
        """Read the matrix and distribute its entries among the workers."""
        matrix = MatrixCOO.read(path)
        self.m = matrix.m
        self.n = matrix.n
        if self.verbose:
            print(f"[ReadMatrix] Total non-zero entries: {matrix.nz}")
        self.parts = partition_entries(matrix, self.size)
        if self.verbose:
            for rank, part in enumerate(self.parts):
                print(f"[ReadMatrix Rank {rank}] # of nnz entries: {part.nz}")

    def init_source_term(self, h: float) -> None:
        """Set b to the standard source term for grid spacing h."""
        self.b = source_term(self.n, h)

    def mat_vec(self, x: Sequence[float]) -> np.ndarray:
        """Return A @ x as the sum of every worker's partial product."""
        y = np.zeros(self.n, dtype=float)
        for part in self.parts:
            y += part.mat_vec(x)
        return y

    def solve(self, x: Sequence[float]) -> CGResult:
        """Run conjugate gradient from the initial guess x."""
        b = self.b
        x = np.array(x, dtype=float)
        if x.shape != b.shape:
            raise ValueError(f"x has shape {x.shape}, expected {b.shape}")
        n = b.size
        with np.errstate(divide="ignore", invalid="ignore"):
            r = b - self.mat_vec(x)
            p = r.copy()
            rsold = np.float64(r @ r)
            converged = False
            k = 0
            while k < n:
                ap = self.mat_vec(p)
                alpha = rsold / max(np.float64(p @ ap), rsold * NEARZERO)
                x += alpha * p
                r -= alpha * ap
                rsnew = np.float64(r @ r)
                converged = bool(np.sqrt(rsnew) < self.tolerance)
                p = r + (rsnew / rsold) * p
                rsold = rsnew
                if self.verbose:
                    print(f"\t[STEP {k}] residual = {math.sqrt(rsold):.6e}", end="\r", flush=True)
                if converged:
                    break
                k += 1
        result = CGResult(x=x, step=k, residual=float(np.sqrt(rsold)), converged=converged)
        if self.verbose:
            print(_summary_line(result, self.mat_vec, b))
        return result