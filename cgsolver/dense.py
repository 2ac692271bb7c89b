"""Dense row-major matrices."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .coo import MatrixCOO


class DenseMatrix:
    """A dense m x n matrix of doubles."""

    def __init__(self, m: int = 0, n: int = 0) -> None:
        self.m = m
        self.n = n
        self.data = np.zeros((m, n), dtype=float)

    @classmethod
    def from_coo(cls, coo: MatrixCOO) -> "DenseMatrix":
        """Expand a coordinate matrix, filling the mirror entry for symmetric input."""
        dense = cls()
        dense.resize(coo.m, coo.n)
        for i, j, value in zip(coo.irn, coo.jcn, coo.a):
            dense.data[i, j] = value
            if coo.is_sym:
                dense.data[j, i] = value
        return dense

    @classmethod
    def read(cls, path) -> "DenseMatrix":
        """Read a coordinate Matrix Market file into a dense matrix."""
        return cls.from_coo(MatrixCOO.read(path))

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return float(self.data[i, j])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        i, j = index
        self.data[i, j] = value

    def resize(self, m: int, n: int) -> None:
        """Change the shape, keeping the leading row-major storage and zero-filling the rest."""
        flat = np.zeros(m * n, dtype=float)
        old = self.data.ravel()
        keep = min(old.size, flat.size)
        flat[:keep] = old[:keep]
        self.m = m
        self.n = n
        self.data = flat.reshape(m, n)

    def mat_vec(self, x: Sequence[float]) -> np.ndarray:
        """Return A @ x."""
        return self.data @ np.asarray(x, dtype=float)