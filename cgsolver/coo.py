"""Sparse matrices in coordinate (COO) form."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import IO, Iterator, Sequence

import numpy as np

from .mmio import (
    CouldNotReadFileError,
    PrematureEOFError,
    Storage,
    Symmetry,
    UnsupportedTypeError,
    read_banner,
    read_crd_size,
)


def _tokens(stream: IO[str]) -> Iterator[str]:
    for line in iter(stream.readline, ""):
        yield from line.split()


@dataclass
class MatrixCOO:
    """A sparse matrix stored as parallel lists of 0-based row, column and value."""

    m: int = 0
    n: int = 0
    irn: list[int] = field(default_factory=list)
    jcn: list[int] = field(default_factory=list)
    a: list[float] = field(default_factory=list)
    is_sym: bool = False

    @classmethod
    def read(cls, path) -> "MatrixCOO":
        """Read a coordinate Matrix Market file; only the stored triangle is kept."""
        try:
            stream = open(path, encoding="utf-8")
        except OSError as exc:
            raise CouldNotReadFileError(f"could not open matrix {path}") from exc
        with stream:
            typecode = read_banner(stream)
            if not (typecode.matrix and typecode.storage is Storage.COORDINATE):
                raise UnsupportedTypeError(f"unsupported Matrix Market type: [{typecode}]")
            m, n, nz = read_crd_size(stream)
            tokens = _tokens(stream)
            irn: list[int] = []
            jcn: list[int] = []
            values: list[float] = []
            for _ in range(nz):
                words = list(islice(tokens, 3))
                if len(words) < 3:
                    raise PrematureEOFError("input ended inside the matrix entries")
                try:
                    row, col, value = int(words[0]), int(words[1]), float(words[2])
                except ValueError:
                    raise PrematureEOFError(f"malformed matrix entry {words!r}") from None
                irn.append(row - 1)
                jcn.append(col - 1)
                values.append(value)
        return cls(
            m=m,
            n=n,
            irn=irn,
            jcn=jcn,
            a=values,
            is_sym=typecode.symmetry is Symmetry.SYMMETRIC,
        )

    @property
    def nz(self) -> int:
        """Number of stored entries."""
        return len(self.irn)

    def mat_vec(self, x: Sequence[float]) -> np.ndarray:
        """Return A @ x, mirroring off-diagonal entries when the matrix is symmetric."""
        x = np.asarray(x, dtype=float)
        y = np.zeros(self.m, dtype=float)
        if not self.irn:
            return y
        rows = np.asarray(self.irn, dtype=int)
        cols = np.asarray(self.jcn, dtype=int)
        vals = np.asarray(self.a, dtype=float)
        np.add.at(y, rows, vals * x[cols])
        if self.is_sym:
            off = rows != cols
            np.add.at(y, cols[off], vals[off] * x[rows[off]])
        return y