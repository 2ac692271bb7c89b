# cgsolver

Solve linear systems `A x = b` with the conjugate gradient method, where `A`
is read from a Matrix Market (`.mtx`) coordinate file.

The right-hand side `b` is generated from a fixed source term,
`b[i] = -2 i pi^2 sin^2(10 pi i h)`, so any symmetric positive definite
matrix in Matrix Market coordinate format can be used to try the solver out.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Command line

```
cgsolver path/to/matrix.mtx
```

The matrix is read, the source term is built with step `h = 1/n`, and the
system is solved from a zero initial guess. The matrix size and the time spent
in the solver are printed.

Options:

- `--solver {sparse,dense,distributed}`: storage and solver to use
  (default `sparse`). The dense and distributed solvers also print the
  residual at every step and a summary line with `||x||` and
  `||Ax - b||/||b||`.
- `-np N`, `--processes N`: number of partitions for the distributed solver
  (default 1, must be at least 1).
- `--tolerance T`: stop once the residual norm falls below `T`
  (default `1e-10`).

If the matrix file cannot be read or is not a supported Matrix Market file,
an error is printed to standard error and the command exits with status 1.

## Library use

Reading a sparse matrix and multiplying it with a vector:

```python
import numpy as np
from cgsolver.coo import MatrixCOO

coo = MatrixCOO.read("matrix.mtx")
print(coo.m, coo.n, coo.nz)
y = coo.mat_vec(np.ones(coo.n))
```

`MatrixCOO` keeps 0-based indices in `irn`, `jcn` and values in `a`. For a
symmetric file only the stored triangle is kept, and `mat_vec` mirrors the
off-diagonal entries.

Solving a system:

```python
import numpy as np
from cgsolver.solver import CGSolverSparse

solver = CGSolverSparse()
solver.read_matrix("matrix.mtx")
solver.init_source_term(1.0 / solver.n)
result = solver.solve(np.zeros(solver.n))
print(result.step, result.residual, result.converged)
```

`solve` returns a `CGResult` with the solution `x`, the index of the last
step `step`, the residual norm `residual` and whether the tolerance was met
(`converged`). At most `n` iterations are made.

`CGSolverDense` does the same with the matrix stored densely
(`cgsolver.dense.DenseMatrix`), and
`cgsolver.distributed.CGSolverSparseDistributed(size)` splits the stored
entries into `size` contiguous chunks (see `partition_entries`) and sums their
partial matrix-vector products.

The iteration itself is available as
`cgsolver.solver.conjugate_gradient(mat_vec, b, x, tolerance, report)`, which
accepts any callable computing `A @ v`; `report`, if given, is called with the
step index and residual norm after each non-final step.

The `cgsolver.mmio` module reads and writes Matrix Market files at a lower
level: `read_banner`, `read_crd_size`, `read_array_size`, `read_crd_data`,
`read_crd_entry`, `read_mtx_crd`, `read_unsymmetric_sparse`, `write_banner`,
`write_crd_size`, `write_array_size` and `write_mtx_crd`, with the file type
described by a `Typecode` built from the `Storage`, `Field` and `Symmetry`
enums.

## Errors

Problems with the input file raise subclasses of
`cgsolver.mmio.MatrixMarketError`: `CouldNotReadFileError`,
`PrematureEOFError`, `NoHeaderError`, `UnsupportedTypeError` and
`CouldNotWriteFileError`.

## Limitations

- The solvers read only coordinate (sparse) files with real values; dense
  array files are not supported as solver input.
- The distributed solver runs all partitions one after another in a single
  process; it does no parallel or multi-machine computation.
- All computation runs on the CPU through numpy; there is no GPU support.