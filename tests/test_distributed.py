import numpy as np
import pytest

from cgsolver.coo import MatrixCOO
from cgsolver.distributed import CGSolverSparseDistributed, partition_entries
from cgsolver.solver import CGSolverSparse

MTX = """%%MatrixMarket matrix coordinate real symmetric
4 4 7
1 1 4.0
2 1 1.0
2 2 3.0
3 2 1.0
3 3 5.0
4 3 1.0
4 4 2.0
"""


@pytest.fixture
def mtx_path(tmp_path):
    path = tmp_path / "m.mtx"
    path.write_text(MTX)
    return path


def _matrix():
    return MatrixCOO(
        m=3, n=3, irn=[0, 1, 1, 2, 2], jcn=[0, 0, 1, 1, 2], a=[4.0, 1.0, 3.0, 1.0, 2.0], is_sym=True
    )


@pytest.mark.parametrize("size", [1, 2, 3, 5, 8])
def test_partition_preserves_entries(size):
    matrix = _matrix()
    parts = partition_entries(matrix, size)
    assert len(parts) == size
    assert [i for p in parts for i in p.irn] == matrix.irn
    assert [j for p in parts for j in p.jcn] == matrix.jcn
    assert [a for p in parts for a in p.a] == matrix.a
    counts = [p.nz for p in parts]
    assert max(counts) - min(counts) <= 1
    assert all(p.is_sym and p.m == 3 and p.n == 3 for p in parts)


def test_partition_rejects_zero_size():
    with pytest.raises(ValueError):
        partition_entries(_matrix(), 0)


def test_constructor_rejects_zero_size():
    with pytest.raises(ValueError):
        CGSolverSparseDistributed(0)


@pytest.mark.parametrize("size", [1, 2, 3, 10])
def test_mat_vec_matches_full_matrix(mtx_path, size):
    solver = CGSolverSparseDistributed(size, verbose=False)
    solver.read_matrix(mtx_path)
    full = MatrixCOO.read(mtx_path)
    x = np.array([1.0, -2.0, 0.5, 3.0])
    assert np.allclose(solver.mat_vec(x), full.mat_vec(x))


@pytest.mark.parametrize("size", [1, 3])
def test_solve_matches_sequential(mtx_path, size):
    dist = CGSolverSparseDistributed(size, verbose=False)
    seq = CGSolverSparse()
    for solver in (dist, seq):
        solver.read_matrix(mtx_path)
        solver.init_source_term(0.07)
    rd = dist.solve(np.zeros(4))
    rs = seq.solve(np.zeros(4))
    assert rd.converged
    assert rd.step == rs.step
    assert np.allclose(rd.x, rs.x)
    assert np.allclose(dist.mat_vec(rd.x), dist.b, atol=1e-8)


def test_verbose_reports_distribution(mtx_path, capsys):
    solver = CGSolverSparseDistributed(2)
    solver.read_matrix(mtx_path)
    out = capsys.readouterr().out
    assert "[ReadMatrix] Total non-zero entries: 7" in out
    assert "[ReadMatrix Rank 0] # of nnz entries: 3" in out
    assert "[ReadMatrix Rank 1] # of nnz entries: 4" in out


def test_solve_shape_mismatch(mtx_path):
    solver = CGSolverSparseDistributed(2, verbose=False)
    solver.read_matrix(mtx_path)
    solver.init_source_term(0.1)
    with pytest.raises(ValueError):
        solver.solve(np.zeros(3))