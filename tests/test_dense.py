import numpy as np
import pytest

from cgsolver.coo import MatrixCOO
from cgsolver.dense import DenseMatrix
from cgsolver.mmio import CouldNotReadFileError

SYMMETRIC = """%%MatrixMarket matrix coordinate real symmetric
3 3 4
1 1 4.0
2 1 1.5
2 2 5.0
3 2 -2.0
"""


def test_default_is_empty():
    dense = DenseMatrix()
    assert (dense.m, dense.n) == (0, 0)
    assert dense.data.size == 0


def test_from_coo_general():
    coo = MatrixCOO(m=2, n=3, irn=[0, 1], jcn=[2, 0], a=[7.0, -3.0])
    dense = DenseMatrix.from_coo(coo)
    assert (dense.m, dense.n) == (2, 3)
    assert dense[0, 2] == 7.0
    assert dense[1, 0] == -3.0
    assert dense[2 - 2, 0] == 0.0
    assert np.count_nonzero(dense.data) == 2


def test_from_coo_symmetric_mirrors():
    coo = MatrixCOO(m=2, n=2, irn=[1], jcn=[0], a=[2.5], is_sym=True)
    dense = DenseMatrix.from_coo(coo)
    assert dense[1, 0] == 2.5
    assert dense[0, 1] == 2.5


def test_read_is_symmetric(tmp_path):
    path = tmp_path / "s.mtx"
    path.write_text(SYMMETRIC)
    dense = DenseMatrix.read(path)
    np.testing.assert_array_equal(dense.data, dense.data.T)
    assert dense[2, 1] == -2.0
    assert dense[1, 2] == -2.0


def test_read_missing_file(tmp_path):
    with pytest.raises(CouldNotReadFileError):
        DenseMatrix.read(tmp_path / "absent.mtx")


def test_set_and_get():
    dense = DenseMatrix(2, 2)
    dense[1, 1] = 9.0
    assert dense[1, 1] == 9.0
    assert dense.data[1, 1] == 9.0


def test_resize_keeps_row_major_prefix():
    dense = DenseMatrix(2, 2)
    dense[0, 0] = 1.0
    dense[0, 1] = 2.0
    dense[1, 0] = 3.0
    dense.resize(1, 4)
    assert (dense.m, dense.n) == (1, 4)
    np.testing.assert_array_equal(dense.data, [[1.0, 2.0, 3.0, 0.0]])


def test_resize_grow_zero_fills():
    dense = DenseMatrix(1, 1)
    dense[0, 0] = 5.0
    dense.resize(2, 2)
    assert dense[0, 0] == 5.0
    assert np.count_nonzero(dense.data) == 1


def test_mat_vec_matches_coo(tmp_path):
    path = tmp_path / "s.mtx"
    path.write_text(SYMMETRIC)
    coo = MatrixCOO.read(path)
    dense = DenseMatrix.from_coo(coo)
    x = np.array([0.5, -1.0, 2.0])
    np.testing.assert_allclose(dense.mat_vec(x), coo.mat_vec(x))