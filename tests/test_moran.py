import numpy as np
import pytest
import scipy.sparse as sp

from gridmoran import (
    DomainError,
    InsufficientDataError,
    MoranConfig,
    ShapeMismatchError,
    compute_moran,
    expected_moran,
    morans_i,
)


def test_moran_golden_2x2_rook(rook_weights):
    values = np.array([[1.0, 2.0], [3.0, 4.0]])
    w = rook_weights(2, 2)
    assert w.tolist() == [
        [0, 1, 1, 0],
        [1, 0, 0, 1],
        [1, 0, 0, 1],
        [0, 1, 1, 0],
    ]
    # d = [-1.5, -0.5, 0.5, 1.5]; neighbour cross products cancel exactly.
    assert morans_i(values, w) == pytest.approx(0.0, abs=1e-12)


def test_moran_checkerboard_is_minus_one(rook_weights, checkerboard_grid):
    w = rook_weights(4, 4)
    assert abs(morans_i(checkerboard_grid, w) - (-1.0)) < 1e-9
    assert abs(morans_i(checkerboard_grid, w, row_standardize=True) - (-1.0)) < 1e-9


def test_moran_half_split_is_two_thirds(rook_weights, half_split_grid):
    # 20 like-valued and 4 unlike-valued neighbour pairs out of 24, S0 = 48.
    w = rook_weights(4, 4)
    assert abs(morans_i(half_split_grid, w) - 2.0 / 3.0) < 1e-9


def test_moran_finite_on_chain():
    w = sp.csr_matrix(
        np.array(
            [
                [0, 1, 0],
                [1, 0, 1],
                [0, 1, 0],
            ],
            dtype=float,
        )
    )
    moran_i = morans_i(np.array([1.0, 2.0, 3.0]), w, row_standardize=True)
    assert np.isfinite(moran_i)


def test_moran_zero_variance_raises(rook_weights):
    with pytest.raises(DomainError, match="Variance"):
        morans_i(np.full((3, 3), 0.1), rook_weights(3, 3))


def test_moran_zero_weights_raises():
    with pytest.raises(DomainError, match="S0"):
        morans_i(np.array([1.0, 2.0, 3.0]), np.zeros((3, 3)))


def test_domain_errors_are_value_errors(rook_weights):
    with pytest.raises(ValueError):
        morans_i(np.full((2, 2), 5.0), rook_weights(2, 2))


def test_moran_shape_mismatch(rook_weights):
    with pytest.raises(ShapeMismatchError, match=r"\(9, 9\)"):
        morans_i(np.arange(9.0).reshape(3, 3), rook_weights(2, 2))
    with pytest.raises(ShapeMismatchError):
        morans_i(np.arange(4.0), np.ones((4, 3)))


@pytest.mark.parametrize("values", [[], [[]], [[5.0]], [7.0]])
def test_moran_insufficient_data(values):
    with pytest.raises(InsufficientDataError):
        morans_i(values, np.ones((1, 1)))


def test_moran_scale_invariance(rook_weights):
    rng = np.random.default_rng(0)
    x = rng.normal(size=(5, 4))
    w = rook_weights(5, 4)
    base = morans_i(x, w)
    for c in [3.0, -2.5, 1e-3, 1e4]:
        assert np.isclose(morans_i(c * x, w), base, atol=1e-9, rtol=0.0)


def test_moran_permutation_invariance():
    rng = np.random.default_rng(1)
    x = rng.normal(size=(4, 5))
    w = rng.uniform(size=(20, 20))
    np.fill_diagonal(w, 0.0)
    base = morans_i(x, w)

    perm = rng.permutation(20)
    x_perm = x.ravel()[perm].reshape(4, 5)
    w_perm = w[np.ix_(perm, perm)]
    assert np.isclose(morans_i(x_perm, w_perm), base, atol=1e-12, rtol=0.0)


def test_moran_dense_and_sparse_agree(rook_weights):
    rng = np.random.default_rng(2)
    x = rng.normal(size=(6, 6))
    w = rook_weights(6, 6)
    dense = morans_i(x, w)
    for fmt in (sp.csr_matrix, sp.csc_matrix, sp.coo_matrix):
        assert np.isclose(morans_i(x, fmt(w)), dense, atol=1e-12, rtol=0.0)


def test_moran_flat_and_grid_inputs_agree(rook_weights, half_split_grid):
    w = rook_weights(4, 4)
    assert morans_i(half_split_grid.ravel(), w) == morans_i(half_split_grid, w)


def test_moran_does_not_mutate_inputs(rook_weights):
    values = np.array([[1.0, np.nan], [3.0, 4.0]])
    w = rook_weights(2, 2)
    values_before = values.copy()
    w_before = w.copy()
    morans_i(values, w, row_standardize=True, nan_policy="zero")
    assert np.array_equal(values, values_before, equal_nan=True)
    assert np.array_equal(w, w_before)


def test_moran_nan_policy(rook_weights):
    values = np.array([[1.0, np.nan], [3.0, 4.0]])
    w = rook_weights(2, 2)
    with pytest.raises(ValueError, match="NaN"):
        morans_i(values, w)
    filled = morans_i(values, w, nan_policy="zero")
    assert filled == morans_i(np.array([[1.0, 0.0], [3.0, 4.0]]), w)


def test_random_values_near_zero():
    rng = np.random.default_rng(0)
    w = sp.csr_matrix(
        np.array(
            [
                [0, 1, 0, 0],
                [1, 0, 1, 0],
                [0, 1, 0, 1],
                [0, 0, 1, 0],
            ],
            dtype=float,
        )
    )
    moran_i = morans_i(rng.normal(size=4), w, row_standardize=True)
    assert abs(moran_i) < 1.0


def test_compute_moran_result_fields(rook_weights, half_split_grid):
    res = compute_moran(half_split_grid, rook_weights(4, 4))
    assert res.I == pytest.approx(2.0 / 3.0)
    assert res.n == 16
    assert res.S0 == pytest.approx(48.0)
    assert res.grid_shape == (4, 4)
    assert res.expected_I == pytest.approx(-1.0 / 15.0)
    assert res.row_standardized is False
    assert res.metadata["nnz_weights"] == 48

    res_rs = compute_moran(
        half_split_grid, rook_weights(4, 4), MoranConfig(row_standardize=True)
    )
    assert res_rs.S0 == pytest.approx(16.0)
    assert res_rs.row_standardized is True


def test_expected_moran():
    assert expected_moran(4) == pytest.approx(-1.0 / 3.0)
    assert expected_moran(2) == -1.0
    with pytest.raises(InsufficientDataError):
        expected_moran(1)


def test_moran_cancelling_signed_weights_raise():
    # 0.1 + 0.2 - 0.3 sums to ~2.8e-17 rather than zero.
    w = np.array([[0.0, 0.1, 0.2], [-0.3, 0.0, 0.0], [0.0, 0.0, 0.0]])
    with pytest.raises(DomainError, match="S0"):
        morans_i(np.array([1.0, 2.0, 4.0]), w)


def test_moran_signed_weights_with_nonzero_sum_are_accepted():
    w = np.array([[0.0, 1.0, -0.5], [1.0, 0.0, 1.0], [-0.5, 1.0, 0.0]])
    assert np.isfinite(morans_i(np.array([1.0, 2.0, 4.0]), w))


@pytest.mark.parametrize("n", [2.5, 3.0, True, "4"])
def test_expected_moran_rejects_non_integer_counts(n):
    with pytest.raises(ValueError, match="integer"):
        expected_moran(n)


def test_expected_moran_accepts_numpy_integers():
    assert expected_moran(np.int64(5)) == pytest.approx(-0.25)
