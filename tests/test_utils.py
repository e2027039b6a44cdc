"""Tests for input validation and parameter-block reshaping."""

import numpy as np
import pytest

from shrinkit import (
    EmptyInput,
    InsufficientSubjects,
    InvalidArgumentCount,
    NonNumericInput,
    ShapeMismatch,
    ShrinkageEstimator,
    ShrinkageInputError,
    shrink_it,
)
from shrinkit.utils import check_inputs, from_param_block, is_real_numeric, to_param_block


def _four(shape=(2, 5), seed=0):
    rng = np.random.default_rng(seed)
    return [rng.normal(size=shape) for _ in range(4)]


@pytest.mark.parametrize("count", [0, 3, 5])
def test_wrong_argument_count(count):
    arrays = _four()[:1] * count
    with pytest.raises(InvalidArgumentCount):
        check_inputs(arrays)


def test_estimator_reports_argument_count():
    X1, X2, Xodd, _ = _four()
    with pytest.raises(InvalidArgumentCount, match="got 3"):
        ShrinkageEstimator().estimate(X1, X2, Xodd)


@pytest.mark.parametrize("position", range(4))
def test_empty_input(position):
    arrays = _four()
    arrays[position] = np.array([])
    with pytest.raises(EmptyInput):
        shrink_it(*arrays)


@pytest.mark.parametrize("position", range(4))
def test_none_input(position):
    arrays = _four()
    arrays[position] = None
    with pytest.raises(EmptyInput, match="None"):
        shrink_it(*arrays)


@pytest.mark.parametrize("position", [1, 2, 3])
def test_shape_mismatch(position):
    arrays = _four()
    arrays[position] = np.zeros((2, 6))
    with pytest.raises(ShapeMismatch):
        shrink_it(*arrays)


def test_shape_mismatch_names_offending_input():
    arrays = _four()
    arrays[3] = np.zeros((5, 2))
    with pytest.raises(ShapeMismatch, match="Xeven has shape \\(5, 2\\)"):
        shrink_it(*arrays)


@pytest.mark.parametrize(
    "bad",
    [
        np.ones((2, 5), dtype=bool),
        np.ones((2, 5), dtype=complex),
        np.full((2, 5), "a"),
        np.empty((2, 5), dtype=object),
        np.arange(10).astype("m8[s]").reshape(2, 5),
        np.arange(10).astype("M8[D]").reshape(2, 5),
    ],
)
def test_non_numeric_input(bad):
    arrays = _four()
    arrays[2] = bad
    with pytest.raises(NonNumericInput):
        shrink_it(*arrays)


def test_timedelta_vector_rejected():
    td = np.array([1, 2, 3], dtype="m8[s]")
    with pytest.raises(NonNumericInput):
        shrink_it(td, td, td, td)


@pytest.mark.parametrize("bad_value", [np.nan, np.inf, -np.inf])
@pytest.mark.parametrize("position", range(4))
def test_non_finite_input(position, bad_value):
    arrays = [np.array([1.0, 2.0, 3.0]) for _ in range(4)]
    arrays[position][1] = bad_value
    with pytest.raises(NonNumericInput, match="NaN or inf"):
        shrink_it(*arrays)


def test_ragged_input_stays_in_error_family():
    ok = [[1.0, 2.0], [3.0, 4.0]]
    with pytest.raises(ShrinkageInputError):
        shrink_it([[1.0, 2.0], [3.0]], ok, ok, ok)


def test_non_numeric_is_type_error():
    arrays = _four()
    arrays[0] = np.ones((2, 5), dtype=complex)
    with pytest.raises(TypeError):
        shrink_it(*arrays)


@pytest.mark.parametrize("shape", [(1,), (3, 1), (1, 1), (1, 1, 1), (4, 4, 1)])
def test_insufficient_subjects(shape):
    arrays = [np.ones(shape) for _ in range(4)]
    with pytest.raises(InsufficientSubjects):
        shrink_it(*arrays)


def test_zero_dimensional_input_has_no_subjects():
    arrays = [np.float64(2.0) for _ in range(4)]
    with pytest.raises(InsufficientSubjects):
        shrink_it(*arrays)


def test_checks_run_in_order():
    # empty wins over shape mismatch, shape mismatch over dtype
    with pytest.raises(EmptyInput):
        check_inputs([np.array([]), np.zeros(3), np.zeros(4), np.zeros(5)])
    with pytest.raises(ShapeMismatch):
        check_inputs([np.zeros(3), np.full(4, "x"), np.zeros(3), np.zeros(3)])
    with pytest.raises(NonNumericInput):
        check_inputs([np.ones(1, dtype=bool)] * 4)


def test_all_errors_share_base_class():
    for exc in (InvalidArgumentCount, EmptyInput, ShapeMismatch, NonNumericInput, InsufficientSubjects):
        assert issubclass(exc, ShrinkageInputError)
        assert issubclass(exc, ValueError)


def test_accepts_lists_and_integers():
    arrays = check_inputs([[1, 2, 3], [1, 2, 3], [0, 1, 0], [1, 0, 1]])
    assert all(isinstance(X, np.ndarray) for X in arrays)
    assert all(X.shape == (3,) for X in arrays)


def test_is_real_numeric():
    assert is_real_numeric(np.zeros(2, dtype=np.int32))
    assert is_real_numeric(np.zeros(2, dtype=np.float32))
    assert not is_real_numeric(np.zeros(2, dtype=bool))
    assert not is_real_numeric(np.zeros(2, dtype=np.complex128))
    assert not is_real_numeric(np.zeros(2, dtype="m8[s]"))
    assert is_real_numeric(np.zeros(2, dtype=np.uint8))


def test_param_block_roundtrip_shapes():
    X = np.arange(24, dtype=np.int64).reshape(2, 3, 4)
    block = to_param_block(X)
    assert block.shape == (6, 4)
    assert block.dtype == np.float64
    np.testing.assert_array_equal(from_param_block(block, (2, 3)), X)
    assert from_param_block(block[:, 0], (2, 3)).shape == (2, 3)


def test_param_block_of_vector_is_single_row():
    block = to_param_block(np.array([1.0, 2.0, 3.0]))
    assert block.shape == (1, 3)
    assert from_param_block(block[:, 0], ()).shape == ()
