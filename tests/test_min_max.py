import numpy as np
import pytest

import xselect
from xselect import min_max


def test_min():
    a = np.array([[1, 5, 3], [2, 0, 6]])
    assert min_max.min(a) == 0

    a = np.array([[1.0, 5.0, 3.0], [2.0, 0.0, 6.0]])
    assert min_max.min(a) == 0.0

    a = np.array([[1.0, 5.0, 3.0], [2.0, np.nan, 6.0]])
    assert min_max.min(a) is None

    assert min_max.min(np.array([])) is None
    assert min_max.min(np.array([np.nan])) is None


def test_max():
    a = np.array([[1, 5, 7], [2, 0, 6]])
    assert min_max.max(a) == 7

    a = np.array([[1.0, 5.0, 7.0], [2.0, 0.0, 6.0]])
    assert min_max.max(a) == 7.0

    a = np.array([[1.0, 5.0, 7.0], [2.0, np.nan, 6.0]])
    assert min_max.max(a) is None

    assert min_max.max(np.array([])) is None


def test_argmin_argmax():
    a = np.array([[1.0, 3.0, 5.0], [2.0, 0.0, 6.0]])
    assert min_max.argmin(a) == (1, 1)

    a = np.array([[1.0, 3.0, 7.0], [2.0, 5.0, 6.0]])
    assert min_max.argmax(a) == (0, 2)

    a = np.array([[1.0, np.nan]])
    assert min_max.argmin(a) is None
    assert min_max.argmax(a) is None
    assert min_max.argmin(np.zeros((2, 0))) is None


def test_argmin_first_occurrence():
    a = np.array([3, 1, 2, 1])
    assert min_max.argmin(a) == (1,)


def test_min_max_strided():
    a = np.arange(12).reshape(3, 4)[:, ::-2]
    assert min_max.min(a) == 1
    assert min_max.max(a) == 11
    assert min_max.argmax(a) == (2, 0)


def test_min_max_errors():
    with pytest.raises(TypeError, match="skipnan"):
        min_max.min(np.ma.masked_array([1, 2]))
    with pytest.raises(TypeError, match="Expected integer or floating dtype"):
        min_max.max(np.array(["a"]))


def test_min_skipnan():
    a = np.array([[1.0, 5.0, 3.0], [2.0, 0.0, 6.0]])
    assert min_max.min_skipnan(a) == 0.0

    a = np.array([[1.0, 5.0, 3.0], [2.0, np.nan, 6.0]])
    assert min_max.min_skipnan(a) == 1.0

    a = np.array([[np.nan, 5.0]])
    assert min_max.min_skipnan(a) == 5.0


def test_max_skipnan():
    a = np.array([[1.0, 5.0, 7.0], [2.0, 0.0, 6.0]])
    assert min_max.max_skipnan(a) == 7.0

    a = np.array([[1.0, 5.0, 7.0], [2.0, np.nan, 6.0]])
    assert min_max.max_skipnan(a) == 7.0


def test_min_max_skipnan_all_nan():
    a = np.full((2, 3), np.nan)
    assert np.isnan(min_max.min_skipnan(a))
    assert np.isnan(min_max.max_skipnan(a))

    a = np.full(3, np.nan, dtype=np.float32)
    assert isinstance(min_max.min_skipnan(a), np.float32)


def test_min_max_skipnan_masked():
    a = np.ma.masked_array([[4, 0], [9, 2]], mask=[[False, True], [True, False]])
    assert min_max.min_skipnan(a) == 2
    assert min_max.max_skipnan(a) == 4

    a = np.ma.masked_array([1, 2], mask=[True, True])
    assert min_max.min_skipnan(a) is np.ma.masked


def test_min_max_skipnan_empty():
    assert np.isnan(min_max.min_skipnan(np.array([])))
    assert np.isnan(min_max.max_skipnan(np.zeros((0, 3))))
    assert min_max.min_skipnan(np.array([], dtype=int)) is np.ma.masked
    assert min_max.max_skipnan(np.ma.masked_array([], dtype=float)) is np.ma.masked


@pytest.mark.parametrize("dtype", [np.float16, np.longdouble, ">f8", ">i4"])
def test_min_max_unsupported_dtype(dtype):
    a = np.array([3.0, 1.0, 2.0], dtype=dtype)
    with pytest.raises(TypeError, match="Unsupported dtype"):
        min_max.min(a)
    with pytest.raises(TypeError, match="Unsupported dtype"):
        min_max.max_skipnan(a)


def test_min_max_consistent_with_quantile():
    rng = np.random.default_rng(0)
    a = rng.normal(size=50)
    assert xselect.quantile(a.copy(), 0.0) == min_max.min(a)
    assert xselect.quantile(a.copy(), 1.0) == min_max.max(a)
