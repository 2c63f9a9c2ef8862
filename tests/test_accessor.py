import numpy as np
import pytest
import xarray as xr

import xselect  # noqa: F401, registers the accessor


@pytest.fixture(scope="function")
def da():
    data = np.array(
        [
            [1.0, 3.0, 2.0, 10.0],
            [2.0, 4.0, np.nan, 11.0],
            [3.0, 5.0, 6.0, 12.0],
        ]
    )
    return xr.DataArray(
        data,
        coords={
            "time": [0, 1, 2],
            "x": [10.0, 20.0, 30.0, 40.0],
            "label": ("time", list("abc")),
        },
        dims=("time", "x"),
        name="level",
    )


def test_median(da):
    actual = da.ostats.median("time")
    assert isinstance(actual, xr.DataArray)
    assert actual.dims == ("x",)
    assert actual.name == "level"
    assert np.allclose(actual.values, [2.0, 4.0, 4.0, 11.0])
    # Coordinates along the reduced dimension are dropped.
    assert "time" not in actual.coords
    assert "label" not in actual.coords
    assert np.array_equal(actual["x"], da["x"])


def test_does_not_shuffle(da):
    original = da.copy(deep=True)
    da.ostats.quantile([0.1, 0.9], "time")
    assert da.identical(original)


def test_quantile_scalar(da):
    actual = da.ostats.quantile(1.0, "x", method="lower")
    assert actual.dims == ("time",)
    assert np.allclose(actual.values, [10.0, 11.0, 12.0])
    assert "label" in actual.coords


def test_quantile_sequence(da):
    actual = da.ostats.quantile([0.0, 1.0], "time", method="higher")
    assert actual.dims == ("quantile", "x")
    assert np.array_equal(actual["quantile"], [0.0, 1.0])
    assert np.allclose(actual.sel(quantile=0.0), [1.0, 3.0, 2.0, 10.0])
    assert np.allclose(actual.sel(quantile=1.0), [3.0, 5.0, 6.0, 12.0])


def test_quantile_no_skipna(da):
    # NaN is ordered last.
    actual = da.ostats.quantile(1.0, "time", method="lower", skipna=False)
    assert np.isnan(actual.values[2])
    assert np.allclose(actual.values[[0, 1, 3]], [3.0, 5.0, 12.0])


def test_quantile_all_nan():
    da = xr.DataArray(
        np.array([[np.nan, 1.0], [np.nan, 3.0]]),
        dims=("y", "x"),
    )
    actual = da.ostats.median("y")
    assert np.isnan(actual.values[0])
    assert actual.values[1] == 2.0


def test_quantile_integer_all_missing():
    da = xr.DataArray(np.zeros((0, 2), dtype=int), dims=("y", "x"))
    actual = da.ostats.median("y")
    assert actual.dtype == np.float64
    assert np.isnan(actual.values).all()


def test_quantile_integer():
    da = xr.DataArray(np.array([[1, 4], [3, 8]]), dims=("y", "x"))
    # Skipping NaN always results in float, whether a lane is missing or not.
    actual = da.ostats.quantile(0.5, "y", method="midpoint")
    assert actual.dtype == np.float64
    assert np.array_equal(actual.values, [2.0, 6.0])

    actual = da.ostats.quantile(0.5, "y", method="midpoint", skipna=False)
    assert np.issubdtype(actual.dtype, np.integer)
    assert np.array_equal(actual.values, [2, 6])


def test_quantile_big_endian():
    da = xr.DataArray(
        np.array([[3.0, 1.0], [1.0, np.nan], [2.0, 5.0]], dtype=">f8"),
        dims=("y", "x"),
    )
    actual = da.ostats.median("y")
    assert np.array_equal(actual.values, [2.0, 3.0])


def test_quantile_errors(da):
    with pytest.raises(ValueError, match="quantile must be in the range"):
        da.ostats.quantile(1.5, "time")
    with pytest.raises(ValueError, match="Invalid interpolation method"):
        da.ostats.quantile(0.5, "time", method="cubic")

    empty = xr.DataArray(np.zeros((0, 2)), dims=("y", "x"))
    with pytest.raises(ValueError, match="dimension y is empty"):
        empty.ostats.quantile(0.5, "y", skipna=False)
