"""
Quantiles along an axis of n-dimensional arrays, computed by selection.

The q-th quantile of a lane of length n is the element that would be at
position q * (n - 1) if the lane were sorted in increasing order. If this
position is not an integer, the interpolation strategy determines the result:
see :mod:`xselect.interpolate`.

Some examples:

* q=0.0 returns the minimum of every lane;
* q=0.5 returns the median of every lane;
* q=1.0 returns the maximum of every lane.

The array is shuffled **in place** along each lane to produce the quantiles,
without allocating a copy. Each lane is shuffled independently from the
others. No assumptions should be made on the ordering of the array elements
after this computation.

Complexity (quickselect): O(m) on average, O(m^2) in the worst case, where m
is the number of elements in the array.
"""
from typing import Dict, Iterable, List, Optional, Type

import numpy as np

from xselect.interpolate import (
    Interpolate,
    Method,
    get_interpolation,
    higher_index,
    lower_index,
)
from xselect.maybe_nan import _remove_sentinels_lanes, as_maybe_nan, sentinel_result
from xselect.sort import select_lanes
from xselect.utils import (
    check_1d,
    check_array,
    check_axis,
    check_quantile,
    lanes_along,
    unique_quantiles,
)


def needed_ranks(qs: List[float], n: int, interpolation: Type[Interpolate]):
    """Return the sorted union of the ranks required for all quantiles."""
    ranks = set()
    for q in qs:
        if interpolation.needs_lower(q, n):
            ranks.add(lower_index(q, n))
        if interpolation.needs_higher(q, n):
            ranks.add(higher_index(q, n))
    return np.array(sorted(ranks), dtype=np.intp)


def _quantiles_lanes(
    lanes: np.ndarray, qs: List[float], interpolation: Type[Interpolate]
) -> Dict[float, np.ndarray]:
    """
    Compute the quantiles of every row of ``lanes``.

    The ranks required by all quantiles are retrieved together, in a single
    pass per lane.
    """
    n = lanes.shape[1]
    ranks = needed_ranks(qs, n, interpolation)
    selected = select_lanes(lanes, ranks)
    by_rank = {int(k): selected[:, j] for j, k in enumerate(ranks)}

    result = {}
    for q in qs:
        lower = None
        higher = None
        if interpolation.needs_lower(q, n):
            lower = by_rank[lower_index(q, n)]
        if interpolation.needs_higher(q, n):
            higher = by_rank[higher_index(q, n)]
        result[q] = interpolation.interpolate(lower, higher, q, n)
    return result


def quantiles_axis(
    a: np.ndarray, axis: int, qs: Iterable[float], method: Method = "linear"
) -> Optional[Dict[float, np.ndarray]]:
    """
    Return multiple quantiles of the data along the specified axis.

    This is considerably faster than calling :func:`quantile_axis` for every
    quantile: the ranks required by all quantiles are retrieved in a single
    pass over each lane.

    Parameters
    ----------
    a: np.ndarray
        Integer or floating point array, shuffled in place along ``axis``.
        NaN values are considered larger than any number.
    axis: int
    qs: sequence of float
        Each between 0.0 and 1.0, inclusive.
    method: str or Interpolate, default: "linear"
        One of "lower", "higher", "nearest", "midpoint", "linear".

    Returns
    -------
    quantiles: dict of float to np.ndarray, or None
        Every distinct quantile, in the order given, mapped to an array with
        ``axis`` removed. None if ``axis`` has length zero.
    """
    a = check_array(a)
    axis = check_axis(axis, a.ndim)
    qs = unique_quantiles(qs)
    interpolation = get_interpolation(method)
    if a.shape[axis] == 0:
        return None

    lanes, shape, writeback = lanes_along(a, axis)
    result = _quantiles_lanes(lanes, qs, interpolation)
    writeback()
    return {q: np.asarray(v).reshape(shape) for q, v in result.items()}


def quantile_axis(
    a: np.ndarray, axis: int, q: float, method: Method = "linear"
) -> Optional[np.ndarray]:
    """
    Return the q-th quantile of the data along the specified axis.

    Parameters
    ----------
    a: np.ndarray
        Integer or floating point array, shuffled in place along ``axis``.
        NaN values are considered larger than any number.
    axis: int
    q: float
        Between 0.0 and 1.0, inclusive.
    method: str or Interpolate, default: "linear"
        One of "lower", "higher", "nearest", "midpoint", "linear".

    Returns
    -------
    quantile: np.ndarray or None
        Array with ``axis`` removed. None if ``axis`` has length zero.

    Examples
    --------
    >>> a = np.array([[1, 3, 2, 10], [2, 4, 3, 11], [3, 5, 6, 12]])
    >>> quantile_axis(a, 0, 0.5, method="lower")
    array([ 2,  4,  3, 11])
    """
    q = check_quantile(q)
    result = quantiles_axis(a, axis, [q], method)
    if result is None:
        return None
    return result[q]


def quantiles(
    a: np.ndarray, qs: Iterable[float], method: Method = "linear"
) -> Optional[Dict]:
    """
    Return multiple quantiles of a 1D array.

    Returns
    -------
    quantiles: dict of float to scalar, or None
        None if the array is empty.
    """
    a = check_array(a)
    check_1d(a)
    result = quantiles_axis(a, 0, qs, method)
    if result is None:
        return None
    return {q: v[()] for q, v in result.items()}


def quantile(a: np.ndarray, q: float, method: Method = "linear"):
    """
    Return the q-th quantile of a 1D array.

    The array is shuffled in place. Returns None if the array is empty.
    """
    q = check_quantile(q)
    result = quantiles(a, [q], method)
    if result is None:
        return None
    return result[q]


def interquartile_range(a: np.ndarray, method: Method = "nearest"):
    """
    Return the difference between the third and the first quartile of a 1D
    array, as used for e.g. the Freedman-Diaconis bin width.

    The array is shuffled in place. Returns None if the array is empty.
    """
    result = quantiles(a, [0.25, 0.75], method)
    if result is None:
        return None
    return result[0.75] - result[0.25]


def quantiles_axis_skipnan(
    a, axis: int, qs: Iterable[float], method: Method = "linear"
) -> Dict[float, np.ndarray]:
    """
    Return multiple quantiles of the data along the specified axis, skipping
    missing values.

    Missing values are NaN values and masked elements. The missing values of
    every lane are moved to its end, after which the quantiles are computed
    over the remainder of the lane.

    Parameters
    ----------
    a: np.ndarray or np.ma.MaskedArray
        Shuffled in place along ``axis``. For masked arrays, the mask is
        shuffled along with the data.
    axis: int
    qs: sequence of float
        Each between 0.0 and 1.0, inclusive.
    method: str or Interpolate, default: "linear"
        One of "lower", "higher", "nearest", "midpoint", "linear".

    Returns
    -------
    quantiles: dict of float to np.ndarray or np.ma.MaskedArray
        Every distinct quantile, in the order given, mapped to an array with
        ``axis`` removed. A lane without any valid value results in a missing
        value: NaN for floating point arrays, a masked element otherwise
        (the result is a masked array for masked and integer input).
    """
    data, mask, masked = as_maybe_nan(a)
    axis = check_axis(axis, data.ndim)
    qs = unique_quantiles(qs)
    interpolation = get_interpolation(method)

    lanes, shape, writeback = lanes_along(data, axis)
    mask_lanes, _, mask_writeback = lanes_along(mask, axis)
    counts = np.zeros(lanes.shape[0], dtype=np.intp)
    if lanes.size > 0:
        _remove_sentinels_lanes(lanes, mask_lanes, counts)

    values = {q: np.zeros(lanes.shape[0], dtype=data.dtype) for q in qs}
    # Group the lanes by their number of valid values: every group can be
    # processed at once.
    for n in np.unique(counts[counts > 0]):
        rows = np.flatnonzero(counts == n)
        group = lanes[rows, :n]
        result = _quantiles_lanes(group, qs, interpolation)
        lanes[rows, :n] = group
        for q, v in result.items():
            values[q][rows] = v

    writeback()
    mask_writeback()
    valid = (counts > 0).reshape(shape)
    return {
        q: sentinel_result(v.reshape(shape), valid, masked) for q, v in values.items()
    }


def quantile_axis_skipnan(a, axis: int, q: float, method: Method = "linear"):
    """
    Return the q-th quantile of the data along the specified axis, skipping
    missing values.

    See :func:`quantiles_axis_skipnan` for details.

    Examples
    --------
    >>> a = np.array([[1.0, 2.0, np.nan, 3.0], [np.nan, np.nan, np.nan, np.nan]])
    >>> quantile_axis_skipnan(a, 1, 0.75)
    array([2.5, nan])
    """
    q = check_quantile(q)
    return quantiles_axis_skipnan(a, axis, [q], method)[q]
