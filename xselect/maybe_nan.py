"""
Handling of missing values: NaN for floating point arrays, masked elements for
numpy masked arrays.

Integer arrays cannot hold NaN. The skipnan functions treat them as masked
arrays without masked elements, so that an empty result can still be
represented.
"""
from typing import Tuple

import numba as nb
import numpy as np

from xselect.constants import BoolArray
from xselect.utils import check_1d, check_array


@nb.njit(inline="always")
def _is_sentinel(values, mask, i) -> bool:
    v = values[i]
    return mask[i] or v != v


@nb.njit
def _remove_sentinels(values, mask):
    """
    Move all non-sentinel values to the front, in place.

    The mask is permuted along with the values. Returns the number of
    non-sentinel values.
    """
    n = values.size
    if n == 0:
        return 0
    i = 0
    j = n - 1
    while True:
        # Everything before i is valid, everything after j is a sentinel.
        while i <= j and not _is_sentinel(values, mask, i):
            i += 1
        while j > i and _is_sentinel(values, mask, j):
            j -= 1
        if i >= j:
            return i
        values[i], values[j] = values[j], values[i]
        mask[i], mask[j] = mask[j], mask[i]
        i += 1
        j -= 1


@nb.njit
def _remove_sentinels_lanes(values, mask, counts):
    for i in range(values.shape[0]):
        counts[i] = _remove_sentinels(values[i], mask[i])
    return


def as_maybe_nan(a) -> Tuple[np.ndarray, BoolArray, bool]:
    """
    Split an array into its data and a writeable mask.

    Returns
    -------
    data: np.ndarray
    mask: np.ndarray of bool
        The mask of a masked array (a view, so that permuting it keeps the
        masked array consistent), or an array of False otherwise.
    masked: bool
        Whether missing values in results should be represented by masking.
        This is the case for masked arrays and for integer arrays.
    """
    a = check_array(a, masked_ok=True)
    if np.ma.isMaskedArray(a):
        data = np.ma.getdata(a)
        mask = np.ma.getmask(a)
        if mask is np.ma.nomask:
            mask = np.zeros(data.shape, dtype=bool)
        elif not mask.flags.writeable:
            raise ValueError("Mask is read-only: it is shuffled in place")
        return data, mask, True
    masked = not np.issubdtype(a.dtype, np.floating)
    return a, np.zeros(a.shape, dtype=bool), masked


def is_sentinel(a) -> BoolArray:
    """Return whether each element is a missing value: NaN or masked."""
    data = np.ma.getdata(a)
    sentinel = np.ma.getmaskarray(a).copy()
    if np.issubdtype(data.dtype, np.floating):
        sentinel |= np.isnan(data)
    return sentinel


def remove_nan(a) -> np.ndarray:
    """
    Move the non-missing values of a 1D array to its front, in place, and
    return them as a view.

    Every value that is not NaN (and not masked) appears exactly once in the
    returned view. The order of the values is not preserved. Removing the
    missing values from the result again leaves it unchanged.

    Parameters
    ----------
    a: np.ndarray or np.ma.MaskedArray of shape (n,)
        Shuffled in place. For masked arrays, data and mask are shuffled
        together.

    Returns
    -------
    valid: np.ndarray
        View of the leading part of the data. This is always a regular
        ndarray, also for masked arrays: it contains no masked values.
    """
    data, mask, _ = as_maybe_nan(a)
    check_1d(data)
    n = _remove_sentinels(data, mask)
    return data[:n]


def sentinel_result(data: np.ndarray, valid: BoolArray, masked: bool):
    """
    Fill the positions of ``data`` without a valid result with a missing
    value: NaN, or a masked element.
    """
    if masked:
        return np.ma.MaskedArray(data, mask=~valid)
    data[~valid] = np.nan
    return data
