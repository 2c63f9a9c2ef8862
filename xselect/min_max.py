"""
Minimum and maximum of arrays.

The plain functions require a total order: they return None as soon as a NaN
is encountered, since the comparison is undefined. The skipnan functions
ignore NaN and masked values instead.

If there are multiple (equal) minima or maxima, the first one in C order is
returned.
"""
from typing import Optional, Tuple

import numba as nb
import numpy as np

from xselect.utils import check_dtype


@nb.njit
def _argextreme(values, find_max):
    # Returns -1 if the order is undefined (NaN present).
    index = 0
    for i in range(values.size):
        v = values[i]
        if v != v:
            return -1
        if find_max:
            if v > values[index]:
                index = i
        else:
            if v < values[index]:
                index = i
    return index


@nb.njit
def _argextreme_skipnan(values, mask, find_max):
    # Returns -1 if there is no valid value.
    index = -1
    for i in range(values.size):
        v = values[i]
        if mask[i] or v != v:
            continue
        if index == -1:
            index = i
        elif find_max:
            if v > values[index]:
                index = i
        else:
            if v < values[index]:
                index = i
    return index


def _flat(a) -> np.ndarray:
    a = np.asarray(a)
    check_dtype(a.dtype)
    return a.ravel()


def _argextreme_flat(a, find_max: bool) -> Optional[int]:
    if np.ma.isMaskedArray(a):
        raise TypeError("Masked arrays are only supported by the skipnan functions")
    values = _flat(a)
    if values.size == 0:
        return None
    index = _argextreme(values, find_max)
    if index == -1:
        return None
    return int(index)


def argmin(a) -> Optional[Tuple[int, ...]]:
    """
    Find the index of the minimum value of the array.

    Returns None if the array is empty, or if it contains NaN values.

    Examples
    --------
    >>> argmin(np.array([[1.0, 3.0, 5.0], [2.0, 0.0, 6.0]]))
    (1, 1)
    """
    index = _argextreme_flat(a, False)
    if index is None:
        return None
    return tuple(int(i) for i in np.unravel_index(index, np.shape(a)))


def argmax(a) -> Optional[Tuple[int, ...]]:
    """
    Find the index of the maximum value of the array.

    Returns None if the array is empty, or if it contains NaN values.
    """
    index = _argextreme_flat(a, True)
    if index is None:
        return None
    return tuple(int(i) for i in np.unravel_index(index, np.shape(a)))


def min(a):
    """
    Find the minimum of the array.

    Returns None if the array is empty, or if it contains NaN values.
    """
    index = _argextreme_flat(a, False)
    if index is None:
        return None
    return np.asarray(a).ravel()[index]


def max(a):
    """
    Find the maximum of the array.

    Returns None if the array is empty, or if it contains NaN values.
    """
    index = _argextreme_flat(a, True)
    if index is None:
        return None
    return np.asarray(a).ravel()[index]


def _extreme_skipnan(a, find_max: bool):
    values = _flat(np.ma.getdata(a))
    mask = np.ma.getmaskarray(a).ravel()
    index = _argextreme_skipnan(values, mask, find_max)
    if index == -1:
        # Integers cannot hold NaN.
        if np.ma.isMaskedArray(a) or not np.issubdtype(values.dtype, np.floating):
            return np.ma.masked
        return values.dtype.type(np.nan)
    return values[index]


def min_skipnan(a):
    """
    Find the minimum of the array, skipping NaN and masked values.

    Warning: returns NaN if the array is empty or if all values are missing.
    For masked and integer arrays, ``np.ma.masked`` is returned instead.
    """
    return _extreme_skipnan(a, False)


def max_skipnan(a):
    """
    Find the maximum of the array, skipping NaN and masked values.

    Warning: returns NaN if the array is empty or if all values are missing.
    For masked and integer arrays, ``np.ma.masked`` is returned instead.
    """
    return _extreme_skipnan(a, True)
