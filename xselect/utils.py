import collections.abc
from typing import Callable, Dict, Iterable, List, Tuple

import numpy as np

from xselect.constants import IntDType


def check_dtype(dtype: np.dtype) -> None:
    dtype = np.dtype(dtype)
    if not (np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.floating)):
        raise TypeError(f"Expected integer or floating dtype, received: {dtype}")
    # The kernels are compiled for native 8 to 64 bit integers, float32 and
    # float64 only.
    if dtype.kind == "f":
        supported = dtype.itemsize in (4, 8) and dtype.char != "g"
    else:
        supported = dtype.itemsize in (1, 2, 4, 8)
    if not (supported and dtype.isnative):
        raise TypeError(
            f"Unsupported dtype: {dtype}. Expected a native byte order integer, "
            "float32 or float64 dtype"
        )


def check_array(a, masked_ok: bool = False):
    """
    Validate an array that is about to be shuffled in place.

    Masked arrays are returned as is when ``masked_ok``; anything else is
    converted with ``np.asarray``, which does not copy ndarrays.
    """
    if np.ma.isMaskedArray(a):
        if not masked_ok:
            raise TypeError(
                "Masked arrays are only supported by the skipnan functions"
            )
        data = np.ma.getdata(a)
    else:
        a = np.asarray(a)
        data = a
    check_dtype(data.dtype)
    if not data.flags.writeable:
        raise ValueError("Array is read-only: it is shuffled in place")
    return a


def check_1d(a) -> None:
    if a.ndim != 1:
        raise ValueError(f"Expected 1D array, received array with ndim: {a.ndim}")


def check_axis(axis: int, ndim: int) -> int:
    if not -ndim <= axis < ndim:
        raise IndexError(
            f"axis {axis} is out of bounds for array of dimension {ndim}"
        )
    return axis % ndim


def check_index(index: int, n: int, name: str = "index") -> int:
    if not 0 <= index < n:
        raise IndexError(f"{name} {index} is out of bounds for length {n}")
    return int(index)


def check_quantile(q) -> float:
    q = float(q)
    # Written so that NaN fails the check as well.
    if not (0.0 <= q <= 1.0):
        raise ValueError(f"quantile must be in the range [0, 1], received: {q}")
    return q


def unique_quantiles(qs: Iterable) -> List[float]:
    """
    Validate the quantiles and drop duplicates, keeping the order of first
    occurrence.
    """
    if not isinstance(qs, np.ndarray) and isinstance(qs, collections.abc.Iterable):
        qs = list(qs)
    unique: Dict[float, None] = {}
    for q in np.atleast_1d(np.asarray(qs, dtype=np.float64)).ravel():
        unique[check_quantile(q)] = None
    return list(unique)


def lanes_along(a: np.ndarray, axis: int) -> Tuple[np.ndarray, Tuple, Callable]:
    """
    Return the 1D lanes of ``a`` along ``axis`` as the rows of a 2D array.

    Moving the axis to the end and collapsing the other axes results in a
    view whenever the memory layout allows it. Otherwise numpy returns a copy:
    in that case, call the returned ``writeback`` after shuffling the lanes
    to propagate the new order to ``a``.

    Returns
    -------
    lanes: np.ndarray of shape (n_lane, a.shape[axis])
    shape: tuple
        Shape of ``a`` with ``axis`` removed.
    writeback: callable
    """
    moved = np.moveaxis(a, axis, -1)
    shape = moved.shape[:-1]
    n_lane = int(np.prod(shape, dtype=IntDType))
    lanes = moved.reshape(n_lane, moved.shape[-1])

    if lanes.size > 0 and not np.may_share_memory(lanes, a):

        def writeback():
            moved[...] = lanes.reshape(moved.shape)

    else:

        def writeback():
            return

    return lanes, shape, writeback
