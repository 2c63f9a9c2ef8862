"""
Selection of order statistics by in-place partitioning.

The kernels are loosely based on the percentile helpers of numba:
# https://github.com/numba/numba/blob/0441bb17c7820efc2eba4fd141b68dac2afa4740/numba/np/arraymath.py#L1595

Unlike numba (and numpy), the pivot is chosen uniformly at random from the
current search window rather than as a median of three. This gives expected
linear time for every input, but the worst case remains quadratic.

All kernels shuffle their input **in place**. After a selection of rank k,
all elements before k are smaller than the selected element, all elements
after k are greater than or equal to it. No other assumptions should be made
about the order of the elements.
"""
from typing import Dict, Iterable

import numba as nb
import numpy as np

from xselect.constants import IntArray, IntDType
from xselect.utils import check_1d, check_array, check_index


@nb.njit(inline="always")
def nan_lt(a, b) -> bool:
    # Nan-aware <, orders NaN after all numbers.
    # a != a only holds for NaN; it also compiles for integers.
    if a != a:
        return False
    elif b != b:
        return True
    else:
        return a < b


@nb.njit
def seed(value: int) -> None:
    """
    Seed the random number generator used for pivot selection.

    Numba keeps its own generator state, separate from ``np.random``: seeding
    numpy does not make the kernels deterministic.
    """
    np.random.seed(value)


@nb.njit
def _partition(A, low, high, pivot):
    """
    Partition A[low:high + 1] around the value at ``pivot``.

    Returns the new index of the pivot value: everything before it is smaller,
    everything after it is greater than or equal.
    """
    A[low], A[pivot] = A[pivot], A[low]
    pivot_value = A[low]
    i = low + 1
    j = high
    while True:
        while i <= j and nan_lt(A[i], pivot_value):
            i += 1
        while i <= j and not nan_lt(A[j], pivot_value):
            j -= 1
        if i >= j:
            break
        A[i], A[j] = A[j], A[i]
        i += 1
        j -= 1
    # Everything in [low + 1, i) is smaller than the pivot.
    A[low], A[i - 1] = A[i - 1], A[low]
    return i - 1


@nb.njit
def _select(A, low, high, k):
    """Select the k'th smallest element in A[low:high + 1]."""
    while low < high:
        pivot = np.random.randint(low, high + 1)
        i = _partition(A, low, high, pivot)
        if i == k:
            break
        elif i < k:
            low = i + 1
        else:
            high = i - 1
    return A[k]


@nb.njit
def _select_many(A, ranks, out):
    """
    Select multiple ranks from A.

    ``ranks`` must be sorted in increasing order and free of duplicates. After
    selecting a rank, the elements before it are all smaller: the next
    selection only has to search the window starting at the previous rank.
    """
    high = A.size - 1
    previous = 0
    for j in range(ranks.size):
        k = ranks[j]
        out[j] = _select(A, previous, high, k)
        previous = k
    return


@nb.njit
def _select_many_lanes(lanes, ranks, out):
    """Select the same ranks from every row of the 2D ``lanes``."""
    for i in range(lanes.shape[0]):
        _select_many(lanes[i], ranks, out[i])
    return


def sorted_ranks(indexes: Iterable) -> IntArray:
    return np.unique(np.asarray(indexes, dtype=IntDType))


def select_lanes(lanes: np.ndarray, ranks: IntArray) -> np.ndarray:
    """
    Select sorted, unique ranks from all lanes.

    Parameters
    ----------
    lanes: np.ndarray of shape (n_lane, n)
    ranks: np.ndarray of integers

    Returns
    -------
    selected: np.ndarray of shape (n_lane, ranks.size)
    """
    out = np.empty((lanes.shape[0], ranks.size), dtype=lanes.dtype)
    if lanes.shape[0] > 0 and ranks.size > 0:
        _select_many_lanes(lanes, ranks, out)
    return out


def partition(a: np.ndarray, pivot_index: int) -> int:
    """
    Partition the array in place around the value at ``pivot_index``.

    Uses Hoare's scheme: the pivot is swapped to the front, two cursors move
    towards each other swapping out-of-place elements, and the pivot is
    swapped into its final place.

    Parameters
    ----------
    a: np.ndarray of shape (n,)
        Shuffled in place.
    pivot_index: int

    Returns
    -------
    index: int
        The new index ``p`` of the pivot value: all elements in ``a[:p]`` are
        smaller than ``a[p]``, all elements in ``a[p + 1:]`` are greater than
        or equal.

    Examples
    --------
    >>> a = np.array([3, 1, 4, 5, 2])
    >>> partition(a, 2)
    3
    """
    a = check_array(a)
    check_1d(a)
    pivot_index = check_index(pivot_index, a.size, "pivot_index")
    return int(_partition(a, 0, a.size - 1, pivot_index))


def get_from_sorted(a: np.ndarray, i: int):
    """
    Return the element that would occupy position ``i`` if the array were
    sorted in increasing order.

    The array is shuffled in place to retrieve the element; no copy is
    allocated. Complexity (quickselect): O(n) on average, O(n^2) in the worst
    case.

    Parameters
    ----------
    a: np.ndarray of shape (n,)
        Shuffled in place.
    i: int

    Returns
    -------
    value: numpy scalar
    """
    a = check_array(a)
    check_1d(a)
    i = check_index(i, a.size)
    return a.dtype.type(_select(a, 0, a.size - 1, i))


def get_many_from_sorted(a: np.ndarray, indexes) -> Dict:
    """
    Bulk version of :func:`get_from_sorted`, retrieving multiple positions in
    a single pass.

    The indexes are sorted and deduplicated first. Every retrieval searches a
    smaller window than the previous one.

    Parameters
    ----------
    a: np.ndarray of shape (n,)
        Shuffled in place.
    indexes: sequence of int

    Returns
    -------
    selected: dict of int to scalar
        Ordered by index, in increasing order.
    """
    a = check_array(a)
    check_1d(a)
    ranks = sorted_ranks(indexes)
    if ranks.size == 0:
        return {}
    check_index(ranks[0], a.size)
    check_index(ranks[-1], a.size)
    out = np.empty(ranks.size, dtype=a.dtype)
    _select_many(a, ranks, out)
    return {int(k): v for k, v in zip(ranks, out)}
