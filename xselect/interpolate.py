"""
Interpolation strategies for quantiles.

The q-th quantile of a lane of length n is the element that would be at
(fractional) position q * (n - 1) if the lane were sorted. When this
position is not an integer, the quantile lies between the values at the lower
and the higher rank; the strategy decides which of the two are required, and
how they are combined.

The strategies are stateless: all methods are classmethods and the classes
themselves are passed around.
"""
import abc
import math
from typing import Optional, Type, Union

import numpy as np

from xselect.utils import check_quantile


def float_quantile_index(q: float, n: int) -> float:
    return check_quantile(q) * (n - 1)


def fraction(q: float, n: int) -> float:
    """
    Return the fraction that the quantile is between the lower and higher
    indices: 0.0 where it exactly matches the lower index, approaching 1.0
    near the higher index.
    """
    index = float_quantile_index(q, n)
    return index - math.floor(index)


def lower_index(q: float, n: int) -> int:
    """Index of the value on the lower side of the quantile."""
    return int(math.floor(float_quantile_index(q, n)))


def higher_index(q: float, n: int) -> int:
    """Index of the value on the higher side of the quantile."""
    return int(math.ceil(float_quantile_index(q, n)))


def unsigned_difference(lower: np.ndarray, higher: np.ndarray):
    """
    Compute ``higher - lower`` for integer arrays as an unsigned integer of the
    same width. Since higher >= lower, the result is exact.

    Returns
    -------
    unsigned: np.dtype
    difference: np.ndarray of unsigned
    """
    unsigned = np.dtype(f"u{lower.dtype.itemsize}")
    return unsigned, higher.astype(unsigned) - lower.astype(unsigned)


class Interpolate(abc.ABC):
    """Used to provide an interpolation strategy to the quantile functions."""

    @classmethod
    @abc.abstractmethod
    def needs_lower(cls, q: float, n: int) -> bool:
        """Whether the lower value is needed to compute the quantile."""

    @classmethod
    @abc.abstractmethod
    def needs_higher(cls, q: float, n: int) -> bool:
        """Whether the higher value is needed to compute the quantile."""

    @classmethod
    @abc.abstractmethod
    def interpolate(
        cls,
        lower: Optional[np.ndarray],
        higher: Optional[np.ndarray],
        q: float,
        n: int,
    ) -> np.ndarray:
        """
        Compute the quantile from the lower and higher values.

        A side that is not needed may be passed as None. The lower and higher
        index coincide when q * (n - 1) is an integer: the lower and higher
        values are then the same.
        """


class Lower(Interpolate):
    """Select the lower value."""

    @classmethod
    def needs_lower(cls, q, n):
        return True

    @classmethod
    def needs_higher(cls, q, n):
        return False

    @classmethod
    def interpolate(cls, lower, higher, q, n):
        return lower


class Higher(Interpolate):
    """Select the higher value."""

    @classmethod
    def needs_lower(cls, q, n):
        return False

    @classmethod
    def needs_higher(cls, q, n):
        return True

    @classmethod
    def interpolate(cls, lower, higher, q, n):
        return higher


class Nearest(Interpolate):
    """Select the nearest value; ties go to the higher value."""

    @classmethod
    def needs_lower(cls, q, n):
        return fraction(q, n) < 0.5

    @classmethod
    def needs_higher(cls, q, n):
        return not cls.needs_lower(q, n)

    @classmethod
    def interpolate(cls, lower, higher, q, n):
        if cls.needs_lower(q, n):
            return lower
        else:
            return higher


class Midpoint(Interpolate):
    """
    Select the midpoint of the two values: ``lower + (higher - lower) / 2``.

    For integers, the division rounds down. The difference is computed as an
    unsigned integer of the same width, so it cannot overflow.
    """

    @classmethod
    def needs_lower(cls, q, n):
        return True

    @classmethod
    def needs_higher(cls, q, n):
        return True

    @classmethod
    def interpolate(cls, lower, higher, q, n):
        lower = np.asarray(lower)
        higher = np.asarray(higher)
        if np.issubdtype(lower.dtype, np.integer):
            _, difference = unsigned_difference(lower, higher)
            return lower + (difference // 2).astype(lower.dtype)
        return lower + (higher - lower) / 2


class Linear(Interpolate):
    """
    Linearly interpolate between the two values:
    ``lower + (higher - lower) * fraction``, where ``fraction`` is the
    fractional part of q * (n - 1).

    For integers, the increment is computed in double precision and truncated.
    It is added to the lower value in unsigned arithmetic, so the result stays
    within [lower, higher] even when the difference exceeds the signed range.
    """

    @classmethod
    def needs_lower(cls, q, n):
        return True

    @classmethod
    def needs_higher(cls, q, n):
        return True

    @classmethod
    def interpolate(cls, lower, higher, q, n):
        lower = np.asarray(lower)
        higher = np.asarray(higher)
        f = fraction(q, n)
        if np.issubdtype(lower.dtype, np.integer):
            unsigned, difference = unsigned_difference(lower, higher)
            # f < 1, so the increment fits the unsigned type; rounding of the
            # float64 difference may still push it past the exact difference.
            increment = np.trunc(f * difference.astype(np.float64)).astype(unsigned)
            increment = np.minimum(increment, difference)
            return (lower.astype(unsigned) + increment).astype(lower.dtype)
        return lower + (higher - lower) * f


INTERPOLATION_METHODS = {
    "lower": Lower,
    "higher": Higher,
    "nearest": Nearest,
    "midpoint": Midpoint,
    "linear": Linear,
}

Method = Union[str, Type[Interpolate], Interpolate]


def get_interpolation(method: Method) -> Type[Interpolate]:
    if isinstance(method, str):
        try:
            return INTERPOLATION_METHODS[method]
        except KeyError:
            raise ValueError(
                f"Invalid interpolation method: {method}. Valid options are: "
                f"{', '.join(INTERPOLATION_METHODS)}"
            )
    elif isinstance(method, type) and issubclass(method, Interpolate):
        return method
    elif isinstance(method, Interpolate):
        return type(method)
    raise TypeError(
        "Expected interpolation method name or Interpolate, received: "
        f"{type(method).__name__}"
    )
