from xselect.accessor import OrderStatisticsAccessor
from xselect.interpolate import (
    INTERPOLATION_METHODS,
    Higher,
    Interpolate,
    Linear,
    Lower,
    Midpoint,
    Nearest,
)
from xselect.maybe_nan import is_sentinel, remove_nan
from xselect.min_max import (
    argmax,
    argmin,
    max,
    max_skipnan,
    min,
    min_skipnan,
)
from xselect.quantile import (
    interquartile_range,
    quantile,
    quantile_axis,
    quantile_axis_skipnan,
    quantiles,
    quantiles_axis,
    quantiles_axis_skipnan,
)
from xselect.sort import get_from_sorted, get_many_from_sorted, partition, seed

__version__ = "0.1.0"

__all__ = (
    "OrderStatisticsAccessor",
    "INTERPOLATION_METHODS",
    "Interpolate",
    "Lower",
    "Higher",
    "Nearest",
    "Midpoint",
    "Linear",
    "is_sentinel",
    "remove_nan",
    "argmin",
    "argmax",
    "min",
    "max",
    "min_skipnan",
    "max_skipnan",
    "interquartile_range",
    "quantile",
    "quantiles",
    "quantile_axis",
    "quantiles_axis",
    "quantile_axis_skipnan",
    "quantiles_axis_skipnan",
    "partition",
    "get_from_sorted",
    "get_many_from_sorted",
    "seed",
)
