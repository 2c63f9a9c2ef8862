from typing import Hashable, Sequence, Union

import numpy as np
import xarray as xr

from xselect.constants import QUANTILE_DIM
from xselect.interpolate import Method
from xselect.quantile import quantiles_axis, quantiles_axis_skipnan


def _as_float_filled(result) -> np.ndarray:
    # xarray represents missing values by NaN rather than by masking. The
    # skipnan functions return masked arrays for integer input: these always
    # become float, also when no lane is missing.
    if np.ma.isMaskedArray(result):
        return result.astype(np.float64).filled(np.nan)
    return result


@xr.register_dataarray_accessor("ostats")
class OrderStatisticsAccessor:
    """
    Xarray DataArray "accessor" to compute order statistics by selection.

    Examples
    --------

    To compute the median along the time dimension, skipping NaN values:

    >>> da.ostats.median("time")

    To compute the lower and upper quartiles at once:

    >>> da.ostats.quantile([0.25, 0.75], "time", method="nearest")

    """

    def __init__(self, obj: xr.DataArray):
        self._obj = obj

    def quantile(
        self,
        q: Union[float, Sequence[float]],
        dim: Hashable,
        method: Method = "linear",
        skipna: bool = True,
    ) -> xr.DataArray:
        """
        Compute the q-th quantile(s) along a dimension.

        The data is copied first: unlike the array functions, the DataArray is
        not shuffled.

        Parameters
        ----------
        q: float or sequence of float
            Between 0.0 and 1.0, inclusive.
        dim: str
        method: str or Interpolate, default: "linear"
            One of "lower", "higher", "nearest", "midpoint", "linear".
        skipna: bool, default: True
            Whether to skip NaN values.

        Returns
        -------
        quantile: xr.DataArray
            ``dim`` is removed. For a sequence of q, a leading "quantile"
            dimension is added. With ``skipna``, integer data results in
            float64, with NaN where no valid value exists.
        """
        obj = self._obj
        axis = obj.get_axis_num(dim)
        scalar = np.ndim(q) == 0
        qs = np.atleast_1d(np.asarray(q, dtype=np.float64))
        # E.g. netCDF files store big-endian data.
        data = np.array(obj.values, dtype=obj.dtype.newbyteorder("="))

        if skipna:
            result = quantiles_axis_skipnan(data, axis, qs, method)
        else:
            result = quantiles_axis(data, axis, qs, method)
            if result is None:
                raise ValueError(f"Cannot compute quantile: dimension {dim} is empty")

        dims = tuple(d for d in obj.dims if d != dim)
        coords = {
            name: coord for name, coord in obj.coords.items() if dim not in coord.dims
        }
        # Duplicate quantiles are computed only once.
        values = [_as_float_filled(result[float(qq)]) for qq in qs]
        if scalar:
            return xr.DataArray(values[0], coords=coords, dims=dims, name=obj.name)
        return xr.DataArray(
            np.stack(values),
            coords={QUANTILE_DIM: qs, **coords},
            dims=(QUANTILE_DIM, *dims),
            name=obj.name,
        )

    def median(self, dim: Hashable, skipna: bool = True) -> xr.DataArray:
        """Compute the median along a dimension."""
        return self.quantile(0.5, dim, method="linear", skipna=skipna)
