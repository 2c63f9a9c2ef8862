import numpy as np

FloatDType = np.float64
IntDType = np.intp

# Requires numpy 1.21, not on conda yet...
# FloatArray = np.ndarray[FloatDType]
# IntArray = np.ndarray[IntDType]
# BoolArray = np.ndarray[np.bool_]

FloatArray = np.ndarray
IntArray = np.ndarray
BoolArray = np.ndarray
MaskedArray = np.ma.MaskedArray

# Name of the dimension added by the accessor for a batch of quantiles.
QUANTILE_DIM = "quantile"
