from __future__ import annotations
import logging
from typing import Tuple

import numpy as np
import pandas as pd

from .config import DEFAULT_ORIENTATION, Orientation
from .exceptions import InvalidMatrixError
from .validators import assert_abundance

logger = logging.getLogger(__name__)


def as_abundance_frame(mat) -> pd.DataFrame:
    """
    Coerce a matrix to a float DataFrame and validate it as an abundance matrix.

    Args:
        mat: DataFrame or 2-D array-like (rows = features, columns = samples)

    Returns:
        A new float DataFrame; labels are kept, arrays get positional labels

    Raises:
        InvalidMatrixError: if the input is not 2-D, not numeric, empty,
            or holds missing or negative values
    """
    if isinstance(mat, pd.DataFrame):
        df = mat
    else:
        arr = np.asarray(mat)
        if arr.ndim != 2:
            raise InvalidMatrixError(f"Expected a 2-D matrix, got {arr.ndim}-D input")
        df = pd.DataFrame(arr)
    try:
        df = df.astype(float)
    except (TypeError, ValueError) as e:
        raise InvalidMatrixError(f"Abundance matrix must be numeric: {e}") from e
    return assert_abundance(df)


def orient_features_by_samples(
    df: pd.DataFrame, orientation: Orientation | str = DEFAULT_ORIENTATION
) -> Tuple[pd.DataFrame, bool]:
    """
    Put a matrix into features x samples orientation.

    With ``auto`` a matrix with more columns than rows is taken to be
    samples x features and transposed; a square matrix is left as is.
    Small feature counts should pass an explicit orientation instead.

    Returns:
        (oriented matrix, whether it was transposed)
    """
    orientation = Orientation.parse(orientation)
    if orientation is Orientation.AUTO:
        flip = df.shape[1] > df.shape[0]
    else:
        flip = orientation is Orientation.SAMPLES_BY_FEATURES
    if flip:
        logger.debug("Transposing %d x %d matrix to features x samples", *df.shape)
        return df.T, True
    return df, False


def restore_orientation(df: pd.DataFrame, flipped: bool) -> pd.DataFrame:
    """Undo orient_features_by_samples."""
    return df.T if flipped else df


def essential_zero_mask(df: pd.DataFrame) -> pd.Series:
    """True for every feature (row) that is zero in all samples."""
    return (df == 0).all(axis=1)


def rounded_zero_mask(df: pd.DataFrame) -> pd.DataFrame:
    """True for zero cells whose feature is non-zero in at least one sample."""
    zeros = df == 0
    zeros.loc[essential_zero_mask(df).to_numpy()] = False
    return zeros


def remove_essential_zeros(df: pd.DataFrame) -> pd.DataFrame:
    """
    Drop features (rows) that are zero in every sample.

    Args:
        df: features x samples matrix

    Returns:
        DataFrame without the all-zero rows; all other rows keep their order
    """
    mask = essential_zero_mask(df)
    if mask.any():
        logger.debug("Removing %d essential-zero features out of %d", int(mask.sum()), len(mask))
    return df.loc[~mask.to_numpy()].copy()

