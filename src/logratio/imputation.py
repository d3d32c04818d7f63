"""
Zero imputation for compositional abundance matrices.

Zeros that are not essential (the feature is observed in some other sample)
are treated as values below the detection limit and replaced by a small
positive ``delta``. All functions work column-wise on a features x samples
matrix and return a new DataFrame with the same labels.

Strategies:
- multiplicative: zeros become delta and every non-zero value x in the sample
  becomes x * (1 - k * delta / S), where k is the number of zeros and S the
  sample's sum constraint, so the sample total stays at S
- additive: zeros become delta, nothing else changes (delta must be given)
"""

from __future__ import annotations
import logging
from typing import Optional

import numpy as np
import pandas as pd

from .config import DEFAULT_IMPUTE_PROPORTION, ImputeMethod, PerSample
from .exceptions import ConfigurationError, DegenerateInputError

logger = logging.getLogger(__name__)


def _per_sample(value: PerSample, df: pd.DataFrame, name: str) -> np.ndarray:
    """Broadcast a global or per-sample parameter to one positive float per column."""
    n_samples = df.shape[1]
    if isinstance(value, pd.Series):
        aligned = value.reindex(df.columns)
        if aligned.isna().any():
            missing = list(df.columns[aligned.isna().to_numpy()])
            raise ConfigurationError(f"{name} has no value for samples {missing[:10]}")
        arr = aligned.to_numpy(dtype=float)
    else:
        arr = np.asarray(value, dtype=float)
        if arr.ndim == 0:
            arr = np.full(n_samples, float(arr))
        elif arr.shape != (n_samples,):
            raise ConfigurationError(
                f"{name} must be a scalar or have one value per sample ({n_samples}), got shape {arr.shape}"
            )
    if not np.all(np.isfinite(arr)) or np.any(arr <= 0):
        raise ConfigurationError(f"{name} must be positive and finite, got {arr.tolist()[:10]}")
    return arr


def detection_limits(df: pd.DataFrame) -> pd.Series:
    """Smallest non-zero value of each sample (NaN for an all-zero sample)."""
    return df.where(df > 0).min(axis=0)


def resolve_delta(
    df: pd.DataFrame,
    delta: Optional[PerSample] = None,
    impute_proportion: float = DEFAULT_IMPUTE_PROPORTION,
) -> np.ndarray:
    """
    Imputation value for every sample.

    An explicit delta wins; otherwise delta = impute_proportion * detection limit.

    Raises:
        DegenerateInputError: if delta must be derived for a sample without non-zero values
    """
    if delta is not None:
        return _per_sample(delta, df, "delta")
    if not 0 < impute_proportion <= 1:
        raise ConfigurationError(f"impute_proportion must lie in (0, 1], got {impute_proportion}")
    limits = detection_limits(df)
    empty = limits.isna().to_numpy()
    if empty.any():
        raise DegenerateInputError(
            f"Samples {list(df.columns[empty])[:10]} have no non-zero values; "
            "a detection limit cannot be derived, supply delta explicitly."
        )
    return impute_proportion * limits.to_numpy(dtype=float)


def multiplicative_replacement(
    df: pd.DataFrame,
    delta: Optional[PerSample] = None,
    impute_proportion: float = DEFAULT_IMPUTE_PROPORTION,
    sum_constraint: Optional[PerSample] = None,
) -> pd.DataFrame:
    """
    Multiplicative replacement of zeros, keeping each sample's total at its sum constraint.

    Args:
        df: features x samples matrix of non-negative values
        delta: imputed value (global or per sample); derived when None
        impute_proportion: fraction of the detection limit used when delta is None
        sum_constraint: per-sample total to preserve; defaults to the sample sums

    Returns:
        DataFrame with no zeros

    Raises:
        ConfigurationError: if delta is so large that non-zero values would not stay positive
    """
    X = df.to_numpy(dtype=float, copy=True)
    zeros = X == 0
    d = resolve_delta(df, delta, impute_proportion)
    S = X.sum(axis=0) if sum_constraint is None else _per_sample(sum_constraint, df, "sum_constraint")
    k = zeros.sum(axis=0)

    has_nonzero = ~zeros.all(axis=0)
    with np.errstate(divide="ignore", invalid="ignore"):
        factor = np.where(has_nonzero, 1.0 - k * d / S, 1.0)
    bad = factor <= 0
    if bad.any():
        raise ConfigurationError(
            f"delta is too large for samples {list(df.columns[bad])[:10]}: "
            "imputed zeros would exceed the sum constraint."
        )

    out = np.where(zeros, d[np.newaxis, :], X * factor[np.newaxis, :])
    logger.debug("Multiplicative imputation replaced %d zeros in %d samples", int(k.sum()), int((k > 0).sum()))
    return pd.DataFrame(out, index=df.index, columns=df.columns)


def additive_replacement(df: pd.DataFrame, delta: Optional[PerSample]) -> pd.DataFrame:
    """Replace zeros with delta and leave every other value untouched."""
    if delta is None:
        raise ConfigurationError("Additive imputation requires an explicit delta.")
    X = df.to_numpy(dtype=float, copy=True)
    zeros = X == 0
    d = _per_sample(delta, df, "delta")
    out = np.where(zeros, d[np.newaxis, :], X)
    logger.debug("Additive imputation replaced %d zeros", int(zeros.sum()))
    return pd.DataFrame(out, index=df.index, columns=df.columns)


def impute_zeros(
    df: pd.DataFrame,
    method: ImputeMethod | str = ImputeMethod.MULTIPLICATIVE,
    delta: Optional[PerSample] = None,
    impute_proportion: float = DEFAULT_IMPUTE_PROPORTION,
    sum_constraint: Optional[PerSample] = None,
) -> pd.DataFrame:
    """Impute zeros with the chosen strategy ("multiplicative" or "additive")."""
    method = ImputeMethod.parse(method)
    if method is ImputeMethod.ADDITIVE:
        return additive_replacement(df, delta)
    return multiplicative_replacement(
        df, delta=delta, impute_proportion=impute_proportion, sum_constraint=sum_constraint
    )
