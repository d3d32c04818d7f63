"""
Per-sample denominators for logratio transformations.

- geomean: geometric mean of all features within each sample (centered logratio)
- DESeq2: median-of-ratios size factors, i.e. the median over features of each
  value divided by that feature's geometric mean across samples

Both expect a strictly positive features x samples matrix.
"""

from __future__ import annotations
import logging
from typing import Callable, Dict

import numpy as np
import pandas as pd
from scipy.stats import gmean

from .config import DEFAULT_DENOMINATOR, DenominatorMethod
from .exceptions import ZeroValueError

logger = logging.getLogger(__name__)


def _require_positive(df: pd.DataFrame) -> None:
    if (df.to_numpy() <= 0).any():
        raise ZeroValueError("Denominators need strictly positive values; impute zeros first.")


def geomean_denominators(df: pd.DataFrame) -> pd.Series:
    """Geometric mean of every sample (column)."""
    _require_positive(df)
    return pd.Series(gmean(df.to_numpy(dtype=float), axis=0), index=df.columns)


def deseq_size_factors(df: pd.DataFrame) -> pd.Series:
    """
    DESeq2-style size factors.

    For each feature the geometric mean across samples serves as a pseudo-reference;
    a sample's size factor is the median over features of its values divided
    by that reference.
    """
    _require_positive(df)
    log_x = np.log(df.to_numpy(dtype=float))
    log_geomeans = log_x.mean(axis=1, keepdims=True)
    sf = np.median(np.exp(log_x - log_geomeans), axis=0)
    return pd.Series(sf, index=df.columns)


DENOMINATORS: Dict[DenominatorMethod, Callable[[pd.DataFrame], pd.Series]] = {
    DenominatorMethod.GEOMEAN: geomean_denominators,
    DenominatorMethod.DESEQ2: deseq_size_factors,
}


def calculate_denominators(df: pd.DataFrame, method: DenominatorMethod | str = DEFAULT_DENOMINATOR) -> pd.Series:
    """One denominator per sample, computed with the requested method."""
    method = DenominatorMethod.parse(method)
    logger.debug("Computing %s denominators for %d samples", method.value, df.shape[1])
    return DENOMINATORS[method](df)
