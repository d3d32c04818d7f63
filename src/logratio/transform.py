from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .cleaning import as_abundance_frame, orient_features_by_samples, remove_essential_zeros, restore_orientation
from .config import (
    DEFAULT_BASE,
    DEFAULT_DENOMINATOR,
    DEFAULT_IMPUTE_PROPORTION,
    DEFAULT_ORIENTATION,
    DenominatorMethod,
    ImputationConfig,
    ImputeMethod,
    LogBase,
    Orientation,
    PerSample,
)
from .denominators import calculate_denominators
from .exceptions import ZeroValueError
from .imputation import impute_zeros

logger = logging.getLogger(__name__)

_LOG = {LogBase.E: np.log, LogBase.TWO: np.log2}


def calculate_clr(
    df: pd.DataFrame,
    base: LogBase | str = DEFAULT_BASE,
    denom_method: DenominatorMethod | str = DEFAULT_DENOMINATOR,
) -> pd.DataFrame:
    """
    Centered logratio of a zero-free features x samples matrix.

    Each entry becomes log(x / g), where g is its sample's geometric mean
    (or DESeq2 size factor with denom_method="DESeq2").

    Raises:
        ZeroValueError: if any entry is zero
        InvalidBaseError: for a base other than "e" or "2"
        InvalidModeError: for an unknown denominator method
    """
    base = LogBase.parse(base)
    denom_method = DenominatorMethod.parse(denom_method)
    if (df.to_numpy() == 0).any():
        raise ZeroValueError(
            "The CLR transformation cannot be done because there is "
            "at least one zero value in the supplied matrix."
        )
    denominators = calculate_denominators(df, denom_method)
    ratios = df.div(denominators, axis=1)
    return pd.DataFrame(_LOG[base](ratios.to_numpy(dtype=float)), index=df.index, columns=df.columns)


def clr_transformation(
    mat,
    base: LogBase | str = DEFAULT_BASE,
    remove_zeros: bool = False,
    denom_method: DenominatorMethod | str = DEFAULT_DENOMINATOR,
    impute_method: ImputeMethod | str = ImputeMethod.MULTIPLICATIVE,
    delta: Optional[PerSample] = None,
    impute_proportion: float = DEFAULT_IMPUTE_PROPORTION,
    sum_constraint: Optional[PerSample] = None,
    orientation: Orientation | str = DEFAULT_ORIENTATION,
):
    """
    Centered logratio transformation of an abundance matrix, with zero handling.

    The matrix is expected as features x samples (features >> samples). With
    orientation="auto" a wider-than-tall matrix is transposed for the
    calculation and transposed back on return. Steps: optional removal of
    essential zeros, imputation of the remaining zeros, division by the
    per-sample denominator, logarithm.

    Args:
        mat: DataFrame or 2-D array of non-negative abundances
        base: "e" or "2"
        remove_zeros: drop features that are zero in every sample first
        denom_method: "geomean" or "DESeq2"
        impute_method: "multiplicative" or "additive"
        delta: imputed value (global or per sample); derived from impute_proportion when None
        impute_proportion: fraction of each sample's smallest non-zero value used as delta
        sum_constraint: per-sample total kept by multiplicative imputation
        orientation: "auto", "features_by_samples" or "samples_by_features"

    Returns:
        Transformed matrix in the input orientation; a DataFrame keeps its labels,
        an array input gives an array back
    """
    # options are checked before any data work
    base = LogBase.parse(base)
    denom_method = DenominatorMethod.parse(denom_method)
    orientation = Orientation.parse(orientation)
    config = ImputationConfig(
        method=impute_method, delta=delta,
        impute_proportion=impute_proportion, sum_constraint=sum_constraint,
    )

    df, flipped = orient_features_by_samples(as_abundance_frame(mat), orientation)
    if remove_zeros:
        df = remove_essential_zeros(df)

    imputed = impute_zeros(
        df, method=config.method, delta=config.delta,
        impute_proportion=config.impute_proportion, sum_constraint=config.sum_constraint,
    )
    clr_table = restore_orientation(calculate_clr(imputed, base=base, denom_method=denom_method), flipped)
    logger.debug("CLR (%s, base %s) produced a %d x %d matrix", denom_method.value, base.value, *clr_table.shape)

    if isinstance(mat, pd.DataFrame):
        return clr_table
    return clr_table.to_numpy()


def transform(
    matrix,
    base: LogBase | str = DEFAULT_BASE,
    remove_essential_zeros: bool = False,
    imputation_config: Union[ImputationConfig, Mapping[str, Any], None] = None,
    denominator_mode: DenominatorMethod | str = DEFAULT_DENOMINATOR,
    orientation: Orientation | str = DEFAULT_ORIENTATION,
):
    """
    Entry point for host tools: zero-aware logratio transformation of an abundance matrix.

    imputation_config may be an ImputationConfig, a dict like
    ``{"method": "multiplicative", "delta": None, "impute_proportion": 0.65}``
    or None for the defaults.
    """
    config = ImputationConfig.from_mapping(imputation_config)
    return clr_transformation(
        matrix,
        base=base,
        remove_zeros=remove_essential_zeros,
        denom_method=denominator_mode,
        impute_method=config.method,
        delta=config.delta,
        impute_proportion=config.impute_proportion,
        sum_constraint=config.sum_constraint,
        orientation=orientation,
    )
