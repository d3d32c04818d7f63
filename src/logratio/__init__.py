"""
logratio - zero-aware centered logratio transformation of abundance matrices.

Pipeline stages (features x samples):
- cleaning: orientation handling and essential-zero removal
- imputation: multiplicative / additive replacement of rounded zeros
- denominators: per-sample geometric means or DESeq2 size factors
- transform: the logratio itself and the ``transform`` entry point
"""

from .config import (
    DenominatorMethod, ImputationConfig, ImputeMethod, LogBase, Orientation
)
from .exceptions import (
    LogratioError, ConfigurationError, DegenerateInputError, InvalidModeError,
    InvalidBaseError, ZeroValueError, InvalidMatrixError
)
from .cleaning import (
    orient_features_by_samples, restore_orientation, essential_zero_mask,
    rounded_zero_mask, remove_essential_zeros
)
from .imputation import (
    detection_limits, impute_zeros, multiplicative_replacement, additive_replacement
)
from .denominators import calculate_denominators, geomean_denominators, deseq_size_factors
from .transform import calculate_clr, clr_transformation, transform
from .estimator import LogratioTransformer
from .data_io import load_matrix, save_matrix
from .pipeline import run_clr_pipeline

__all__ = [
    # Options
    "DenominatorMethod", "ImputationConfig", "ImputeMethod", "LogBase", "Orientation",

    # Errors
    "LogratioError", "ConfigurationError", "DegenerateInputError", "InvalidModeError",
    "InvalidBaseError", "ZeroValueError", "InvalidMatrixError",

    # Pipeline stages
    "orient_features_by_samples", "restore_orientation", "essential_zero_mask",
    "rounded_zero_mask", "remove_essential_zeros",
    "detection_limits", "impute_zeros", "multiplicative_replacement", "additive_replacement",
    "calculate_denominators", "geomean_denominators", "deseq_size_factors",
    "calculate_clr", "clr_transformation", "transform",

    # Adapters and I/O
    "LogratioTransformer", "load_matrix", "save_matrix", "run_clr_pipeline",
]

__version__ = "0.1.0"
