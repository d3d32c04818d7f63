"""
scikit-learn adapter for the logratio transformation.

scikit-learn puts samples in rows, so the transformer always calls the
pipeline with orientation="samples_by_features" and returns samples in rows.
"""

from __future__ import annotations
from typing import Optional

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin

from .config import DEFAULT_IMPUTE_PROPORTION, Orientation
from .transform import clr_transformation


class LogratioTransformer(TransformerMixin, BaseEstimator):
    """
    Stateless CLR transformer for (samples x features) design matrices.

    Every call to ``transform`` recomputes imputation values and denominators
    from the data it receives; ``fit`` learns nothing.
    """

    def __init__(self, base: str = "e", remove_zeros: bool = False,
                 denom_method: str = "geomean", impute_method: str = "multiplicative",
                 delta: Optional[float] = None, impute_proportion: float = DEFAULT_IMPUTE_PROPORTION,
                 sum_constraint: Optional[float] = None):
        self.base = base
        self.remove_zeros = remove_zeros
        self.denom_method = denom_method
        self.impute_method = impute_method
        self.delta = delta
        self.impute_proportion = impute_proportion
        self.sum_constraint = sum_constraint

    def fit(self, X, y=None) -> "LogratioTransformer":
        self.n_features_in_ = np.asarray(X).shape[1]
        return self

    def transform(self, X):
        return clr_transformation(
            X,
            base=self.base,
            remove_zeros=self.remove_zeros,
            denom_method=self.denom_method,
            impute_method=self.impute_method,
            delta=self.delta,
            impute_proportion=self.impute_proportion,
            sum_constraint=self.sum_constraint,
            orientation=Orientation.SAMPLES_BY_FEATURES,
        )
