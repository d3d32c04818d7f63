from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

import pandas as pd

from .exceptions import ConfigurationError, InvalidBaseError, InvalidModeError

# Per-sample quantities may be one global number, a sequence ordered like the
# samples, or a Series keyed by sample label.
PerSample = Union[float, Sequence[float], pd.Series]


class _Option(Enum):
    """Closed string option; ``parse`` rejects anything outside the enum."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == str(value):
                return member
        allowed = [m.value for m in cls]
        raise InvalidModeError(f"Unknown {cls.__name__} {value!r}; expected one of {allowed}")


class LogBase(_Option):
    E = "e"
    TWO = "2"

    @classmethod
    def parse(cls, value):
        try:
            return super().parse(value)
        except InvalidModeError:
            raise InvalidBaseError(
                f"Unsupported logarithm base {value!r}; only 'e' and '2' are supported"
            ) from None


class DenominatorMethod(_Option):
    GEOMEAN = "geomean"
    DESEQ2 = "DESeq2"


class ImputeMethod(_Option):
    MULTIPLICATIVE = "multiplicative"
    ADDITIVE = "additive"


class Orientation(_Option):
    AUTO = "auto"  # transpose when wider than tall
    FEATURES_BY_SAMPLES = "features_by_samples"
    SAMPLES_BY_FEATURES = "samples_by_features"


DEFAULT_BASE = LogBase.E
DEFAULT_DENOMINATOR = DenominatorMethod.GEOMEAN
DEFAULT_IMPUTE_METHOD = ImputeMethod.MULTIPLICATIVE
DEFAULT_IMPUTE_PROPORTION = 0.65
DEFAULT_ORIENTATION = Orientation.AUTO


@dataclass(frozen=True)
class ImputationConfig:
    """
    Parameters of the zero imputation step.

    Attributes:
        method: multiplicative (rebalance non-zero values) or additive (replace only)
        delta: imputed value; derived per sample from impute_proportion when None
        impute_proportion: fraction of each sample's detection limit used as delta
        sum_constraint: total each sample must keep; None means its own pre-imputation sum
    """

    method: ImputeMethod = DEFAULT_IMPUTE_METHOD
    delta: Optional[PerSample] = None
    impute_proportion: float = DEFAULT_IMPUTE_PROPORTION
    sum_constraint: Optional[PerSample] = None

    def __post_init__(self):
        object.__setattr__(self, "method", ImputeMethod.parse(self.method))
        if not 0 < self.impute_proportion <= 1:
            raise ConfigurationError(
                f"impute_proportion must lie in (0, 1], got {self.impute_proportion}"
            )
        if self.method is ImputeMethod.ADDITIVE and self.delta is None:
            raise ConfigurationError("Additive imputation requires an explicit delta.")

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "ImputationConfig":
        """Build a config from a plain dict such as ``{"method": "additive", "delta": 0.5}``."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        unknown = set(options) - {"method", "delta", "impute_proportion", "sum_constraint"}
        if unknown:
            raise ConfigurationError(f"Unknown imputation options: {sorted(unknown)}")
        kwargs = dict(options)
        # explicit None in a mapping means "use the default"
        if kwargs.get("method") is None:
            kwargs.pop("method", None)
        if kwargs.get("impute_proportion") is None:
            kwargs.pop("impute_proportion", None)
        return cls(**kwargs)
