from __future__ import annotations
import numpy as np
import pandas as pd
from pandera import Check, DataFrameSchema
from pandera.errors import SchemaErrors

from .exceptions import InvalidMatrixError

# Table-wide checks, so the schema holds for any feature/sample labels.
schema_abundance = DataFrameSchema(
    checks=[
        Check(lambda df: df.notna(), ignore_na=False, error="abundance matrix contains missing values"),
        Check(lambda df: df.isna() | (df >= 0), ignore_na=False, error="abundance matrix contains negative values"),
        Check(lambda df: df.isna() | np.isfinite(df), ignore_na=False, error="abundance matrix contains non-finite values"),
    ],
)


def assert_abundance(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate an abundance matrix, reporting every violation at once.

    Raises:
        InvalidMatrixError: if the matrix is empty, has missing values or negative entries
    """
    if df.shape[0] == 0 or df.shape[1] == 0:
        raise InvalidMatrixError(f"Abundance matrix must have at least one row and column, got shape {df.shape}")
    try:
        return schema_abundance.validate(df, lazy=True)
    except SchemaErrors as e:
        failed = sorted(set(e.failure_cases["check"].astype(str)))
        raise InvalidMatrixError(f"Invalid abundance matrix: {failed}") from e
