from __future__ import annotations
from pathlib import Path
from typing import Union

import pandas as pd

PathLike = Union[str, Path]


def load_matrix(path: PathLike) -> pd.DataFrame:
    """
    Load an abundance table whose first column holds the feature IDs.

    Args:
        path: .csv, .tsv/.txt, .parquet or .xlsx file

    Returns:
        pd.DataFrame: features x samples matrix indexed by feature ID
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(path)
    if suffix == ".xlsx":
        return pd.read_excel(path, index_col=0, engine="openpyxl")
    if suffix in (".tsv", ".txt"):
        return pd.read_csv(path, sep="\t", index_col=0)
    if suffix == ".csv":
        return pd.read_csv(path, index_col=0)
    raise ValueError(f"Unsupported table format: {path.suffix}")


def save_matrix(df: pd.DataFrame, path: PathLike) -> Path:
    """
    Save a matrix with its feature IDs, choosing the format from the file suffix.

    Returns:
        Path: The full path to the saved file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        # parquet needs string column names
        out = df.copy()
        out.columns = out.columns.astype(str)
        out.to_parquet(path, index=True)
    elif suffix == ".xlsx":
        df.to_excel(path, engine="openpyxl")
    elif suffix in (".tsv", ".txt"):
        df.to_csv(path, sep="\t")
    elif suffix == ".csv":
        df.to_csv(path)
    else:
        raise ValueError(f"Unsupported table format: {path.suffix}")
    return path
