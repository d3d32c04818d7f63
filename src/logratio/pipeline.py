from __future__ import annotations
import logging
from pathlib import Path

from .data_io import load_matrix, save_matrix
from .transform import transform

logger = logging.getLogger(__name__)


def run_clr_pipeline(input_path, output_path, **options) -> Path:
    """
    Load an abundance table, CLR-transform it and save the result.

    Keyword options are passed on to ``transform`` (base, remove_essential_zeros,
    imputation_config, denominator_mode, orientation).
    """
    mat = load_matrix(input_path)
    logger.info("Loaded %d x %d abundance matrix from %s", mat.shape[0], mat.shape[1], input_path)
    clr_table = transform(mat, **options)
    path = save_matrix(clr_table, output_path)
    logger.info("Saved transformed matrix to %s", path)
    return path
