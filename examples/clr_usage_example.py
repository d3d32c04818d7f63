"""
Simple usage example for the logratio transformation.

Builds a small transcript abundance matrix with rounded and essential zeros
and runs it through the CLR pipeline with both denominators.
"""

import numpy as np
import pandas as pd

from logratio import transform


def simple_usage_example():
    print("=== CLR Transformation - Usage Example ===\n")

    rng = np.random.default_rng(1)
    tpm = pd.DataFrame(
        rng.lognormal(mean=2, sigma=1.5, size=(8, 3)),
        index=[f"ENST{i:05d}" for i in range(8)],
        columns=["sample_A", "sample_B", "sample_C"],
    )
    tpm.iloc[2, 1] = 0.0   # rounded zero
    tpm.iloc[5, :] = 0.0   # essential zero
    print(f"1. Abundance matrix: {tpm.shape[0]} targets x {tpm.shape[1]} samples")

    print("\n2. CLR with geometric-mean denominator (essential zeros removed)...")
    clr = transform(
        tpm,
        base="e",
        remove_essential_zeros=True,
        imputation_config={"method": "multiplicative", "delta": None, "impute_proportion": 0.65},
        denominator_mode="geomean",
    )
    print(clr.round(3))

    print("\n3. Same matrix with DESeq2 size factors, log base 2...")
    print(transform(tpm, base="2", remove_essential_zeros=True, denominator_mode="DESeq2").round(3))


if __name__ == "__main__":
    simple_usage_example()
