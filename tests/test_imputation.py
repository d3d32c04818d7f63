import numpy as np
import pandas as pd
import pytest
from logratio.exceptions import ConfigurationError, DegenerateInputError, InvalidModeError
from logratio.imputation import (
    additive_replacement, detection_limits, impute_zeros, multiplicative_replacement,
)

@pytest.fixture
def small():
    # 3 features x 2 samples
    return pd.DataFrame([[4, 0], [2, 2], [0, 2]], index=["t1", "t2", "t3"], columns=["s1", "s2"], dtype=float)

def test_detection_limits(small):
    assert detection_limits(small).tolist() == [2.0, 2.0]

def test_multiplicative_worked_example(small):
    out = multiplicative_replacement(small, impute_proportion=0.5)
    assert np.allclose(out["s1"], [4 * 5 / 6, 2 * 5 / 6, 1.0])
    assert np.allclose(out["s2"], [1.0, 1.5, 1.5])
    assert list(out.index) == ["t1", "t2", "t3"]

def test_multiplicative_conserves_sample_sums():
    rng = np.random.default_rng(0)
    X = rng.poisson(3, size=(50, 4)).astype(float)
    X[0] = 1.0  # every sample has a non-zero value
    df = pd.DataFrame(X)
    out = multiplicative_replacement(df)
    assert (out.to_numpy() > 0).all()
    assert np.allclose(out.sum(axis=0), df.sum(axis=0))

def test_multiplicative_respects_sum_constraint(small):
    out = multiplicative_replacement(small, delta=0.5, sum_constraint=1e6)
    # one zero per sample: non-zero values shrink by 1 - 0.5/1e6
    assert np.isclose(out.loc["t1", "s1"], 4 * (1 - 0.5 / 1e6))
    assert out.loc["t3", "s1"] == 0.5

def test_multiplicative_per_sample_delta(small):
    out = multiplicative_replacement(small, delta=pd.Series({"s2": 0.2, "s1": 0.1}))
    assert out.loc["t3", "s1"] == 0.1
    assert out.loc["t1", "s2"] == 0.2

def test_per_sample_delta_must_cover_samples(small):
    with pytest.raises(ConfigurationError):
        multiplicative_replacement(small, delta=pd.Series({"s1": 0.1}))
    with pytest.raises(ConfigurationError):
        multiplicative_replacement(small, delta=[0.1, 0.2, 0.3])

def test_multiplicative_without_zeros_is_identity():
    df = pd.DataFrame([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
    pd.testing.assert_frame_equal(multiplicative_replacement(df), df)

def test_multiplicative_rejects_oversized_delta():
    df = pd.DataFrame([[1.0, 1.0], [0.0, 2.0], [1.0, 3.0]])
    with pytest.raises(ConfigurationError):
        multiplicative_replacement(df, delta=5.0)

def test_all_zero_sample_needs_delta():
    df = pd.DataFrame([[0.0, 1.0], [0.0, 2.0], [0.0, 3.0]])
    with pytest.raises(DegenerateInputError):
        multiplicative_replacement(df)
    out = multiplicative_replacement(df, delta=0.01)
    assert np.allclose(out[0], 0.01)

def test_all_zero_feature_becomes_delta():
    df = pd.DataFrame([[0.0, 0.0], [1.0, 2.0], [3.0, 4.0]])
    out = multiplicative_replacement(df, delta=0.1)
    assert np.allclose(out.iloc[0], 0.1)

def test_additive_only_replaces_zeros(small):
    out = additive_replacement(small, delta=0.5)
    assert out.loc["t1", "s1"] == 4.0
    assert out.loc["t3", "s1"] == 0.5
    assert out.loc["t1", "s2"] == 0.5

def test_additive_requires_delta(small):
    with pytest.raises(ConfigurationError):
        impute_zeros(small, method="additive")

def test_impute_zeros_rejects_unknown_method(small):
    with pytest.raises(InvalidModeError):
        impute_zeros(small, method="knn")

def test_impute_proportion_out_of_range(small):
    with pytest.raises(ConfigurationError):
        impute_zeros(small, impute_proportion=1.5)
