import numpy as np
import pandas as pd
import pytest
from logratio.denominators import calculate_denominators, deseq_size_factors, geomean_denominators
from logratio.exceptions import InvalidModeError, ZeroValueError

@pytest.fixture
def positive():
    return pd.DataFrame(
        [[1.0, 4.0, 2.0], [8.0, 2.0, 2.0], [2.0, 1.0, 8.0]],
        index=["t1", "t2", "t3"], columns=["s1", "s2", "s3"],
    )

def test_geomean_denominators(positive):
    g = geomean_denominators(positive)
    assert list(g.index) == ["s1", "s2", "s3"]
    assert np.allclose(g, [16 ** (1 / 3), 8 ** (1 / 3), 32 ** (1 / 3)])

def test_geomean_scales_with_sample(positive):
    scaled = positive.copy()
    scaled["s2"] *= 10
    g, g_scaled = geomean_denominators(positive), geomean_denominators(scaled)
    assert np.isclose(g_scaled["s2"], 10 * g["s2"])
    assert np.allclose(g_scaled[["s1", "s3"]], g[["s1", "s3"]])

def test_deseq_size_factors_median_of_ratios(positive):
    X = positive.to_numpy()
    feature_geomeans = np.exp(np.log(X).mean(axis=1))
    expected = np.median(X / feature_geomeans[:, None], axis=0)
    sf = deseq_size_factors(positive)
    assert list(sf.index) == ["s1", "s2", "s3"]
    assert np.allclose(sf, expected)

def test_deseq_size_factors_equal_for_identical_samples():
    df = pd.DataFrame({"a": [1.0, 5.0, 9.0], "b": [1.0, 5.0, 9.0]})
    assert np.allclose(deseq_size_factors(df), 1.0)

def test_calculate_denominators_dispatch(positive):
    pd.testing.assert_series_equal(calculate_denominators(positive, "geomean"), geomean_denominators(positive))
    pd.testing.assert_series_equal(calculate_denominators(positive, "DESeq2"), deseq_size_factors(positive))

def test_calculate_denominators_rejects_unknown_mode(positive):
    with pytest.raises(InvalidModeError):
        calculate_denominators(positive, "upperquartile")

def test_denominators_reject_zeros():
    df = pd.DataFrame([[1.0, 0.0], [2.0, 3.0]])
    with pytest.raises(ZeroValueError):
        geomean_denominators(df)
    with pytest.raises(ZeroValueError):
        deseq_size_factors(df)

def test_deseq_size_factors_even_feature_count_uses_median_of_ratios():
    # with an even number of features the median averages the two middle ratios
    df = pd.DataFrame([[1.0, 3.0], [4.0, 2.0], [2.0, 8.0], [5.0, 6.0]])
    ratios = df.to_numpy() / np.sqrt(df.to_numpy().prod(axis=1, keepdims=True))
    expected = [(np.sort(ratios[:, j])[1] + np.sort(ratios[:, j])[2]) / 2 for j in range(2)]
    assert np.allclose(deseq_size_factors(df), expected)
