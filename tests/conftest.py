import os
import tempfile

# Must be set before any matplotlib import
os.environ.setdefault("MPLBACKEND", "Agg")
os.environ.setdefault("MPLCONFIGDIR", tempfile.mkdtemp(prefix="mplconfig-"))

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest
from sklearn.decomposition import PCA

from pca_plots import PCAResult


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def iris_like(rng):
    """4-component, 150-observation PCA result plus a dependent variable."""
    data = pd.DataFrame(rng.normal(size=(150, 4)), columns=["a", "b", "c", "d"])
    data["b"] += 0.8 * data["a"]
    model = PCA().fit(data)
    result = PCAResult.from_sklearn(model, data)
    dependent = pd.Series(rng.uniform(0.1, 2.5, size=150), name="Petal.Width")
    return result, dependent


@pytest.fixture
def wide_result(rng):
    """12 components, so the default line plot window fits."""
    data = rng.normal(size=(60, 12)) * np.linspace(3, 0.2, 12)
    model = PCA().fit(data)
    return PCAResult.from_sklearn(model, data)


@pytest.fixture
def scree_result():
    sdev = [5, 3, 2, 1, 0.8, 0.5, 0.3, 0.2, 0.1, 0.05]
    scores = np.zeros((3, 10))
    return PCAResult(sdev=sdev, x=scores)
