# Container for an already computed PCA (standard deviations, scores, loadings)
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

try:
    from .errors import InsufficientDataError
except ImportError:
    from errors import InsufficientDataError


def component_names(n: int, prefix: str = "PC"):
    """Column labels PC1..PCn."""
    return [f"{prefix}{i+1}" for i in range(n)]


@dataclass(frozen=True)
class PCAResult:
    """
    The parts of a PCA fit that the plots consume.

    Args:
        sdev: Standard deviation of each principal component, in decreasing order
        x: Scores (observations x components), columns PC1..PCk
        rotation: Optional loadings (variables x components)
    """
    sdev: np.ndarray
    x: pd.DataFrame
    rotation: Optional[pd.DataFrame] = None

    def __post_init__(self):
        sdev = np.asarray(self.sdev, dtype=float)
        if sdev.ndim != 1:
            raise ValueError(f"sdev must be one-dimensional, got shape {sdev.shape}")
        if np.any(sdev < 0):
            raise ValueError("sdev must be non-negative")

        x = self.x
        if not isinstance(x, pd.DataFrame):
            x = np.asarray(x, dtype=float)
            if x.ndim != 2:
                raise ValueError(f"x must be a 2-D score matrix, got shape {x.shape}")
            x = pd.DataFrame(x, columns=component_names(x.shape[1]))
        if x.shape[1] > sdev.shape[0]:
            raise InsufficientDataError(
                f"Score matrix has {x.shape[1]} columns but only {sdev.shape[0]} standard deviations"
            )

        # frozen dataclass: normalised values go through object.__setattr__
        object.__setattr__(self, "sdev", sdev)
        object.__setattr__(self, "x", x)

    @property
    def n_components(self) -> int:
        return self.x.shape[1]

    @property
    def n_observations(self) -> int:
        return self.x.shape[0]

    @classmethod
    def from_sklearn(cls, model, data) -> "PCAResult":
        """
        Build a result from a fitted sklearn.decomposition.PCA.

        explained_variance_ uses ddof=1, so sqrt() matches R's prcomp()$sdev.
        """
        scores = model.transform(data)
        n = scores.shape[1]
        index = data.index if isinstance(data, pd.DataFrame) else None
        x = pd.DataFrame(scores, columns=component_names(n), index=index)

        rotation = None
        if hasattr(model, "components_"):
            variables = (list(data.columns) if isinstance(data, pd.DataFrame)
                         else [f"V{i+1}" for i in range(model.components_.shape[1])])
            rotation = pd.DataFrame(model.components_.T, index=variables, columns=component_names(n))

        return cls(sdev=np.sqrt(model.explained_variance_), x=x, rotation=rotation)

    @classmethod
    def from_prince(cls, model, data) -> "PCAResult":
        """Build a result from a fitted prince.PCA, with sdev on the prcomp() scale."""
        coords = model.row_coordinates(data)
        scores = coords.values if hasattr(coords, "values") else np.asarray(coords)
        n = scores.shape[1]
        index = coords.index if hasattr(coords, "index") else None
        x = pd.DataFrame(scores, columns=component_names(n), index=index)

        rotation = None
        loadings = getattr(model, "column_coordinates_", None)
        if isinstance(loadings, pd.DataFrame):
            rotation = loadings.iloc[:, :n].copy()
            rotation.columns = component_names(rotation.shape[1])

        # prince divides eigenvalues by n; prcomp()$sdev uses n - 1
        eigs = np.asarray(model.eigenvalues_, dtype=float)
        m = scores.shape[0]
        if m > 1:
            eigs = eigs * m / (m - 1)
        return cls(sdev=np.sqrt(eigs), x=x, rotation=rotation)
