# Variance share of each principal component
import numpy as np
import pandas as pd

try:
    from .config import VARIANCE_DIGITS
    from .errors import InsufficientDataError
except ImportError:
    from config import VARIANCE_DIGITS
    from errors import InsufficientDataError


def calculate_variance(table: pd.DataFrame, column, name: str = "VariancePct",
                       digits: int = VARIANCE_DIGITS) -> pd.DataFrame:
    """
    Add the percentage of total variance carried by each row.

    `column` holds standard deviations (a label, or a 0-based position).
    The new column is sdev**2 / sum(sdev**2) * 100, rounded to `digits`.
    The input table is not modified.
    """
    if len(table) == 0:
        raise InsufficientDataError("Cannot compute variance percentages of an empty table")

    if isinstance(column, (int, np.integer)) and column not in table.columns:
        values = table.iloc[:, column]
    else:
        values = table[column]

    squared = values.astype(float) ** 2
    total = squared.sum()
    if total == 0:
        raise InsufficientDataError("All standard deviations are zero")

    out = table.copy()
    out[name] = (squared / total * 100.0).round(digits)
    return out


def explained_variance_table(result) -> pd.DataFrame:
    """Eigenvalue, explained and cumulative variance for every component."""
    eigs = result.sdev ** 2
    if eigs.size == 0 or eigs.sum() == 0:
        raise InsufficientDataError("PCA result has no variance to explain")

    explained = eigs / eigs.sum()
    return pd.DataFrame({
        'component': range(1, len(eigs) + 1),
        'eigenvalue': eigs,
        'explained_variance': explained,
        'cumulative_variance': np.cumsum(explained),
    })
