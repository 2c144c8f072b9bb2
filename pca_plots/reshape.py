# Long-format reshaping of score matrices for faceted scatterplot matrices
from typing import NamedTuple

import numpy as np
import pandas as pd

try:
    from .errors import ComponentIndexError, InsufficientDataError
except ImportError:
    from errors import ComponentIndexError, InsufficientDataError


class Pairs(NamedTuple):
    all: pd.DataFrame        # xvar, yvar, x, y: one block of rows per ordered column pair
    densities: pd.DataFrame  # xvar, yvar, x: each column's own values


def make_pairs(data: pd.DataFrame) -> Pairs:
    """
    Expand a wide table into every ordered pair of distinct columns.

    For k columns and M rows the pair table has k*(k-1)*M rows. Pairs are
    emitted with the x column in the outer loop and the y column in the
    inner loop, both in column order; rows keep their original order
    within a pair. The density table stacks each column's M values
    (k*M rows) with xvar == yvar so it lands on the diagonal facets.
    """
    if data.shape[1] < 2:
        raise InsufficientDataError(
            f"Need at least 2 columns to build pairs, got {data.shape[1]}"
        )

    names = [str(c) for c in data.columns]
    values = data.to_numpy(dtype=float)
    m = values.shape[0]

    blocks = []
    for i, xname in enumerate(names):
        for j, yname in enumerate(names):
            if i == j:
                continue
            blocks.append(pd.DataFrame({
                'xvar': xname,
                'yvar': yname,
                'x': values[:, i],
                'y': values[:, j],
            }))
    pairs = pd.concat(blocks, ignore_index=True)

    densities = pd.DataFrame({
        'xvar': np.repeat(names, m),
        'yvar': np.repeat(names, m),
        'x': values.T.reshape(-1),
    })

    # keep facet order equal to column order
    for col in ('xvar', 'yvar'):
        pairs[col] = pd.Categorical(pairs[col], categories=names, ordered=True)
        densities[col] = pd.Categorical(densities[col], categories=names, ordered=True)

    return Pairs(all=pairs, densities=densities)


def check_component(result, index, name: str = "component") -> int:
    """Validate a 1-based component index against the score matrix."""
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(index).__name__}")
    if index < 1 or index > result.n_components:
        raise ComponentIndexError(index, result.n_components)
    return int(index)


def select_components(result, start: int, stop: int) -> pd.DataFrame:
    """Scores for components start..stop (1-based, inclusive)."""
    start = check_component(result, start, "start")
    stop = check_component(result, stop, "stop")
    if stop < start:
        raise ValueError(f"stop ({stop}) must not be smaller than start ({start})")
    return result.x.iloc[:, start - 1:stop].copy()
