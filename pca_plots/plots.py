# Scree line plot, component scatter and scatterplot matrix for PCA results
import os
from typing import Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.cm import ScalarMappable
from matplotlib.colors import LinearSegmentedColormap, Normalize
from scipy.stats import gaussian_kde

try:
    from .config import *
    from .errors import InsufficientDataError, LengthMismatchError, MissingParameterError
    from .reshape import Pairs, check_component, make_pairs, select_components
    from .variance import calculate_variance
except ImportError:
    from config import *
    from errors import InsufficientDataError, LengthMismatchError, MissingParameterError
    from reshape import Pairs, check_component, make_pairs, select_components
    from variance import calculate_variance

DIVERGING_CMAP = LinearSegmentedColormap.from_list("pca_diverging", DIVERGING_COLOURS)


# -------------------------- Helper Functions --------------------------
def _dependent_values(result, dependent_variable) -> np.ndarray:
    """Positional dependent variable as floats, checked against the score rows."""
    if isinstance(dependent_variable, (pd.Series, pd.Index)):
        values = dependent_variable.to_numpy(dtype=float, na_value=np.nan)
    else:
        values = np.asarray(dependent_variable, dtype=float)
    values = values.reshape(-1)
    if values.shape[0] != result.n_observations:
        raise LengthMismatchError(result.n_observations, values.shape[0])
    return values


def _colour_norm(values: np.ndarray) -> Normalize:
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return Normalize()
    return Normalize(vmin=finite.min(), vmax=finite.max())


def _style_axes(ax):
    """Major grid only."""
    ax.minorticks_off()
    ax.grid(True, which="major", alpha=0.3)
    ax.grid(False, which="minor")


def scaled_density(values, grid_size: int = DENSITY_GRID):
    """
    Gaussian KDE of `values` scaled to [0, 1] and stretched over the value range.

    Returns (grid, curve) where curve = density / max(density) * range + min,
    so the line shares the axis of the values themselves.
    """
    values = np.asarray(values, dtype=float)
    values = values[np.isfinite(values)]
    if values.size == 0:
        raise InsufficientDataError("No finite values to estimate a density from")

    lo, hi = values.min(), values.max()
    if values.size < 2 or hi == lo:
        return np.array([lo]), np.array([lo])

    grid = np.linspace(lo, hi, grid_size)
    density = gaussian_kde(values)(grid)
    scaled = density / density.max()
    return grid, scaled * (hi - lo) + lo


def save_figure(fig, path: str, dpi: int = DPI):
    """Write `fig` to `path` (creating the directory) and close it."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved {path}")
    return path


# -------------------------- Table Builders --------------------------
def variance_table(result, n_components: int = N_SCREE_COMPONENTS) -> pd.DataFrame:
    """
    First `n_components` standard deviations with their share of variance.

    Percentages are normalised over the displayed components only.
    """
    if n_components < 1:
        raise ValueError(f"n_components must be positive, got {n_components}")
    available = len(result.sdev)
    if available < n_components:
        raise InsufficientDataError(
            f"Insufficient components: line plot needs {n_components}, PCA result has {available}"
        )

    table = pd.DataFrame({
        'PCA': np.arange(1, n_components + 1),
        'Variances': result.sdev[:n_components],
    })
    return calculate_variance(table, 'Variances')


def component_table(result, dependent_variable, x_axis: int, y_axis: int) -> pd.DataFrame:
    """Scores of two components next to the dependent variable, as PC<i>, PC<j>, DependentVariable."""
    x_axis = check_component(result, x_axis, "x_axis")
    y_axis = check_component(result, y_axis, "y_axis")
    dep = _dependent_values(result, dependent_variable)

    table = pd.DataFrame({
        0: result.x.iloc[:, x_axis - 1].to_numpy(),
        1: result.x.iloc[:, y_axis - 1].to_numpy(),
        2: dep,
    })
    table.columns = [f"PC{x_axis}", f"PC{y_axis}", "DependentVariable"]
    return table


def scatterplot_matrix_data(result, start: int, stop: int, dependent_variable) -> Pairs:
    """
    Pair and density tables for components start..stop.

    The dependent variable is repeated once per ordered pair so it follows
    the observations in every block of the pair table.
    """
    dep = _dependent_values(result, dependent_variable)
    scores = select_components(result, start, stop)
    pairs = make_pairs(scores)

    n_pairs = len(pairs.all) // len(dep) if len(dep) else 0
    with_dep = pairs.all.copy()
    with_dep['DependentVariable'] = np.tile(dep, n_pairs)
    return Pairs(all=with_dep, densities=pairs.densities)


# -------------------------- Plots --------------------------
def line_plot(result, n_components: int = N_SCREE_COMPONENTS):
    """
    Line plot of the first `n_components` standard deviations.

    Useful to decide how many components to keep. Each point is labelled
    with its percentage of the variance shown.
    """
    table = variance_table(result, n_components)

    fig, ax = plt.subplots(figsize=LINE_FIGSIZE)
    ax.plot(table['PCA'], table['Variances'], color=LINE_COLOUR, alpha=LINE_ALPHA,
            linewidth=1.5, marker="o", markersize=6, label="Variances")
    for _, row in table.iterrows():
        ax.annotate(f"{row['VariancePct']:.{VARIANCE_DIGITS}f}%", (row['PCA'], row['Variances']),
                    textcoords="offset points", xytext=(0, 6), ha="center", fontsize=8)

    lo, hi = ax.get_ylim()
    ax.set_ylim(min(lo, 0), hi)
    ax.set_xticks(table['PCA'].tolist())
    ax.set_xlabel("PCs")
    ax.set_ylabel("Variances")
    _style_axes(ax)
    ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.15), frameon=False)
    fig.tight_layout()
    return fig


def plot_pc(pca_result=None, dependent_variable=None, x_axis: Optional[int] = None,
            y_axis: Optional[int] = None, dependent_variable_name: Optional[str] = None):
    """
    Scatter two principal components coloured by a dependent variable.

    Args:
        pca_result: PCAResult with the scores to plot
        dependent_variable: Values of the dependent variable, one per observation
        x_axis: 1-based number of the component on the x axis
        y_axis: 1-based number of the component on the y axis
        dependent_variable_name: Colour bar title, "Dependent Variable" if omitted

    Returns:
        matplotlib Figure
    """
    if pca_result is None:
        raise MissingParameterError("pca_result")
    if dependent_variable is None:
        raise MissingParameterError("dependent_variable")
    if x_axis is None:
        raise MissingParameterError("x_axis")
    if y_axis is None:
        raise MissingParameterError("y_axis")
    if dependent_variable_name is None:
        dependent_variable_name = DEFAULT_DEPENDENT_NAME

    table = component_table(pca_result, dependent_variable, x_axis, y_axis).dropna()
    xname, yname = table.columns[0], table.columns[1]

    fig, ax = plt.subplots(figsize=SCATTER_FIGSIZE)
    points = ax.scatter(table.iloc[:, 0], table.iloc[:, 1], c=table.iloc[:, 2],
                        cmap=DIVERGING_CMAP, alpha=SCATTER_ALPHA, s=20)
    ax.set_xlabel(xname)
    ax.set_ylabel(yname)
    _style_axes(ax)

    cbar = fig.colorbar(points, ax=ax, location="bottom", pad=0.12, fraction=0.05)
    cbar.set_label(dependent_variable_name)
    return fig


def scatterplot_matrix(pca_result, start: int, stop: int, dependent_variable,
                       dependent_variable_name: Optional[str] = None):
    """
    Scatterplot matrix of components start..stop coloured by a dependent variable.

    Rows of the grid follow the x component and columns the y component;
    each diagonal facet carries the density of its component.
    """
    if dependent_variable_name is None:
        dependent_variable_name = DEFAULT_DEPENDENT_NAME

    pairs = scatterplot_matrix_data(pca_result, start, stop, dependent_variable)
    names = list(pairs.densities['xvar'].cat.categories)
    norm = _colour_norm(pairs.all['DependentVariable'].to_numpy())

    g = sns.FacetGrid(pairs.all, row='xvar', col='yvar', row_order=names, col_order=names,
                      sharex=False, sharey=False, margin_titles=True,
                      height=MATRIX_FACET_HEIGHT, despine=False)

    for (xvar, yvar), ax in g.axes_dict.items():
        if xvar == yvar:
            values = pairs.densities.loc[pairs.densities['xvar'] == xvar, 'x']
            grid, curve = scaled_density(values)
            ax.plot(grid, curve, color=LINE_COLOUR, alpha=LINE_ALPHA, linewidth=1.5)
        else:
            mask = (pairs.all['xvar'] == xvar) & (pairs.all['yvar'] == yvar)
            block = pairs.all.loc[mask].dropna(subset=['x', 'y'])
            ax.scatter(block['x'], block['y'], c=block['DependentVariable'],
                       cmap=DIVERGING_CMAP, norm=norm, alpha=MATRIX_ALPHA, s=6)
        _style_axes(ax)

    g.set_titles(row_template="{row_name}", col_template="{col_name}")
    g.set_axis_labels("", "")

    fig = g.figure
    fig.subplots_adjust(bottom=0.16)
    cax = fig.add_axes([0.2, 0.05, 0.6, 0.02])
    cbar = fig.colorbar(ScalarMappable(norm=norm, cmap=DIVERGING_CMAP), cax=cax, orientation="horizontal")
    cbar.set_label(dependent_variable_name)
    return fig
