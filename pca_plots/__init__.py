# PCA Plots
# Plotting helpers for already computed Principal Component Analyses

"""
Modular structure:

- result.py: PCAResult container (sdev, scores, loadings) and adapters
- variance.py: Variance percentages per component
- reshape.py: Long-format pair/density tables for scatterplot matrices
- plots.py: Line plot, component scatter and scatterplot matrix
- main.py: Iris example that writes every figure to OUTPUT_DIR
"""

from .errors import (
    ComponentIndexError,
    InsufficientDataError,
    LengthMismatchError,
    MissingParameterError,
    PCAPlotError,
)
from .plots import (
    component_table,
    line_plot,
    plot_pc,
    save_figure,
    scaled_density,
    scatterplot_matrix,
    scatterplot_matrix_data,
    variance_table,
)
from .reshape import Pairs, make_pairs, select_components
from .result import PCAResult
from .variance import calculate_variance, explained_variance_table

__version__ = "1.0.0"
