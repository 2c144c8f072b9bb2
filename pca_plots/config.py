# Configuration constants for the PCA plotting helpers
import os

# ======================= CONFIG =======================
OUTPUT_DIR = os.environ.get("PCA_PLOTS_OUTPUT", "pca_output")
SEED = 42
DPI = 150

# Scree / line plot
N_SCREE_COMPONENTS = 10    # components shown in the line plot
VARIANCE_DIGITS = 1        # rounding of the percentage labels
LINE_COLOUR = "#104E8B"    # dodgerblue4
LINE_ALPHA = 0.5

# Component scatter + scatterplot matrix
DEFAULT_DEPENDENT_NAME = "Dependent Variable"
DIVERGING_COLOURS = ["darkred", "yellow", "darkgreen"]
SCATTER_ALPHA = 0.8
MATRIX_ALPHA = 0.5
DENSITY_GRID = 512         # evaluation points for the diagonal density curve

# Figure sizes
LINE_FIGSIZE = (7, 4.2)
SCATTER_FIGSIZE = (7, 6)
MATRIX_FACET_HEIGHT = 2.2
