# Main orchestration script - runs the iris example and writes every figure
import os
import numpy as np
import pandas as pd
from datetime import datetime
from prince import PCA as PrincePCA
from sklearn.datasets import load_iris
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

try:
    from .config import *
    from .plots import line_plot, plot_pc, save_figure, scatterplot_matrix
    from .result import PCAResult
    from .variance import explained_variance_table
except ImportError:
    from config import *
    from plots import line_plot, plot_pc, save_figure, scatterplot_matrix
    from result import PCAResult
    from variance import explained_variance_table


def load_iris_frame() -> pd.DataFrame:
    """Iris measurements with readable column names."""
    iris = load_iris(as_frame=True).frame
    iris.columns = ["Sepal.Length", "Sepal.Width", "Petal.Length", "Petal.Width", "Species"]
    return iris


def fit_sklearn_pca(df_num: pd.DataFrame, tag: str) -> PCAResult:
    """Centred and scaled PCA with scikit-learn."""
    print(f"[{tag}] Fitting scikit-learn PCA on {df_num.shape[1]} variables...")
    scaled = pd.DataFrame(StandardScaler().fit_transform(df_num), columns=df_num.columns, index=df_num.index)
    model = PCA(random_state=SEED).fit(scaled)
    result = PCAResult.from_sklearn(model, scaled)
    print(f"[{tag}] sdev: {np.round(result.sdev, 3).tolist()}")
    return result


def fit_prince_pca(df_num: pd.DataFrame, tag: str) -> PCAResult:
    """Centred and scaled PCA with prince."""
    print(f"[{tag}] Fitting prince PCA on {df_num.shape[1]} variables...")
    model = PrincePCA(n_components=df_num.shape[1], rescale_with_mean=True,
                      rescale_with_std=True, random_state=SEED)
    model.fit(df_num)
    result = PCAResult.from_prince(model, df_num)
    print(f"[{tag}] sdev: {np.round(result.sdev, 3).tolist()}")
    return result


def run_iris_example(output_dir: str = OUTPUT_DIR):
    """
    Reproduce the documented examples on iris:
    - Pass A: all four measurements, line plot + explained variance table
    - Pass B: first three measurements, coloured by petal width
    """
    print("=" * 60)
    print("PCA PLOTS - IRIS EXAMPLE")
    print("=" * 60)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    os.makedirs(output_dir, exist_ok=True)

    iris = load_iris_frame()
    written = []

    # Pass A: line plot over every measurement
    print("\nStep 1: Pass A - four measurements")
    print("-" * 50)
    resA = fit_sklearn_pca(iris.iloc[:, :4], "A_iris4")

    var_df = explained_variance_table(resA)
    var_path = os.path.join(output_dir, "A_iris4_explained_variance.csv")
    var_df.to_csv(var_path, index=False)
    written.append(var_path)

    # iris only has 4 components, so the window shrinks to what is available
    n_line = min(N_SCREE_COMPONENTS, len(resA.sdev))
    if n_line < N_SCREE_COMPONENTS:
        print(f"[A_iris4] Only {len(resA.sdev)} components available; line plot shows {n_line}")
    written.append(save_figure(line_plot(resA, n_components=n_line),
                               os.path.join(output_dir, "A_iris4_line_plot.png")))

    # Pass B: scatter and scatterplot matrix against petal width
    print("\nStep 2: Pass B - three measurements vs Petal.Width")
    print("-" * 50)
    resB = fit_prince_pca(iris.iloc[:, :3], "B_iris3")
    petal_width = iris["Petal.Width"]

    written.append(save_figure(plot_pc(resB, petal_width, 1, 2, "Petal Width"),
                               os.path.join(output_dir, "B_iris3_pc1_pc2.png")))

    try:
        fig = scatterplot_matrix(resB, 1, 3, petal_width, "Petal Width")
        written.append(save_figure(fig, os.path.join(output_dir, "B_iris3_scatterplot_matrix.png")))
    except ValueError as e:
        print(f"Warning: Could not create scatterplot matrix for B_iris3: {e}")

    print("\n" + "=" * 60)
    print("EXAMPLE COMPLETE!")
    print("=" * 60)
    print(f"Output directory: {output_dir}/")
    for path in written:
        print(f"  - {os.path.basename(path)}")

    return resA, resB


if __name__ == "__main__":
    np.random.seed(SEED)
    run_iris_example()
