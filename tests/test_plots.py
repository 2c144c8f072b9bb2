import numpy as np
import pandas as pd
import pytest

from pca_plots import (
    ComponentIndexError,
    InsufficientDataError,
    LengthMismatchError,
    MissingParameterError,
    component_table,
    line_plot,
    plot_pc,
    save_figure,
    scaled_density,
    scatterplot_matrix,
    scatterplot_matrix_data,
    variance_table,
)


class TestLinePlot:
    def test_variance_table_over_displayed_components(self, scree_result):
        table = variance_table(scree_result)
        assert table["PCA"].tolist() == list(range(1, 11))
        assert table["Variances"].tolist() == [5, 3, 2, 1, 0.8, 0.5, 0.3, 0.2, 0.1, 0.05]
        assert table["VariancePct"].sum() == pytest.approx(100.0, abs=0.5)
        assert table["VariancePct"].iloc[0] == 62.4

    def test_window_is_first_n(self, wide_result):
        table = variance_table(wide_result)
        assert len(table) == 10
        assert np.allclose(table["Variances"], wide_result.sdev[:10])
        # normalised over the ten shown, not all twelve
        assert table["VariancePct"].sum() == pytest.approx(100.0, abs=0.5)

    def test_insufficient_components(self, iris_like):
        result, _ = iris_like
        with pytest.raises(InsufficientDataError, match="Insufficient components"):
            line_plot(result)

    def test_custom_window(self, iris_like):
        result, _ = iris_like
        fig = line_plot(result, n_components=4)
        ax = fig.axes[0]
        assert ax.get_xticks().tolist() == [1, 2, 3, 4]

    def test_figure_layout(self, scree_result):
        fig = line_plot(scree_result)
        ax = fig.axes[0]
        assert ax.get_xticks().tolist() == list(range(1, 11))
        assert ax.get_ylim()[0] <= 0
        assert ax.get_xlabel() == "PCs"
        assert ax.get_ylabel() == "Variances"
        assert ax.get_legend() is not None
        labels = [t.get_text() for t in ax.texts]
        assert labels[0] == "62.4%"
        assert len(labels) == 10


class TestPlotPC:
    def test_missing_x_axis(self, iris_like):
        result, dep = iris_like
        with pytest.raises(MissingParameterError, match="x_axis") as exc:
            plot_pc(result, dep, y_axis=2)
        assert exc.value.parameter == "x_axis"

    @pytest.mark.parametrize("missing", ["pca_result", "dependent_variable", "y_axis"])
    def test_each_required_parameter(self, iris_like, missing):
        result, dep = iris_like
        kwargs = {"pca_result": result, "dependent_variable": dep, "x_axis": 1, "y_axis": 2}
        del kwargs[missing]
        with pytest.raises(MissingParameterError) as exc:
            plot_pc(**kwargs)
        assert exc.value.parameter == missing

    def test_default_name(self, iris_like):
        result, dep = iris_like
        fig = plot_pc(result, dep, 1, 2)
        assert fig.axes[-1].get_xlabel() == "Dependent Variable"

    def test_custom_name_and_axis_labels(self, iris_like):
        result, dep = iris_like
        fig = plot_pc(result, dep, 1, 3, "Petal Width")
        ax = fig.axes[0]
        assert ax.get_xlabel() == "PC1"
        assert ax.get_ylabel() == "PC3"
        assert fig.axes[-1].get_xlabel() == "Petal Width"

    def test_component_table(self, iris_like):
        result, dep = iris_like
        table = component_table(result, dep, 2, 1)
        assert list(table.columns) == ["PC2", "PC1", "DependentVariable"]
        assert np.allclose(table["PC2"], result.x["PC2"])
        assert np.allclose(table["DependentVariable"], dep)

    def test_missing_values_dropped(self, iris_like):
        result, dep = iris_like
        dep = dep.copy()
        dep.iloc[:5] = np.nan
        fig = plot_pc(result, dep, 1, 2)
        points = fig.axes[0].collections[0]
        assert len(points.get_offsets()) == 145

    def test_index_out_of_range(self, iris_like):
        result, dep = iris_like
        with pytest.raises(ComponentIndexError):
            plot_pc(result, dep, 1, 5)

    def test_length_mismatch(self, iris_like):
        result, dep = iris_like
        with pytest.raises(LengthMismatchError):
            plot_pc(result, dep[:100], 1, 2)


class TestScatterplotMatrix:
    def test_pair_table_shape(self, iris_like):
        result, dep = iris_like
        pairs = scatterplot_matrix_data(result, 1, 3, dep)
        assert len(pairs.all) == 6 * 150
        assert len(pairs.densities) == 3 * 150
        combos = set(zip(pairs.all["xvar"].astype(str), pairs.all["yvar"].astype(str)))
        assert len(combos) == 6

    def test_dependent_variable_follows_observations(self, iris_like):
        result, dep = iris_like
        pairs = scatterplot_matrix_data(result, 1, 3, dep).all
        block = pairs[(pairs["xvar"] == "PC3") & (pairs["yvar"] == "PC1")]
        assert np.allclose(block["DependentVariable"], dep)
        assert np.allclose(block["x"], result.x["PC3"])

    def test_length_mismatch(self, iris_like):
        result, dep = iris_like
        with pytest.raises(LengthMismatchError):
            scatterplot_matrix_data(result, 1, 3, dep.tolist() + [1.0])

    def test_range_out_of_bounds(self, iris_like):
        result, dep = iris_like
        with pytest.raises(ComponentIndexError):
            scatterplot_matrix(result, 2, 6, dep)

    def test_grid_layout(self, iris_like):
        result, dep = iris_like
        fig = scatterplot_matrix(result, 1, 3, dep, "Petal Width")
        # 3 x 3 facets plus the colour bar
        assert len(fig.axes) == 10
        colour_bar = fig.axes[-1]
        assert colour_bar.get_xlabel() == "Petal Width"
        facets = fig.axes[:9]
        assert all(ax.get_xlabel() == "" and ax.get_ylabel() == "" for ax in facets)
        # diagonal facets hold the density line, the rest hold scatters
        assert len(facets[0].lines) == 1 and not facets[0].collections
        assert len(facets[1].collections) == 1

    def test_single_component_rejected(self, iris_like):
        result, dep = iris_like
        with pytest.raises(InsufficientDataError):
            scatterplot_matrix_data(result, 2, 2, dep)
        with pytest.raises(InsufficientDataError):
            scatterplot_matrix(result, 2, 2, dep)

    def test_default_name(self, iris_like):
        result, dep = iris_like
        fig = scatterplot_matrix(result, 2, 3, dep)
        assert fig.axes[-1].get_xlabel() == "Dependent Variable"


def test_scaled_density_spans_value_range(rng):
    values = rng.normal(size=200)
    grid, curve = scaled_density(values, grid_size=64)
    assert len(grid) == 64
    assert grid[0] == values.min() and grid[-1] == values.max()
    assert curve.max() == pytest.approx(values.max())
    assert curve.min() >= values.min()


def test_scaled_density_constant_values():
    grid, curve = scaled_density([2.0, 2.0, 2.0])
    assert grid.tolist() == [2.0]
    assert curve.tolist() == [2.0]


def test_save_figure(tmp_path, scree_result):
    path = tmp_path / "nested" / "line.png"
    save_figure(line_plot(scree_result), str(path), dpi=50)
    assert path.exists()
