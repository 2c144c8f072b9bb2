# Exceptions raised by the PCA plotting helpers


class PCAPlotError(Exception):
    """Base class for all errors raised by pca_plots."""


class MissingParameterError(PCAPlotError, TypeError):
    """A required argument was not supplied."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Need to specify {parameter}!")


class InsufficientDataError(PCAPlotError, ValueError):
    """Fewer components or observations than the operation requires."""


class ComponentIndexError(PCAPlotError, IndexError):
    """A 1-based component index falls outside the available components."""

    def __init__(self, index, n_components: int):
        self.index = index
        self.n_components = n_components
        super().__init__(
            f"Component {index} is out of range: result has {n_components} components (1..{n_components})"
        )


class LengthMismatchError(PCAPlotError, ValueError):
    """The dependent variable does not line up with the score rows."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"dependent_variable has {actual} values but the scores have {expected} observations"
        )
