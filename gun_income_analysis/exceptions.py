# exceptions.py


class AnalysisError(ValueError):
    """Base class for errors raised by the income / gun-ownership analysis."""


class InvalidInput(AnalysisError):
    """Bad sample size, non-finite values, empty group or bad confidence level."""


class NumericDegeneracy(InvalidInput):
    """Both samples have zero variance, so the standard error is zero."""
