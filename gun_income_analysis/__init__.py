"""Household income vs. gun ownership: EDA and Welch's two-sample t-test."""

from gun_income_analysis.exceptions import AnalysisError, InvalidInput, NumericDegeneracy
from gun_income_analysis.welch_ttest import Sample, TTestResult, compute

__all__ = [
    "AnalysisError",
    "InvalidInput",
    "NumericDegeneracy",
    "Sample",
    "TTestResult",
    "compute",
]

__version__ = "0.1.0"
