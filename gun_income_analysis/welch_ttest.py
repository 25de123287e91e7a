# welch_ttest.py
"""
Two-sample Welch's t-test (unequal variances) for a difference in means.

Provides:
- Sample: validated, immutable set of observations for one group
- TTestResult: immutable t-statistic / df / p-value / CI record
- compute(): the test itself, with real-valued Welch–Satterthwaite df
- summarize(), cohens_d(), hedges_g(): descriptive companions for the report
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Tuple, Union, Iterable

import numpy as np
import pandas as pd
from scipy import stats

from gun_income_analysis.config import CONFIDENCE_LEVEL
from gun_income_analysis.exceptions import InvalidInput, NumericDegeneracy


# ========== DATA MODEL ==========

@dataclass(frozen=True)
class Sample:
    """
    Observations for one group. Values are stored as a tuple of floats;
    the constructor rejects empty input and NaN / inf values.
    """
    values: Tuple[float, ...]
    label: str = ""

    def __post_init__(self):
        try:
            values = tuple(float(v) for v in self.values)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"Sample '{self.label}' contains non-numeric values.") from exc
        if not values:
            raise InvalidInput(f"Sample '{self.label}' is empty.")
        if not np.all(np.isfinite(values)):
            raise InvalidInput(
                f"Sample '{self.label}' contains missing or infinite values; "
                f"filter them out before building the sample."
            )
        object.__setattr__(self, "values", values)

    @classmethod
    def from_values(cls, values: Union[Iterable[float], np.ndarray, pd.Series], label: str = "") -> "Sample":
        """Build a Sample from a list, numpy array or pandas Series."""
        try:
            arr = np.asarray(values, dtype=float).ravel()
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"Sample '{label}' contains non-numeric values.") from exc
        return cls(tuple(arr.tolist()), label)

    @property
    def n(self) -> int:
        return len(self.values)

    @property
    def mean(self) -> float:
        return float(np.mean(self.values))

    @property
    def variance(self) -> float:
        # n - 1 denominator; undefined for a single observation
        if self.n < 2:
            return float("nan")
        # constant data: np.var leaves rounding noise for values like 0.1
        if len(set(self.values)) == 1:
            return 0.0
        return float(np.var(self.values, ddof=1))

    @property
    def std(self) -> float:
        return float(np.sqrt(self.variance))

    @property
    def standard_error(self) -> float:
        return self.std / np.sqrt(self.n)

    def as_array(self) -> np.ndarray:
        return np.asarray(self.values, dtype=float)


@dataclass(frozen=True)
class TTestResult:
    t_statistic: float
    degrees_of_freedom: float
    p_value: float
    confidence_interval: Tuple[float, float]
    confidence_level: float = CONFIDENCE_LEVEL
    mean_difference: float = 0.0
    standard_error: float = 0.0
    label_a: str = "Sample A"
    label_b: str = "Sample B"

    @property
    def margin_of_error(self) -> float:
        low, high = self.confidence_interval
        return (high - low) / 2

    def is_significant(self, alpha: float = 0.05) -> bool:
        return self.p_value < alpha

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        low, high = out.pop("confidence_interval")
        out["ci_lower"] = low
        out["ci_upper"] = high
        out["margin_of_error"] = self.margin_of_error
        return out


@dataclass(frozen=True)
class GroupSummary:
    label: str
    n: int
    mean: float
    std: float
    se_mean: float
    median: float
    min: float
    q1: float
    q3: float
    max: float


# ========== CORE T-TEST ==========

def _as_sample(sample, default_label: str) -> Sample:
    if isinstance(sample, Sample):
        return sample
    label = getattr(sample, "name", None) or default_label
    return Sample.from_values(sample, str(label))


def compute(
    sample_a: Union[Sample, np.ndarray, pd.Series, Iterable[float]],
    sample_b: Union[Sample, np.ndarray, pd.Series, Iterable[float]],
    confidence_level: float = CONFIDENCE_LEVEL
) -> TTestResult:
    """
    Welch's two-sample t-test of H0: mean_A == mean_B against a two-sided
    alternative, with a confidence interval for mean_A - mean_B.

    Parameters
    ----------
    sample_a, sample_b : Sample or array-like
        Observations for each group. Array-likes are validated through
        Sample.from_values, so they must not contain NaN.
    confidence_level : float
        Confidence level for the interval, strictly between 0 and 1.

    Returns
    -------
    TTestResult

    Raises
    ------
    InvalidInput
        A sample has fewer than 2 observations, or confidence_level is
        outside (0, 1).
    NumericDegeneracy
        Both samples have zero variance.

    Notes
    -----
    Degrees of freedom follow Welch–Satterthwaite and are not rounded.
    scipy's t distribution evaluates the CDF through the regularized
    incomplete beta function, so non-integer df are handled exactly.
    """
    if not 0.0 < confidence_level < 1.0:
        raise InvalidInput(
            f"confidence_level must be strictly between 0 and 1. Got {confidence_level}."
        )

    a = _as_sample(sample_a, "Sample A")
    b = _as_sample(sample_b, "Sample B")

    if a.n < 2 or b.n < 2:
        raise InvalidInput(
            f"Each sample must have at least 2 observations. "
            f"Got n_a={a.n}, n_b={b.n}."
        )

    mean_a, mean_b = a.mean, b.mean
    var_a, var_b = a.variance, b.variance

    # Per-group squared standard errors
    se2_a = var_a / a.n
    se2_b = var_b / b.n
    se2 = se2_a + se2_b
    if se2 == 0.0:
        raise NumericDegeneracy(
            "Both samples have zero variance; the t-statistic is undefined."
        )
    se_diff = np.sqrt(se2)

    diff = mean_a - mean_b
    t_stat = diff / se_diff

    # Welch-Satterthwaite degrees of freedom
    df = se2**2 / (se2_a**2 / (a.n - 1) + se2_b**2 / (b.n - 1))

    # values near the float limits overflow the means or variances
    if not np.all(np.isfinite([diff, se2, t_stat, df])):
        raise NumericDegeneracy(
            "Mean or variance overflowed; rescale the data (e.g. to thousands) "
            "before testing."
        )

    # sf(|t|) == 1 - cdf(|t|) without the cancellation in the far tail
    p_value = 2 * stats.t.sf(np.abs(t_stat), df)
    p_value = float(np.clip(p_value, 0.0, 1.0))

    t_crit = stats.t.ppf((1 + confidence_level) / 2, df)
    margin = t_crit * se_diff

    return TTestResult(
        t_statistic=float(t_stat),
        degrees_of_freedom=float(df),
        p_value=p_value,
        confidence_interval=(float(diff - margin), float(diff + margin)),
        confidence_level=float(confidence_level),
        mean_difference=float(diff),
        standard_error=float(se_diff),
        label_a=a.label or "Sample A",
        label_b=b.label or "Sample B",
    )


# ========== DESCRIPTIVES & EFFECT SIZE ==========

def summarize(sample: Sample) -> GroupSummary:
    arr = sample.as_array()
    return GroupSummary(
        label=sample.label,
        n=sample.n,
        mean=sample.mean,
        std=sample.std,
        se_mean=sample.standard_error,
        median=float(np.median(arr)),
        min=float(arr.min()),
        q1=float(np.percentile(arr, 25)),
        q3=float(np.percentile(arr, 75)),
        max=float(arr.max()),
    )


def _pooled_std(a: Sample, b: Sample) -> float:
    return float(np.sqrt(((a.n - 1) * a.variance + (b.n - 1) * b.variance) / (a.n + b.n - 2)))


def cohens_d(sample_a: Sample, sample_b: Sample) -> float:
    """Cohen's d with the pooled standard deviation; NaN when it is zero."""
    pooled = _pooled_std(sample_a, sample_b)
    if not pooled > 0:
        return float("nan")
    return (sample_a.mean - sample_b.mean) / pooled


def hedges_g(sample_a: Sample, sample_b: Sample) -> float:
    """Small-sample bias-corrected Cohen's d."""
    correction = 1 - 3 / (4 * (sample_a.n + sample_b.n - 2) - 1)
    return cohens_d(sample_a, sample_b) * correction
