# hypothesis_testing.py

import os
import logging
from dataclasses import asdict

import pandas as pd
import matplotlib.pyplot as plt

from gun_income_analysis.config import (
    GROUP_LABELS,
    CONFIDENCE_LEVEL,
    ALPHA,
    FIG_DPI,
    LOGGER_NAME,
)
from gun_income_analysis.data_preprocessing import split_samples
from gun_income_analysis.exceptions import InvalidInput
from gun_income_analysis.plotting_utils import plot_interval
from gun_income_analysis.welch_ttest import compute, summarize, cohens_d, hedges_g

logger = logging.getLogger(LOGGER_NAME)


def format_level(level: float) -> str:
    """0.95 -> "95%", 0.975 -> "97.5%"."""
    return f"{level * 100:g}%"


def run_welch_test(clean_df: pd.DataFrame,
                   group_labels: dict = GROUP_LABELS,
                   confidence_level: float = CONFIDENCE_LEVEL,
                   alpha: float = ALPHA) -> dict:
    """
    Welch's t-test of mean income, owners vs. non-owners.

    H0: mean income is the same in both groups.
    H1: mean income differs (two-sided).

    Returns a report dict with the TTestResult, per-group summaries,
    effect sizes and the decision at the given alpha.
    """
    if not 0.0 < alpha < 1.0:
        raise InvalidInput(f"alpha must be strictly between 0 and 1. Got {alpha}.")

    owners, non_owners = split_samples(clean_df, group_labels)
    logger.info(f"Running Welch's t-test: '{owners.label}' vs '{non_owners.label}' "
                f"(confidence level {format_level(confidence_level)}, alpha {alpha})")

    result = compute(owners, non_owners, confidence_level=confidence_level)
    reject = result.is_significant(alpha)

    logger.debug(f"t={result.t_statistic:.6f}, df={result.degrees_of_freedom:.6f}, "
                 f"p={result.p_value:.6g}, CI={result.confidence_interval}")

    return {
        "result": result,
        "summaries": [summarize(owners), summarize(non_owners)],
        "cohens_d": cohens_d(owners, non_owners),
        "hedges_g": hedges_g(owners, non_owners),
        "alpha": alpha,
        "reject_null": reject,
        "decision": "reject H0" if reject else "fail to reject H0",
    }


def results_table(report: dict) -> pd.DataFrame:
    """One-row table of the test outcome, ready for CSV export."""
    row = report["result"].to_dict()
    row.update({
        "cohens_d": report["cohens_d"],
        "hedges_g": report["hedges_g"],
        "alpha": report["alpha"],
        "decision": report["decision"],
    })
    return pd.DataFrame([row])


def summary_table(report: dict) -> pd.DataFrame:
    return pd.DataFrame([asdict(s) for s in report["summaries"]]).set_index("label")


def save_results(report: dict, table_dir: str) -> dict:
    os.makedirs(table_dir, exist_ok=True)
    paths = {
        "welch_results": os.path.join(table_dir, "welch_ttest_results.csv"),
        "group_summary": os.path.join(table_dir, "welch_group_summary.csv"),
    }
    results_table(report).to_csv(paths["welch_results"], index=False)
    summary_table(report).to_csv(paths["group_summary"])
    for path in paths.values():
        logger.info(f"Saved table: {path}")
    return paths


def plot_mean_difference_ci(result, path: str) -> str:
    """
    Figure 6: Difference in mean income with its confidence interval
    against the no-difference line.
    """
    low, high = result.confidence_interval
    plot_interval(
        result.mean_difference, low, high,
        label=f"{result.label_a} − {result.label_b}",
        xlabel="Difference in Mean Household Income",
        title=f"Figure 6: {format_level(result.confidence_level)} CI for Difference in Means (Welch)"
    )
    plt.savefig(path, dpi=FIG_DPI)
    plt.close()
    logger.info(f"Saved figure: {path}")
    return path


def interpret(report: dict) -> str:
    """Plain-language conclusion of the test."""
    r = report["result"]
    low, high = r.confidence_interval
    owners, non_owners = report["summaries"]
    text = (
        f"Mean income is {owners.mean:,.2f} for '{r.label_a}' (n={owners.n}) and "
        f"{non_owners.mean:,.2f} for '{r.label_b}' (n={non_owners.n}). "
        f"Welch's t({r.degrees_of_freedom:.2f}) = {r.t_statistic:.3f}, p = {r.p_value:.4g}. "
        f"We are {format_level(r.confidence_level)} confident the true difference in means lies "
        f"between {low:,.2f} and {high:,.2f}. "
    )
    if report["reject_null"]:
        text += (f"At alpha = {report['alpha']} we reject H0: the difference in mean "
                 f"income between the groups is statistically significant.")
    else:
        text += (f"At alpha = {report['alpha']} we fail to reject H0: the data do not "
                 f"show a statistically significant difference in mean income.")
    return text


if __name__ == "__main__":
    from gun_income_analysis.config import setup_logger

    setup_logger()
    clean = pd.read_parquet("cleaned_survey.parquet")
    rep = run_welch_test(clean)
    save_results(rep, "tables")
    print(interpret(rep))
