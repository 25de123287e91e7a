# eda.py

import os
import logging

import pandas as pd
import matplotlib.pyplot as plt

from gun_income_analysis.config import (
    INCOME_COL,
    GROUP_COL,
    GROUP_LABELS,
    FIG_DPI,
    LOGGER_NAME,
)
from gun_income_analysis.plotting_utils import (
    plot_missingness_bar,
    plot_group_counts,
    plot_income_histogram,
    plot_box_by_group,
    plot_density_by_group,
)

logger = logging.getLogger(LOGGER_NAME)


# -----------------------------------------------------------------------------
# Summary tables
# -----------------------------------------------------------------------------

def income_summary_table(clean_df: pd.DataFrame, order=None) -> pd.DataFrame:
    """
    Descriptive statistics of income per group (count, mean, std, min,
    quartiles, max) with an extra "All" row for the pooled data.
    """
    by_group = clean_df.groupby("group")["income"].describe()
    overall = clean_df["income"].describe().rename("All").to_frame().T
    if order is not None:
        by_group = by_group.reindex(list(order))
    table = pd.concat([by_group, overall])
    table.index.name = "group"
    return table


def ownership_counts(clean_df: pd.DataFrame, order=None) -> pd.DataFrame:
    """Number and share of respondents in each ownership group."""
    counts = clean_df["group"].value_counts()
    if order is not None:
        counts = counts.reindex(list(order), fill_value=0)
    table = pd.DataFrame({
        "count": counts,
        "share": counts / counts.sum(),
    })
    table.index.name = "group"
    return table


def raw_answer_counts(raw_df: pd.DataFrame, group_col: str = GROUP_COL) -> pd.Series:
    """
    All raw answers to the ownership question, including the ones the
    cleaning step drops ("Refused", "Don't know", missing).
    """
    counts = raw_df[group_col].fillna("<missing>").astype(str).value_counts()
    counts.index.name = group_col
    return counts.rename("count")


def missingness_table(raw_df: pd.DataFrame, columns, numeric_cols=()) -> pd.DataFrame:
    """
    Missing count and fraction for the analysed raw columns. Values in
    numeric_cols that are not numbers (survey codes such as "IAP") count
    as missing.
    """
    rows = []
    for col in columns:
        if col not in raw_df.columns:
            continue
        values = raw_df[col]
        if col in numeric_cols:
            values = pd.to_numeric(values, errors="coerce")
        n_missing = int(values.isna().sum())
        rows.append({
            "column": col,
            "num_missing": n_missing,
            "frac_missing": n_missing / len(raw_df) if len(raw_df) else 0.0,
        })
    return pd.DataFrame(rows, columns=["column", "num_missing", "frac_missing"]).set_index("column")


# -----------------------------------------------------------------------------
# Figures
# -----------------------------------------------------------------------------

def _save(path):
    plt.savefig(path, dpi=FIG_DPI)
    plt.close()
    logger.info(f"Saved figure: {path}")
    return path


def missingness_figure(missing: pd.DataFrame, fig_dir: str) -> str:
    """
    Figure 1: Bar chart of missing values in the analysed columns.
    """
    plot_missingness_bar(missing,
                         title="Figure 1: Missing Values in Analysed Columns")
    return _save(os.path.join(fig_dir, "Figure1_missingness.png"))


def ownership_figure(counts: pd.DataFrame, fig_dir: str) -> str:
    """
    Figure 2: Respondents by gun ownership.
    """
    plot_group_counts(
        counts,
        title="Figure 2: Respondents by Gun Ownership"
    )
    return _save(os.path.join(fig_dir, "Figure2_ownership.png"))


def income_distribution_figures(clean_df: pd.DataFrame, fig_dir: str, order=None) -> dict:
    """
    Figures 3–5:
      3: Histogram of household income (all respondents).
      4: Box plot of income by ownership group.
      5: Overlaid income densities by ownership group.
    """
    paths = {}

    # Figure 3: Income distribution
    plot_income_histogram(
        clean_df["income"],
        bins=40,
        title="Figure 3: Household Income Distribution"
    )
    paths["income_histogram"] = _save(os.path.join(fig_dir, "Figure3_income_histogram.png"))

    # Figure 4: Income by group
    plot_box_by_group(
        clean_df, "income", "group",
        xlabel="Gun Ownership", ylabel="Household Income",
        title="Figure 4: Household Income by Gun Ownership",
        order=order
    )
    paths["income_boxplot"] = _save(os.path.join(fig_dir, "Figure4_income_by_group.png"))

    # Figure 5: Densities
    plot_density_by_group(
        clean_df, "income", "group",
        xlabel="Household Income",
        title="Figure 5: Income Density by Gun Ownership",
        order=order
    )
    paths["income_density"] = _save(os.path.join(fig_dir, "Figure5_income_density.png"))

    return paths


# -----------------------------------------------------------------------------
# Driver
# -----------------------------------------------------------------------------

def run_eda(raw_df: pd.DataFrame, clean_df: pd.DataFrame, fig_dir: str, table_dir: str,
            income_col: str = INCOME_COL, group_col: str = GROUP_COL,
            order=None) -> dict:
    """
    Writes the EDA tables (CSV) and figures (PNG) and returns their paths.
    """
    logger.info("Performing EDA...")
    os.makedirs(fig_dir, exist_ok=True)
    os.makedirs(table_dir, exist_ok=True)
    if order is None:
        order = list(GROUP_LABELS.values())

    paths = {}

    missing = missingness_table(raw_df, [income_col, group_col], numeric_cols=[income_col])
    paths["missingness_table"] = os.path.join(table_dir, "missingness.csv")
    missing.to_csv(paths["missingness_table"])

    answers = raw_answer_counts(raw_df, group_col)
    paths["raw_answers_table"] = os.path.join(table_dir, "ownership_raw_answers.csv")
    answers.to_csv(paths["raw_answers_table"])

    counts = ownership_counts(clean_df, order=order)
    paths["ownership_table"] = os.path.join(table_dir, "ownership_counts.csv")
    counts.to_csv(paths["ownership_table"])

    summary = income_summary_table(clean_df, order=order)
    paths["income_summary_table"] = os.path.join(table_dir, "income_summary.csv")
    summary.to_csv(paths["income_summary_table"])
    logger.info("Income by group:\n" + summary.round(2).to_string())

    for key in ("missingness_table", "raw_answers_table", "ownership_table", "income_summary_table"):
        logger.info(f"Saved table: {paths[key]}")

    paths["missingness_figure"] = missingness_figure(missing, fig_dir)
    paths["ownership_figure"] = ownership_figure(counts, fig_dir)
    paths.update(income_distribution_figures(clean_df, fig_dir, order=order))

    logger.info(f"EDA complete: {len(paths)} artifacts written")
    return paths
