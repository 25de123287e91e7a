# data_preprocessing.py

import logging

import pandas as pd
import numpy as np

from gun_income_analysis.config import (
    DATA_FILE,
    INCOME_COL,
    GROUP_COL,
    YEAR_COL,
    GROUP_LABELS,
    LOGGER_NAME,
)
from gun_income_analysis.exceptions import InvalidInput
from gun_income_analysis.welch_ttest import Sample

logger = logging.getLogger(LOGGER_NAME)


def load_raw_data(path: str) -> pd.DataFrame:
    """
    Load the survey extract into a DataFrame. Parquet files are read by
    extension, anything else is treated as CSV.
    """
    logger.info(f"Loading data from '{path}'...")
    if str(path).endswith(".parquet"):
        df = pd.read_parquet(path)
    else:
        df = pd.read_csv(path, low_memory=False)
    logger.info(f"Raw dataset shape: {df.shape}")
    return df


def clean_and_filter(df: pd.DataFrame,
                     income_col: str = INCOME_COL,
                     group_col: str = GROUP_COL,
                     group_labels: dict = GROUP_LABELS,
                     year=None) -> pd.DataFrame:
    """
    Basic cleaning:
    - Optionally keep a single survey year.
    - Coerce income to numeric; survey codes such as "IAP" become missing.
    - Drop rows with missing income.
    - Keep only the configured ownership answers (drops "Refused",
      "Don't know", blanks) and map them to readable group labels.
    Returns a two-column frame: income, group.
    """
    required = [income_col, group_col] + ([YEAR_COL] if year is not None else [])
    missing_cols = [c for c in required if c not in df.columns]
    if missing_cols:
        raise KeyError(f"Columns not found in dataset: {missing_cols}")

    n_start = len(df)

    # 1) Survey year
    if year is not None:
        df = df[df[YEAR_COL] == year]
        logger.info(f"Kept {len(df)} of {n_start} rows for year {year}")

    # 2) Income to numeric, drop missing
    income = pd.to_numeric(df[income_col], errors="coerce")
    keep = income.notna() & np.isfinite(income)
    logger.debug(f"Rows with missing income: {int((~keep).sum())}")

    # 3) Ownership answers -> group labels, case/whitespace insensitive
    label_map = {str(k).strip().lower(): v for k, v in group_labels.items()}
    answers = df[group_col].astype(str).str.strip().str.lower()
    group = answers.map(label_map)
    logger.debug(f"Rows with unwanted ownership answers: {int(group.isna().sum())}")
    keep &= group.notna()

    out = pd.DataFrame({
        "income": income[keep].astype(float),
        "group": group[keep],
    }).reset_index(drop=True)

    logger.info(f"Cleaned dataset: {len(out)} of {n_start} rows kept")
    return out


def split_samples(clean_df: pd.DataFrame, group_labels: dict = GROUP_LABELS):
    """
    Partition the cleaned income column by group, in the order of
    group_labels (owners first). Returns (Sample, Sample).
    """
    labels = list(group_labels.values())
    if len(labels) != 2:
        raise InvalidInput(f"Exactly two groups are compared. Got {labels}.")

    samples = []
    for label in labels:
        values = clean_df.loc[clean_df["group"] == label, "income"]
        if values.empty:
            raise InvalidInput(f"No observations left for group '{label}'.")
        samples.append(Sample.from_values(values, label))
        logger.info(f"Sample '{label}': n={len(values)}")
    return samples[0], samples[1]


def save_clean_data(df: pd.DataFrame, path: str) -> str:
    df.to_parquet(path, index=False)
    logger.info(f"Saved cleaned data to '{path}'")
    return path


if __name__ == '__main__':
    raw = load_raw_data(DATA_FILE)
    cleaned = clean_and_filter(raw)
    save_clean_data(cleaned, 'cleaned_survey.parquet')
