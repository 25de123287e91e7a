import os

import pandas as pd
import pytest

from gun_income_analysis.data_preprocessing import clean_and_filter
from gun_income_analysis.eda import (
    income_summary_table,
    ownership_counts,
    raw_answer_counts,
    missingness_table,
    run_eda,
)

ORDER = ["Owns gun", "Does not own gun"]


@pytest.fixture
def clean_df(survey_df):
    return clean_and_filter(survey_df)


def test_income_summary_table(clean_df):
    table = income_summary_table(clean_df, order=ORDER)
    assert table.index.tolist() == ORDER + ["All"]
    assert table.loc["All", "count"] == len(clean_df)
    owners = clean_df.loc[clean_df["group"] == "Owns gun", "income"]
    assert table.loc["Owns gun", "mean"] == pytest.approx(owners.mean())
    assert table.loc["Owns gun", "std"] == pytest.approx(owners.std(ddof=1))


def test_ownership_counts(clean_df):
    table = ownership_counts(clean_df, order=ORDER)
    assert table["count"].tolist() == [120, 120]
    assert table["share"].sum() == pytest.approx(1.0)


def test_raw_answer_counts_include_dropped_answers(survey_df):
    counts = raw_answer_counts(survey_df)
    assert counts["Refused"] == 4
    assert counts["Don't know"] == 3
    assert counts["<missing>"] == 1
    assert counts["Yes"] == 122


def test_missingness_table_counts_survey_codes(survey_df):
    table = missingness_table(survey_df, ["realinc", "owngun", "not_there"],
                              numeric_cols=["realinc"])
    assert table.index.tolist() == ["realinc", "owngun"]
    assert table.loc["realinc", "num_missing"] == 4
    assert table.loc["owngun", "num_missing"] == 1
    assert table.loc["owngun", "frac_missing"] == pytest.approx(1 / len(survey_df))


def test_run_eda_writes_tables_and_figures(tmp_path, survey_df, clean_df):
    fig_dir = str(tmp_path / "figures")
    table_dir = str(tmp_path / "tables")
    paths = run_eda(survey_df, clean_df, fig_dir, table_dir)

    for key in ("missingness_table", "raw_answers_table", "ownership_table",
                "income_summary_table", "missingness_figure", "ownership_figure",
                "income_histogram", "income_boxplot", "income_density"):
        assert os.path.isfile(paths[key]), key

    summary = pd.read_csv(paths["income_summary_table"], index_col="group")
    assert summary.index.tolist() == ORDER + ["All"]
