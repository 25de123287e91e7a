import os

import pandas as pd
import pytest

from gun_income_analysis.exceptions import InvalidInput
from gun_income_analysis.run_all import main


def test_main_runs_pipeline(tmp_path, survey_csv):
    out_dir = tmp_path / "results"
    code = main(["--data_path", str(survey_csv), "--output_dir", str(out_dir)])
    assert code == 0

    assert os.path.isfile(out_dir / "analysis_log.txt")
    assert os.path.isfile(out_dir / "cleaned_survey.parquet")
    assert os.path.isfile(out_dir / "figures" / "Figure6_mean_difference_ci.png")
    assert os.path.isfile(out_dir / "tables" / "income_summary.csv")

    results = pd.read_csv(out_dir / "tables" / "welch_ttest_results.csv")
    assert results.loc[0, "decision"] == "reject H0"
    assert "reject H0" in (out_dir / "conclusion.txt").read_text(encoding="utf-8")


def test_main_year_and_confidence_options(tmp_path, survey_csv):
    out_dir = tmp_path / "results_2018"
    code = main(["--data_path", str(survey_csv), "--output_dir", str(out_dir),
                 "--year", "2018", "--confidence_level", "0.99", "--alpha", "0.01"])
    assert code == 0
    results = pd.read_csv(out_dir / "tables" / "welch_ttest_results.csv")
    assert results.loc[0, "confidence_level"] == 0.99
    assert results.loc[0, "alpha"] == 0.01
    summary = pd.read_csv(out_dir / "tables" / "welch_group_summary.csv", index_col="label")
    assert summary["n"].sum() == 120


def test_main_missing_dataset(tmp_path):
    code = main(["--data_path", str(tmp_path / "nope.csv"), "--output_dir", str(tmp_path / "out")])
    assert code == 1


def test_main_requires_data_path(tmp_path):
    with pytest.raises(SystemExit):
        main(["--output_dir", str(tmp_path / "out")])


def test_main_rejects_bad_alpha(tmp_path, survey_csv):
    with pytest.raises(InvalidInput):
        main(["--data_path", str(survey_csv), "--output_dir", str(tmp_path / "out"),
              "--alpha", "5"])
