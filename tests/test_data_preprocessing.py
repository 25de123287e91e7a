import pandas as pd
import pytest

from gun_income_analysis.data_preprocessing import (
    load_raw_data,
    clean_and_filter,
    split_samples,
    save_clean_data,
)
from gun_income_analysis.exceptions import InvalidInput
from gun_income_analysis.welch_ttest import Sample

from conftest import N_PER_GROUP


def test_load_raw_data_csv(survey_csv, survey_df):
    df = load_raw_data(str(survey_csv))
    assert df.shape == survey_df.shape
    assert list(df.columns) == ["year", "realinc", "owngun"]


def test_clean_and_filter_drops_missing_and_unwanted_answers(survey_csv):
    raw = load_raw_data(str(survey_csv))
    clean = clean_and_filter(raw)

    assert list(clean.columns) == ["income", "group"]
    assert len(clean) == 2 * N_PER_GROUP
    assert clean["income"].notna().all()
    assert clean["income"].dtype == float
    assert set(clean["group"]) == {"Owns gun", "Does not own gun"}
    assert (clean["group"] == "Owns gun").sum() == N_PER_GROUP


def test_clean_and_filter_normalises_answers():
    raw = pd.DataFrame({
        "realinc": [10.0, 20.0, 30.0, 40.0],
        "owngun": [" yes", "NO ", "Refused", "Yes"],
    })
    clean = clean_and_filter(raw)
    assert clean["group"].tolist() == ["Owns gun", "Does not own gun", "Owns gun"]
    assert clean["income"].tolist() == [10.0, 20.0, 40.0]


def test_clean_and_filter_custom_columns_and_labels():
    raw = pd.DataFrame({
        "income16": [1.0, 2.0, 3.0],
        "gun": ["Y", "N", "?"],
    })
    clean = clean_and_filter(raw, income_col="income16", group_col="gun",
                             group_labels={"Y": "owner", "N": "non-owner"})
    assert clean["group"].tolist() == ["owner", "non-owner"]


def test_clean_and_filter_year(survey_df):
    clean = clean_and_filter(survey_df, year=2018)
    assert len(clean) == N_PER_GROUP


def test_clean_and_filter_missing_column():
    with pytest.raises(KeyError, match="owngun"):
        clean_and_filter(pd.DataFrame({"realinc": [1.0]}))


def test_split_samples_order(survey_df):
    clean = clean_and_filter(survey_df)
    owners, non_owners = split_samples(clean)
    assert isinstance(owners, Sample)
    assert owners.label == "Owns gun"
    assert non_owners.label == "Does not own gun"
    assert owners.n == non_owners.n == N_PER_GROUP
    assert owners.mean > non_owners.mean


def test_split_samples_empty_group():
    clean = pd.DataFrame({"income": [1.0, 2.0], "group": ["Owns gun", "Owns gun"]})
    with pytest.raises(InvalidInput, match="Does not own gun"):
        split_samples(clean)


def test_save_and_reload_clean_data(tmp_path, survey_df):
    clean = clean_and_filter(survey_df)
    path = save_clean_data(clean, str(tmp_path / "clean.parquet"))
    reloaded = load_raw_data(path)
    pd.testing.assert_frame_equal(reloaded, clean, check_dtype=False)
