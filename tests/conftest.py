import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

N_PER_GROUP = 120


@pytest.fixture
def survey_df():
    """
    Synthetic GSS-style extract: 120 owners and 120 non-owners with valid
    incomes split evenly over 2018 and 2021, plus rows the cleaning step
    must drop (refusals, "Don't know", survey codes and missing values).
    """
    rng = np.random.default_rng(42)
    owners = rng.normal(60000, 15000, N_PER_GROUP).round(2)
    non_owners = rng.normal(45000, 15000, N_PER_GROUP).round(2)
    half = N_PER_GROUP // 2

    valid = pd.DataFrame({
        "year": ([2018] * half + [2021] * half) * 2,
        "realinc": list(owners) + list(non_owners),
        "owngun": ["Yes"] * N_PER_GROUP + ["No"] * N_PER_GROUP,
    })
    junk = pd.DataFrame({
        "year": [2018] * 12,
        "realinc": [50000, 52000, 51000, 49000, 30000, 31000, 32000,
                    "IAP", "IAP", np.nan, np.nan, 40000],
        "owngun": ["Refused", "Refused", "Refused", "Refused", "Don't know",
                   "Don't know", "Don't know", "Yes", "No", "Yes", "No", np.nan],
    })
    return pd.concat([valid, junk], ignore_index=True)


@pytest.fixture
def survey_csv(tmp_path, survey_df):
    path = tmp_path / "gss_income_owngun.csv"
    survey_df.to_csv(path, index=False)
    return path
