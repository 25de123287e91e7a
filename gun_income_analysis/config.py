# config.py

import os
import sys
import logging

# -----------------------------------------------------------------------------
# 1) CONFIGURATION: filepaths, columns and test settings
# -----------------------------------------------------------------------------

DATA_FILE = os.path.join("data", "gss_income_owngun.csv")
RESULTS_DIR = "results"
FIG_SUBDIR = "figures"
TABLE_SUBDIR = "tables"
LOG_FILE = "analysis_log.txt"

# GSS extract: inflation-adjusted family income and "Do you have a gun in your home?"
INCOME_COL = "realinc"
GROUP_COL = "owngun"
YEAR_COL = "year"

# Raw answer -> readable group label. Owners come first, so the mean
# difference is reported as (owners - non-owners).
GROUP_LABELS = {
    "Yes": "Owns gun",
    "No": "Does not own gun",
}

CONFIDENCE_LEVEL = 0.95
ALPHA = 0.05
FIG_DPI = 150

LOGGER_NAME = "GunIncomeAnalysis"

# -----------------------------------------------------------------------------
# 2) LOGGING
# -----------------------------------------------------------------------------

formatter = logging.Formatter("%(asctime)s — %(levelname)s — %(message)s")


def setup_logger(results_dir=RESULTS_DIR, log_file=LOG_FILE):
    """
    Configure the analysis logger: INFO to stdout, DEBUG to a log file
    inside results_dir. Safe to call more than once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.INFO)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    # File handler
    os.makedirs(results_dir, exist_ok=True)
    fh = logging.FileHandler(os.path.join(results_dir, log_file))
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)
    logger.addHandler(fh)

    return logger
