# run_all.py
"""
Income vs. gun ownership analysis, end to end:
 load survey extract → clean & filter → EDA tables/figures →
 Welch's t-test → results tables, CI figure and written conclusion.

Usage:
    gun-income-analysis --data_path data/gss_income_owngun.csv --output_dir results
"""

import argparse
import os
import sys

from gun_income_analysis import config
from gun_income_analysis.data_preprocessing import load_raw_data, clean_and_filter, save_clean_data
from gun_income_analysis.eda import run_eda
from gun_income_analysis.hypothesis_testing import (
    run_welch_test,
    save_results,
    plot_mean_difference_ci,
    interpret,
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="EDA and Welch's t-test of household income by gun ownership"
    )
    parser.add_argument(
        "--data_path",
        type=str,
        required=True,
        help=f"Path to the survey extract (CSV or parquet), e.g. {config.DATA_FILE}"
    )
    parser.add_argument(
        "--output_dir",
        type=str,
        default=config.RESULTS_DIR,
        help="Directory to save figures, tables and the log"
    )
    parser.add_argument("--income_col", type=str, default=config.INCOME_COL)
    parser.add_argument("--group_col", type=str, default=config.GROUP_COL)
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Only analyse respondents from this survey year"
    )
    parser.add_argument("--confidence_level", type=float, default=config.CONFIDENCE_LEVEL)
    parser.add_argument("--alpha", type=float, default=config.ALPHA)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    out_dir = args.output_dir
    fig_dir = os.path.join(out_dir, config.FIG_SUBDIR)
    table_dir = os.path.join(out_dir, config.TABLE_SUBDIR)

    # 1) Ensure output directories exist
    os.makedirs(fig_dir, exist_ok=True)
    os.makedirs(table_dir, exist_ok=True)
    logger = config.setup_logger(out_dir)

    if not os.path.isfile(args.data_path):
        logger.error(f"Dataset not found at {args.data_path}")
        return 1

    # 2) Data preprocessing
    logger.info("=== 1) Data Preprocessing ===")
    raw = load_raw_data(args.data_path)
    clean = clean_and_filter(raw, income_col=args.income_col,
                             group_col=args.group_col, year=args.year)
    save_clean_data(clean, os.path.join(out_dir, "cleaned_survey.parquet"))

    # 3) EDA
    logger.info("=== 2) Exploratory Data Analysis (EDA) ===")
    run_eda(raw, clean, fig_dir, table_dir,
            income_col=args.income_col, group_col=args.group_col)

    # 4) Welch's t-test
    logger.info("=== 3) Welch's Two-Sample t-Test ===")
    report = run_welch_test(clean, confidence_level=args.confidence_level, alpha=args.alpha)
    save_results(report, table_dir)
    plot_mean_difference_ci(report["result"], os.path.join(fig_dir, "Figure6_mean_difference_ci.png"))

    conclusion = interpret(report)
    with open(os.path.join(out_dir, "conclusion.txt"), "w", encoding="utf-8") as f:
        f.write(conclusion + "\n")
    logger.info(conclusion)

    logger.info(f"All steps completed. Check '{out_dir}' for figures, tables and the log.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
