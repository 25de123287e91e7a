# plotting_utils.py

import matplotlib.pyplot as plt
import seaborn as sns


GROUP_PALETTE = ['darkcyan', 'salmon']


def plot_missingness_bar(missing, title="Missing Values"):
    """
    missing: DataFrame indexed by raw column name with num_missing and
    frac_missing columns; each bar is labelled with its share of rows.
    """
    plt.figure(figsize=(8, 3))
    bars = plt.barh(missing.index.astype(str), missing["num_missing"].values,
                    color='steelblue', edgecolor='k')
    for bar, frac in zip(bars, missing["frac_missing"].values):
        plt.text(bar.get_width(), bar.get_y() + bar.get_height() / 2,
                 f" {frac:.1%}", va='center')
    plt.xlabel("Rows Missing or Not Numeric")
    plt.title(title)
    plt.tight_layout()


def plot_group_counts(counts, xlabel="Gun Ownership", ylabel="Respondents", title=""):
    """
    counts: DataFrame indexed by group with count and share columns, as
    built by eda.ownership_counts. Bars are annotated "n (share)".
    """
    plt.figure(figsize=(7, 5))
    colors = [GROUP_PALETTE[i % len(GROUP_PALETTE)] for i in range(len(counts))]
    bars = plt.bar(counts.index.astype(str), counts["count"].values,
                   color=colors, edgecolor='k', width=0.6)
    for bar, n, share in zip(bars, counts["count"].values, counts["share"].values):
        plt.text(bar.get_x() + bar.get_width() / 2, bar.get_height(),
                 f"{n:,} ({share:.0%})", ha='center', va='bottom')
    plt.xlabel(xlabel)
    plt.ylabel(ylabel)
    plt.title(title)
    plt.tight_layout()


def plot_income_histogram(income, bins=40, xlabel="Household Income", title=""):
    """
    Histogram of income with the mean and median marked; income is
    right-skewed, so the gap between the two lines is worth seeing.
    """
    values = income.dropna()
    plt.figure(figsize=(8, 5))
    plt.hist(values, bins=bins, color='coral', edgecolor='black')
    plt.axvline(values.mean(), color='navy', linewidth=2, label=f"Mean {values.mean():,.0f}")
    plt.axvline(values.median(), color='navy', linestyle='--', linewidth=2,
                label=f"Median {values.median():,.0f}")
    plt.xlabel(xlabel)
    plt.ylabel("Respondents")
    plt.title(title)
    plt.legend()
    plt.tight_layout()


def plot_box_by_group(df, value_col, group_col, xlabel="", ylabel="", title="", order=None):
    """
    Box plot of value_col for each category of group_col, with group means marked.
    """
    plt.figure(figsize=(7, 5))
    ax = sns.boxplot(data=df, x=group_col, y=value_col, order=order,
                     showmeans=True, color='lightsteelblue')
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    plt.tight_layout()


def plot_density_by_group(df, value_col, group_col, xlabel="", title="", order=None):
    """
    Overlaid kernel density estimates of value_col, one curve per group.
    """
    plt.figure(figsize=(8, 5))
    ax = sns.kdeplot(data=df, x=value_col, hue=group_col, hue_order=order,
                     common_norm=False, fill=True, alpha=0.3)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Density")
    ax.set_title(title)
    plt.tight_layout()


def plot_interval(estimate, low, high, label="", xlabel="", title="", reference=0.0):
    """
    Point estimate with its confidence interval as a horizontal error bar,
    plus a dashed reference line (zero difference by default).
    """
    plt.figure(figsize=(8, 3))
    plt.errorbar([estimate], [0], xerr=[[estimate - low], [high - estimate]],
                 fmt='o', color='darkcyan', ecolor='black', capsize=8, markersize=8)
    plt.axvline(reference, color='firebrick', linestyle='--', linewidth=1)
    plt.yticks([0], [label])
    span = max(abs(high - low), 1e-12)
    plt.xlim(min(low, reference) - 0.25 * span, max(high, reference) + 0.25 * span)
    plt.xlabel(xlabel)
    plt.title(title)
    plt.grid(axis='x', alpha=0.3)
    plt.tight_layout()
