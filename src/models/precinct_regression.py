"""
MISSION: The Hypothesis Layer.
Tests whether boroughs with more precincts see more shootings, fitting
incident counts against precinct counts with one point per borough.
"""
import logging
import os
from dataclasses import dataclass
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from scipy import stats
from src.config import Config
from src.errors import InsufficientDataError, DivisionByZeroError

logger = logging.getLogger(__name__)

MIN_POINTS = 3


@dataclass(frozen=True)
class RegressionResult:
    slope: float
    intercept: float
    r_squared: float
    p_value: float
    n: int
    stderr: float


def fit_simple_linear_regression(x, y):
    """
    Ordinary least squares with a single predictor.

    The p-value is two-sided for the slope under Student's t with n - 2
    degrees of freedom.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"x and y differ in length ({len(x)} vs {len(y)})")

    n = len(x)
    if n < MIN_POINTS:
        raise InsufficientDataError(
            f"Regression needs at least {MIN_POINTS} points, got {n}"
        )
    if np.var(x) == 0:
        raise DivisionByZeroError(
            f"Predictor has zero variance (all values = {x[0]:g})"
        )
    if n < Config.LOW_SAMPLE_WARNING_N:
        logger.warning(
            f"Fitting on only {n} points; treat the p-value as indicative at best."
        )

    fit = stats.linregress(x, y)

    ss_tot = float(np.sum((y - y.mean()) ** 2))
    if ss_tot == 0:
        r_squared = 0.0
    else:
        residuals = y - (fit.intercept + fit.slope * x)
        r_squared = 1.0 - float(np.sum(residuals ** 2)) / ss_tot

    return RegressionResult(
        slope=float(fit.slope),
        intercept=float(fit.intercept),
        r_squared=r_squared,
        p_value=float(fit.pvalue),
        n=n,
        stderr=float(fit.stderr),
    )


class PrecinctRegression:
    """
    Fits incident_count ~ precinct_count over a borough aggregate and
    reports the result.
    """
    def __init__(self, region_aggregate, output_dir=None):
        self.df = region_aggregate
        self.output_dir = output_dir or Config.OUTPUT_DIR_SHOOTING
        os.makedirs(self.output_dir, exist_ok=True)
        self.result = None

    def fit(self):
        self.result = fit_simple_linear_regression(
            self.df["precinct_count"], self.df["incident_count"]
        )
        return self.result

    def summary_table(self):
        if self.result is None:
            self.fit()
        r = self.result
        return pd.DataFrame({
            "term": ["intercept", "precinct_count"],
            "estimate": [r.intercept, r.slope],
            "std_error": [np.nan, r.stderr],
            "p_value": [np.nan, r.p_value],
            "r_squared": [r.r_squared, r.r_squared],
            "n": [r.n, r.n],
        })

    def print_summary(self, alpha=0.05):
        table = self.summary_table()
        r = self.result
        print("--- PRECINCT COVERAGE REGRESSION ---")
        print(table.to_string(index=False))
        verdict = "significant" if r.p_value < alpha else "no significant"
        print(f"Finding: {verdict} relationship between precinct count and incidents "
              f"(slope={r.slope:.2f}, R²={r.r_squared:.3f}, p={r.p_value:.4f}, n={r.n})")
        return table

    def save_summary(self, filename="regression_summary.csv"):
        out_path = os.path.join(self.output_dir, filename)
        self.summary_table().to_csv(out_path, index=False)
        print(f"Regression summary saved to {out_path}")
        return out_path

    def plot_fit(self, filename="regression_precincts_vs_incidents.png"):
        if self.result is None:
            self.fit()
        r = self.result

        plt.figure(figsize=(10, 6))
        sns.set_style("whitegrid")
        ax = sns.scatterplot(data=self.df, x="precinct_count", y="incident_count",
                             hue="borough", palette="Set1", s=120)

        xs = np.linspace(self.df["precinct_count"].min(), self.df["precinct_count"].max(), 50)
        plt.plot(xs, r.intercept + r.slope * xs, color="gray", linestyle="--",
                 label=f"OLS fit (R²={r.r_squared:.3f})")

        for _, row in self.df.iterrows():
            ax.annotate(row["borough"], (row["precinct_count"], row["incident_count"]),
                        xytext=(6, 4), textcoords="offset points", fontsize=9)

        plt.title("Shooting Incidents vs. Precinct Count by Borough", fontsize=15, fontweight="bold")
        plt.xlabel("Number of Precincts")
        plt.ylabel("Total Shooting Incidents")
        plt.legend(loc="upper left")

        out_path = os.path.join(self.output_dir, filename)
        plt.tight_layout()
        plt.savefig(out_path, dpi=300, bbox_inches="tight")
        plt.close()
        print(f"Regression plot saved to {out_path}")
        return out_path
