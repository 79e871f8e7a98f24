import logging
from pathlib import Path
import seaborn as sns
import matplotlib.pyplot as plt
import matplotlib as mpl
from src.config import Config
from src.utils.db import DatabaseManager
from src.features.build_features import IncidentAggregator, lowest_incident_years
from src.models.precinct_regression import PrecinctRegression

logger = logging.getLogger(__name__)

# Set global formatting: No scientific notation
mpl.rcParams['axes.formatter.useoffset'] = False
mpl.rcParams['axes.formatter.limits'] = [-20, 20]


class ShootingAnalyzer:
    def __init__(self, df, output_dir=None, show=False):
        self.df = df
        self.output_dir = Path(output_dir or Config.OUTPUT_DIR_SHOOTING)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.show = show
        self.db_mgr = DatabaseManager()
        self.agg = None

    def __enter__(self):
        self.agg = IncidentAggregator(self.db_mgr.register_incidents(self.df))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.db_mgr.close()

    def _save_plot(self, filename: str):
        """Internal helper to standardize how plots are saved."""
        if not filename.endswith(('.png', '.jpg', '.pdf')):
            filename += '.png'

        save_path = self.output_dir / filename
        plt.tight_layout()
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        logger.info(f"Plot saved to {save_path}")
        if self.show:
            plt.show()
        plt.close()
        return save_path

    def _bar_labels(self, ax):
        for p in ax.patches:
            ax.annotate(f'{int(p.get_height()):,}',
                        (p.get_x() + p.get_width() / 2., p.get_height()),
                        ha='center', va='center', xytext=(0, 9),
                        textcoords='offset points', fontweight='bold')

    def plot_incidents_by_borough(self, filename="plot_incidents_by_borough"):
        df = self.agg.aggregate_by_region().sort_values('incident_count', ascending=False)

        plt.figure(figsize=(10, 6))
        sns.set_style("white")
        ax = sns.barplot(data=df, x='borough', y='incident_count', hue='borough',
                         palette='Reds_r', legend=False)
        self._bar_labels(ax)

        plt.title("Shooting Incidents by Borough", fontsize=15, fontweight='bold')
        plt.xlabel("Borough")
        plt.ylabel("Total Incidents")
        sns.despine()
        return self._save_plot(filename)

    def plot_precincts_by_borough(self, filename="plot_precincts_by_borough"):
        df = self.agg.aggregate_by_region().sort_values('precinct_count', ascending=False)

        plt.figure(figsize=(10, 6))
        sns.set_style("white")
        ax = sns.barplot(data=df, x='borough', y='precinct_count', hue='borough',
                         palette='Blues_r', legend=False)
        self._bar_labels(ax)

        plt.title("Precincts Reporting Shootings by Borough", fontsize=15, fontweight='bold')
        plt.xlabel("Borough")
        plt.ylabel("Distinct Precincts")
        sns.despine()
        return self._save_plot(filename)

    def plot_yearly_by_borough(self, filename="plot_yearly_by_borough"):
        df = self.agg.aggregate_by_region_year()
        pivot = df.pivot(index='year', columns='borough', values='incident_count').fillna(0)

        ax = pivot.plot(kind='bar', stacked=True, figsize=(14, 7), colormap='Set2', width=0.85)
        plt.title("Shooting Incidents per Year, Stacked by Borough", fontsize=15, fontweight='bold')
        plt.xlabel("Year")
        plt.ylabel("Incidents")
        plt.xticks(rotation=45)
        ax.legend(title="Borough", loc='upper right')
        plt.grid(axis='y', linestyle='--', alpha=0.5)
        return self._save_plot(filename)

    def plot_incidents_vs_precincts_by_year(self, filename="plot_incidents_vs_precincts_by_year"):
        incidents = self.agg.aggregate_by_year()
        precincts = self.agg.precincts_by_year()

        fig, ax1 = plt.subplots(figsize=(12, 6))
        ax1.plot(incidents.index, incidents.values, color='crimson', marker='o', linewidth=2.5)
        ax1.set_xlabel("Year")
        ax1.set_ylabel("Incidents", color='crimson')
        ax1.tick_params(axis='y', labelcolor='crimson')

        ax2 = ax1.twinx()
        ax2.plot(precincts.index, precincts.values, color='slateblue', marker='s', linestyle='--', linewidth=2)
        ax2.set_ylabel("Precincts with Incidents", color='slateblue')
        ax2.tick_params(axis='y', labelcolor='slateblue')

        ax1.set_xticks(list(incidents.index))
        ax1.tick_params(axis='x', rotation=45)
        plt.title("Yearly Incidents vs. Active Precincts", fontsize=15, fontweight='bold')
        return self._save_plot(filename)

    def plot_hourly_profile(self, filename="plot_hourly_profile"):
        hourly = self.agg.aggregate_by_hour().reindex(range(24), fill_value=0)

        plt.figure(figsize=(12, 6))
        plt.fill_between(hourly.index, hourly.values, color="salmon", alpha=0.3, label='Incident Volume')
        plt.plot(hourly.index, hourly.values, color="firebrick", marker='o', linewidth=2)
        plt.axvspan(0, 4, color='navy', alpha=0.08, label='Late Night')
        plt.axvspan(20, 23, color='navy', alpha=0.08)
        plt.title("When Do Shootings Happen? (24-Hour Profile)", fontsize=15, fontweight='bold')
        plt.xlabel("Hour of Day")
        plt.ylabel("Total Incidents")
        plt.xticks(range(0, 24))
        plt.legend(loc='upper center')
        plt.grid(axis='y', linestyle='--', alpha=0.5)
        return self._save_plot(filename)

    def plot_seasonal_trends(self, filename="plot_seasonal_trends"):
        monthly = self.agg.aggregate_by_month().reindex(range(1, 13), fill_value=0)

        plt.figure(figsize=(12, 6))
        sns.set_style("whitegrid")
        sns.lineplot(x=monthly.index, y=monthly.values, marker='o', color='crimson', linewidth=3, markersize=8)
        plt.axvspan(6, 8, color='orange', alpha=0.1, label='Summer')
        plt.title("Seasonal Profile: Monthly Shooting Volume", fontsize=15, fontweight='bold')
        plt.xlabel("Month of the Year")
        plt.ylabel("Total Incidents")
        plt.xticks(range(1, 13), ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec'])
        plt.legend(loc='upper left')
        return self._save_plot(filename)

    def report_lowest_years(self, k=3):
        lowest = lowest_incident_years(self.agg.aggregate_by_year(), k)
        print(f"--- {k} YEARS WITH THE FEWEST SHOOTINGS ---")
        for year, count in lowest:
            print(f"  {year}: {count:,} incidents")
        return lowest

    def report_murder_share(self):
        df = self.agg.murders_by_region()
        print("--- STATISTICAL MURDER SHARE BY BOROUGH ---")
        print(df.to_string(index=False, float_format=lambda v: f"{v:.1f}"))
        return df

    def report_regression(self):
        model = PrecinctRegression(self.agg.aggregate_by_region(), output_dir=self.output_dir)
        model.fit()
        model.print_summary()
        model.save_summary()
        model.plot_fit()
        return model.result
