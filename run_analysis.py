import sys
import logging
from src.config import Config
from src.errors import AnalysisError
from src.ingest.fetcher import ShootingFetcher
from src.ingest.processor import ShootingProcessor
from src.exploration.shooting_analysis import ShootingAnalyzer

logger = logging.getLogger("run_analysis")


def banner(title, purpose=None):
    print("\n" + "=" * 80)
    print(title)
    if purpose:
        print(f"Purpose: {purpose}")
    print("=" * 80)


def run():
    Config.initialize_folders()

    print("=" * 80)
    print("  NYPD SHOOTING INCIDENT ANALYSIS")
    print("=" * 80)

    # --- STAGE 1: LOAD ---
    banner("STAGE 1: LOAD", "Fetch the NYPD Shooting Incident (Historic) dataset")
    fetcher = ShootingFetcher(Config.DATA_DIR)
    raw = fetcher.fetch()

    # --- STAGE 2: CLEAN ---
    banner("STAGE 2: CLEAN", "Sentinel unknown categories, parse dates & times")
    processor = ShootingProcessor()
    incidents = processor.clean(raw)
    print(processor.check_data_quality(incidents).T.to_string(header=False))

    with ShootingAnalyzer(incidents) as analyzer:
        # --- STAGE 3: AGGREGATE ---
        banner("STAGE 3: DESCRIPTIVE AGGREGATES", "Incidents and precincts by borough and year")
        print("\n→ Borough totals...")
        print(analyzer.agg.aggregate_by_region().to_string(index=False))
        analyzer.plot_incidents_by_borough()
        analyzer.plot_precincts_by_borough()

        print("\n→ Year × borough breakdown...")
        analyzer.plot_yearly_by_borough()
        analyzer.plot_incidents_vs_precincts_by_year()
        analyzer.report_lowest_years(k=3)

        print("\n→ Time-of-day and seasonal profile...")
        analyzer.plot_hourly_profile()
        analyzer.plot_seasonal_trends()
        analyzer.report_murder_share()

        # --- STAGE 4: REGRESSION ---
        banner("STAGE 4: HYPOTHESIS TEST", "Do boroughs with more precincts see more shootings?")
        analyzer.report_regression()

    print("\n" + "=" * 80)
    print("  ANALYSIS COMPLETE")
    print(f"  All outputs saved to: {Config.OUTPUT_DIR_SHOOTING}")
    print("=" * 80)


def main():
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run()
    except AnalysisError as e:
        logger.error(f"Run aborted in stage '{e.stage}': {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
