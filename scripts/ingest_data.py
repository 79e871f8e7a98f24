import logging
from src.config import Config
from src.ingest.fetcher import ShootingFetcher
from src.ingest.processor import ShootingProcessor

def main():
    logging.basicConfig(level=Config.LOG_LEVEL)
    Config.initialize_folders()

    # 1. Download (cached under DATA_DIR)
    fetcher = ShootingFetcher(Config.DATA_DIR)
    csv_path = fetcher.download_incidents()

    # 2. Validate that every row cleans before the full report is run
    df = ShootingProcessor().clean(fetcher.load_incidents(csv_path))
    print(f"{len(df):,} incidents across {df['borough'].nunique()} boroughs, "
          f"{df['year'].min()}-{df['year'].max()}.")
    print("Ingest complete. Ready for run_analysis.py.")

if __name__ == "__main__":
    main()
