import os
import logging
import requests
import pandas as pd
from src.config import Config
from src.errors import FetchError

logger = logging.getLogger(__name__)


class ShootingFetcher:
    # Direct CSV export link for the NYC Open Data portal
    SHOOTING_URL = Config.SHOOTING_DATA_URL
    RAW_FILENAME = "nypd_shooting_raw.csv"

    def __init__(self, data_dir, url=None):
        self.data_dir = data_dir
        self.url = url or self.SHOOTING_URL
        os.makedirs(data_dir, exist_ok=True)

    def download_incidents(self):
        """Downloads the incident CSV once; later runs reuse the local copy."""
        local_path = os.path.join(self.data_dir, self.RAW_FILENAME)

        if os.path.exists(local_path) and os.path.getsize(local_path) > 0:
            logger.info(f"  ↪ {self.RAW_FILENAME} already exists. Skipping download.")
            return local_path

        logger.info(f"Downloading NYPD Shooting Incident data from {self.url}...")
        # Stream into a side file; only a complete download lands at local_path
        part_path = local_path + ".part"
        try:
            with requests.get(self.url, stream=True, timeout=60) as r:
                r.raise_for_status()
                with open(part_path, "wb") as f:
                    for chunk in r.iter_content(chunk_size=1024*1024):
                        f.write(chunk)
            os.replace(part_path, local_path)
        except requests.exceptions.RequestException as e:
            logger.error(f"Download failed: {e}")
            raise FetchError(self.url, e) from e
        finally:
            if os.path.exists(part_path):
                os.remove(part_path)
        return local_path

    def load_incidents(self, csv_path):
        """Reads the raw CSV, keeping date and time as the original strings."""
        df = pd.read_csv(csv_path, dtype={"OCCUR_DATE": str, "OCCUR_TIME": str})
        logger.info(f"Loaded {len(df):,} incident records from {csv_path}")
        return df

    def fetch(self):
        return self.load_incidents(self.download_incidents())
