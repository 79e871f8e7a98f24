import os
from dotenv import load_dotenv
from pathlib import Path

root_dir = Path(__file__).resolve().parent.parent
env_path = root_dir / ".env"

load_dotenv(env_path)

class Config:
    # NYPD Shooting Incident Data (Historic), NYC Open Data CSV export
    SHOOTING_DATA_URL = os.getenv(
        "SHOOTING_DATA_URL",
        "https://data.cityofnewyork.us/api/views/833y-fsy8/rows.csv?accessType=DOWNLOAD",
    )

    DATA_DIR = Path(os.getenv("SHOOTING_DATA_DIR", "./data"))
    OUTPUT_DIR_SHOOTING = Path(os.getenv("OUTPUT_DIR_SHOOTING", "./outputs/NYPD_Shooting"))

    # Regressions on fewer points than this still run but get flagged
    LOW_SAMPLE_WARNING_N = int(os.getenv("LOW_SAMPLE_WARNING_N", "10"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def initialize_folders(cls):
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.OUTPUT_DIR_SHOOTING.mkdir(parents=True, exist_ok=True)
