import logging
import pandas as pd
from pandas.api.types import is_datetime64_any_dtype, is_timedelta64_dtype
from src.errors import ParseError

logger = logging.getLogger(__name__)

UNKNOWN = "UNKNOWN"

# Categorical fields where a missing value means "not recorded"
SENTINEL_FIELDS = [
    "perp_age_group",
    "perp_sex",
    "perp_race",
    "loc_of_occur_desc",
    "loc_classfctn_desc",
    "location_desc",
]

DATE_FORMAT = "%m/%d/%Y"
TIME_FORMAT = "%H:%M:%S"


class ShootingProcessor:
    # Source names that do not simply lowercase into the target name
    COLUMN_MAP = {
        "BORO": "borough",
    }

    def rename_columns(self, df):
        return df.rename(columns=lambda c: self.COLUMN_MAP.get(c, c.strip().lower()))

    def _fill_unknowns(self, df):
        """Replaces absent categorical values with the UNKNOWN sentinel.

        Coordinates and jurisdiction codes are left missing: a sentinel there
        would look like a real value to any numeric use.
        """
        for col in SENTINEL_FIELDS:
            if col not in df.columns:
                continue
            values = df[col]
            blank = values.isna() | values.astype(str).str.strip().eq("")
            if blank.any():
                df[col] = values.mask(blank, UNKNOWN)
        return df

    def _parse(self, df, column, fmt):
        raw = df[column].astype("string").str.strip()
        parsed = pd.to_datetime(raw, format=fmt, errors="coerce")
        bad = parsed.isna()
        if bad.any():
            pos = bad.to_numpy().argmax()
            raise ParseError(column, df[column].iloc[pos], df.index[pos], fmt)
        return parsed

    def _parse_timestamps(self, df):
        if not is_datetime64_any_dtype(df["occur_date"]):
            df["occur_date"] = self._parse(df, "occur_date", DATE_FORMAT)

        if not is_timedelta64_dtype(df["occur_time"]):
            # Time of day kept as an offset from midnight
            parsed = self._parse(df, "occur_time", TIME_FORMAT)
            df["occur_time"] = parsed - parsed.dt.normalize()

        df["year"] = df["occur_date"].dt.year.astype(int)
        df["month"] = df["occur_date"].dt.month.astype(int)
        df["hour"] = (df["occur_time"].dt.seconds // 3600).astype(int)
        return df

    def clean(self, df):
        """Returns a cleaned copy of the raw incident table."""
        df = self.rename_columns(df.copy())
        df = self._fill_unknowns(df)
        df = self._parse_timestamps(df)
        logger.info(f"Cleaned {len(df):,} incident records.")
        return df

    def check_data_quality(self, df):
        """Audits missing values across the fields the report relies on."""
        total = len(df)

        def pct(mask):
            return mask.sum() * 100.0 / total if total else 0.0

        summary = {"total_records": total}
        for col in SENTINEL_FIELDS:
            if col in df.columns:
                summary[f"pct_unknown_{col}"] = pct(df[col].isna() | df[col].eq(UNKNOWN))
        if "latitude" in df.columns:
            summary["pct_missing_geo"] = pct(df["latitude"].isna())
        if "jurisdiction_code" in df.columns:
            summary["pct_missing_jurisdiction"] = pct(df["jurisdiction_code"].isna())
        return pd.DataFrame([summary])


def clean_incidents(df):
    return ShootingProcessor().clean(df)
