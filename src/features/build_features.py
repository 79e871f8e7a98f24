"""
MISSION: The Feature Layer.
Aggregates cleaned incident records into borough- and year-level counts.
All grouping runs as SQL over the `incidents` view in DuckDB.
"""
import logging
import pandas as pd
from src.utils.db import DatabaseManager

logger = logging.getLogger(__name__)


class IncidentAggregator:
    def __init__(self, con, df=None):
        """Wraps a DuckDB connection; registers `df` as the incidents view when given."""
        self.con = con
        if df is not None:
            self.con.register("incidents", df)

    def q_to_df(self, sql):
        """Standardizes DuckDB output to lowercase for Seaborn/Pandas compatibility."""
        df = self.con.execute(sql).df()
        df.columns = [c.lower() for c in df.columns]
        return df

    def _series(self, sql, key, value):
        df = self.q_to_df(sql)
        s = pd.Series(df[value].astype(int).values, index=df[key].astype(int).values, name=value)
        s.index.name = key
        return s

    def aggregate_by_region(self):
        """One row per borough: incident count and distinct precinct count."""
        df = self.q_to_df("""
            SELECT
                borough,
                COUNT(*) as incident_count,
                COUNT(DISTINCT precinct) as precinct_count
            FROM incidents
            GROUP BY 1
            ORDER BY 1
        """)
        logger.debug(f"Region aggregate built with {len(df)} boroughs.")
        return df

    def aggregate_by_region_year(self):
        return self.q_to_df("""
            SELECT
                borough,
                year,
                COUNT(*) as incident_count,
                COUNT(DISTINCT precinct) as precinct_count
            FROM incidents
            GROUP BY 1, 2
            ORDER BY 1, 2
        """)

    def aggregate_by_year(self):
        return self._series(
            "SELECT year, COUNT(*) as incident_count FROM incidents GROUP BY 1 ORDER BY 1",
            "year", "incident_count",
        )

    def precincts_by_year(self):
        return self._series(
            "SELECT year, COUNT(DISTINCT precinct) as precinct_count FROM incidents GROUP BY 1 ORDER BY 1",
            "year", "precinct_count",
        )

    def aggregate_by_hour(self):
        return self._series(
            "SELECT hour, COUNT(*) as incident_count FROM incidents GROUP BY 1 ORDER BY 1",
            "hour", "incident_count",
        )

    def aggregate_by_month(self):
        return self._series(
            "SELECT month, COUNT(*) as incident_count FROM incidents GROUP BY 1 ORDER BY 1",
            "month", "incident_count",
        )

    def murders_by_region(self):
        """Share of incidents per borough flagged as a statistical murder."""
        return self.q_to_df("""
            SELECT
                borough,
                COUNT(*) as incident_count,
                SUM(CASE WHEN upper(CAST(statistical_murder_flag AS VARCHAR)) = 'TRUE' THEN 1 ELSE 0 END) as murder_count,
                SUM(CASE WHEN upper(CAST(statistical_murder_flag AS VARCHAR)) = 'TRUE' THEN 1 ELSE 0 END) * 100.0 / COUNT(*) as murder_pct
            FROM incidents
            GROUP BY 1
            ORDER BY 1
        """)


def lowest_incident_years(year_counts, k=3):
    """
    Returns the `k` years with the fewest incidents as (year, count) pairs,
    ascending by count with ties broken by the earlier year.
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    items = sorted(dict(year_counts).items(), key=lambda kv: (kv[1], kv[0]))
    return [(int(year), int(count)) for year, count in items[:k]]


def _with_connection(df, method):
    db_mgr = DatabaseManager()
    try:
        return method(IncidentAggregator(db_mgr.register_incidents(df)))
    finally:
        db_mgr.close()


def aggregate_by_region(df):
    return _with_connection(df, IncidentAggregator.aggregate_by_region)


def aggregate_by_year(df):
    return _with_connection(df, IncidentAggregator.aggregate_by_year)


def precincts_by_year(df):
    return _with_connection(df, IncidentAggregator.precincts_by_year)
