"""
Tests for the borough/year aggregations and the lowest-year ranking.
"""
import duckdb
import pandas as pd
import pytest

from src.features.build_features import (
    IncidentAggregator,
    aggregate_by_region,
    aggregate_by_year,
    precincts_by_year,
    lowest_incident_years,
)


@pytest.fixture
def agg(incidents):
    con = duckdb.connect(":memory:")
    yield IncidentAggregator(con, incidents)
    con.close()


def test_region_aggregate_has_one_row_per_borough(agg, incidents):
    df = agg.aggregate_by_region()

    assert len(df) == incidents["borough"].nunique()
    assert df["incident_count"].sum() == len(incidents)
    assert df["borough"].tolist() == sorted(df["borough"].tolist())


def test_region_aggregate_counts_distinct_precincts(agg):
    df = agg.aggregate_by_region().set_index("borough")

    # Brooklyn has three incidents across precincts 73, 75 and 73 again
    assert df.loc["BROOKLYN", "incident_count"] == 3
    assert df.loc["BROOKLYN", "precinct_count"] == 2
    assert df.loc["BRONX", "precinct_count"] == 2
    assert df.loc["QUEENS", "incident_count"] == 1


def test_region_year_aggregate(agg, incidents):
    df = agg.aggregate_by_region_year()

    assert df["incident_count"].sum() == len(incidents)
    brooklyn_2020 = df[(df["borough"] == "BROOKLYN") & (df["year"] == 2020)].iloc[0]
    assert brooklyn_2020["incident_count"] == 2
    assert brooklyn_2020["precinct_count"] == 2


def test_year_aggregates(agg):
    assert agg.aggregate_by_year().to_dict() == {2019: 3, 2020: 2, 2021: 3}
    assert agg.precincts_by_year().to_dict() == {2019: 3, 2020: 2, 2021: 3}


def test_hour_and_month_aggregates(agg, incidents):
    hourly = agg.aggregate_by_hour()
    monthly = agg.aggregate_by_month()

    assert hourly.sum() == len(incidents)
    assert hourly.loc[23] == 1
    assert monthly.sum() == len(incidents)
    assert list(monthly.index) == sorted(monthly.index)


def test_murders_by_region(agg):
    df = agg.murders_by_region().set_index("borough")

    assert df.loc["BROOKLYN", "murder_count"] == 2
    assert df.loc["BRONX", "murder_pct"] == pytest.approx(50.0)
    assert df.loc["QUEENS", "murder_count"] == 0


def test_module_level_helpers_match_aggregator(agg, incidents):
    pd.testing.assert_frame_equal(aggregate_by_region(incidents), agg.aggregate_by_region())
    pd.testing.assert_series_equal(aggregate_by_year(incidents), agg.aggregate_by_year())
    pd.testing.assert_series_equal(precincts_by_year(incidents), agg.precincts_by_year())


def test_lowest_incident_years_breaks_ties_by_year():
    counts = {2006: 2055, 2007: 1887, 2017: 970, 2018: 958, 2019: 967, 2020: 1948, 2021: 967}

    lowest = lowest_incident_years(counts, 3)

    assert lowest == [(2018, 958), (2019, 967), (2021, 967)]


def test_lowest_incident_years_is_prefix_of_full_ranking(agg):
    year_counts = agg.aggregate_by_year()
    full = lowest_incident_years(year_counts, len(year_counts))
    lowest = lowest_incident_years(year_counts, 3)

    assert len(lowest) == 3
    assert [c for _, c in lowest] == sorted(c for _, c in lowest)
    assert lowest == full[:3]
    assert lowest[0] == (2020, 2)


def test_lowest_incident_years_edge_cases():
    assert lowest_incident_years({2020: 5}, 3) == [(2020, 5)]
    assert lowest_incident_years({}, 3) == []
    with pytest.raises(ValueError):
        lowest_incident_years({2020: 5}, -1)
