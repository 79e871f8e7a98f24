"""
Shared fixtures: a small raw extract shaped like the NYPD Shooting Incident CSV.
"""
import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def raw_incidents():
    return pd.DataFrame({
        "INCIDENT_KEY": [101, 102, 103, 104, 105, 106, 107, 108],
        "OCCUR_DATE": ["01/05/2019", "07/14/2019", "03/02/2020", "12/31/2020",
                       "06/01/2021", "08/19/2021", "02/11/2021", "09/09/2019"],
        "OCCUR_TIME": ["23:15:00", "02:40:00", "14:05:30", "00:00:00",
                       "21:59:59", "03:10:00", "18:30:00", "11:00:00"],
        "BORO": ["BRONX", "BRONX", "BROOKLYN", "BROOKLYN",
                 "MANHATTAN", "QUEENS", "STATEN ISLAND", "BROOKLYN"],
        "LOC_OF_OCCUR_DESC": [np.nan, "INSIDE", "OUTSIDE", np.nan, "OUTSIDE", "", "INSIDE", np.nan],
        "PRECINCT": [40, 44, 73, 75, 32, 113, 120, 73],
        "JURISDICTION_CODE": [0.0, np.nan, 0.0, 2.0, 0.0, 0.0, np.nan, 0.0],
        "LOC_CLASSFCTN_DESC": [np.nan, "STREET", "HOUSING", np.nan, "STREET", "STREET", np.nan, "STREET"],
        "LOCATION_DESC": ["MULTI DWELL - APT BUILD", np.nan, np.nan, "GROCERY/BODEGA",
                          np.nan, "BAR/NIGHT CLUB", np.nan, np.nan],
        "STATISTICAL_MURDER_FLAG": [True, False, False, True, False, False, False, True],
        "PERP_AGE_GROUP": ["18-24", np.nan, "25-44", np.nan, "  ", "<18", np.nan, "18-24"],
        "PERP_SEX": ["M", np.nan, "M", np.nan, "F", "M", np.nan, "M"],
        "PERP_RACE": ["BLACK", np.nan, "WHITE HISPANIC", np.nan, "BLACK", np.nan, np.nan, "BLACK"],
        "VIC_AGE_GROUP": ["25-44", "18-24", np.nan, "45-64", "25-44", "18-24", "25-44", "<18"],
        "VIC_SEX": ["M", "M", "F", "M", "M", np.nan, "M", "M"],
        "VIC_RACE": ["BLACK", "BLACK", "BLACK", "WHITE", np.nan, "ASIAN / PACIFIC ISLANDER", "WHITE", "BLACK"],
        "X_COORD_CD": [1011000.0, 1007000.0, 1009000.0, np.nan, 999000.0, 1045000.0, 955000.0, 1009500.0],
        "Y_COORD_CD": [243000.0, 246000.0, 181000.0, np.nan, 238000.0, 189000.0, 143000.0, 181200.0],
        "Latitude": [40.84, 40.85, 40.67, np.nan, 40.82, 40.69, 40.58, 40.67],
        "Longitude": [-73.91, -73.92, -73.91, np.nan, -73.95, -73.79, -74.11, -73.90],
    })


@pytest.fixture
def incidents(raw_incidents):
    from src.ingest.processor import ShootingProcessor
    return ShootingProcessor().clean(raw_incidents)
