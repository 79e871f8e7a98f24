"""
NYC Shooting Incident Analysis
------------------------------
This package implements a single-pass exploratory report over the NYPD
Shooting Incident (Historic) dataset.

Module Hierarchy:
- `ingest`: Downloads the CSV and cleans it into analysis-ready records.
- `features`: Aggregates incidents by borough, year, hour and month.
- `models`: Fits the borough-level precinct/incident linear regression.
- `exploration`: Charts and printed summaries for the report.
- `utils`: In-memory DuckDB connection management.

Pipeline:
1. Load → 2. Clean → 3. Aggregate → 4. Fit → 5. Render
"""
