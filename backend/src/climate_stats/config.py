import os

# Percentile ladder reported with every summary (name -> fraction)
PERCENTILE_LADDER = {
    "p10": 0.10,
    "p25": 0.25,
    "p50": 0.50,
    "p75": 0.75,
    "p90": 0.90,
    "p95": 0.95,
}

# Bootstrap defaults
DEFAULT_BOOTSTRAP_ITERATIONS = 1000
DEFAULT_CONFIDENCE_LEVEL = 0.95
# Upper bound on resample index cells held in memory at once
BOOTSTRAP_CHUNK_CELLS = 1_000_000

# Trend analysis
MIN_TREND_POINTS = 2
TREND_METHOD = "Mann-Kendall + Sen's slope"

# Day-of-year sampling: half-width of the window around the target day
DEFAULT_WINDOW_DAYS = 3

# Units attached to results (variable -> unit)
VARIABLE_UNITS = {
    "precipitation": "mm",
    "temperature": "°C",
    "wind_speed": "m/s",
    "humidity": "%",
    "cloud_cover": "%",
}
UNKNOWN_UNITS = "unknown"

# API
CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]
# Longest yearly series accepted by the HTTP API
MAX_SERIES_LENGTH = 1000
PORT = int(os.environ.get("PORT", "8000"))

LOG_LEVEL = os.environ.get("CLIMATE_STATS_LOG_LEVEL", "WARNING")


def units_for_variable(variable: str) -> str:
    return VARIABLE_UNITS.get(variable, UNKNOWN_UNITS)
