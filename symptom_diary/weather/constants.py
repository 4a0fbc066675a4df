"""Fixed thresholds and display text for the weather association engine.

These values are deliberately constants, not configuration.  Changing any of
them changes the meaning of every confidence tier and advisory note shown to
users, so they are versioned with the code.

Pressure values are in hPa (equivalent to mb).
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Sample-size gates
# ---------------------------------------------------------------------------

MIN_DAYS_FOR_STATEMENT = 20       # below this a dimension is "insufficient"
MEDIUM_CONFIDENCE_DAYS = 30
HIGH_CONFIDENCE_DAYS = 60
MIN_DAYS_PER_BUCKET = 5           # smaller buckets never enter a comparison
MIN_DAYS_CONFOUNDING_HINT = 20    # at least one bucket this large for the confound note
MIN_DAYS_ABSOLUTE_PRESSURE = 60   # absolute pressure is not attempted below this

# Spread in acute-medication rate (0.0–1.0) that triggers the confound note
CONFOUNDING_RATE_SPREAD = 0.2

# Paired/documented ratio below which the sparse-coverage note is added
SPARSE_COVERAGE_RATIO = 0.5

# ---------------------------------------------------------------------------
# Bucket thresholds
# ---------------------------------------------------------------------------

DELTA_STRONG_DROP = -8.0
DELTA_MODERATE_DROP = -3.0

PRESSURE_LOW = 1005.0
PRESSURE_HIGH = 1025.0

# ---------------------------------------------------------------------------
# Display text
# ---------------------------------------------------------------------------

PLACEHOLDER_DASH = "–"

WEATHER_DISCLAIMER = (
    "Indicative only, based on your own diary entries. "
    "Association is not causation. Not a diagnosis."
)
