"""Symptom Diary — headache diary analytics.

Packages:
    weather/  — weather–headache association engine and day-feature adapter
    models/   — Pydantic request/response schemas
    routers/  — FastAPI routes
"""

__version__ = "0.1.0"
