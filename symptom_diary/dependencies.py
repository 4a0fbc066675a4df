"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from symptom_diary.config import Settings, get_settings

# Annotated shortcuts for route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
