# -*- coding: utf-8 -*-
"""Entries — Pydantic models."""

from __future__ import annotations

from typing import Dict, List, Union

from pydantic import BaseModel, Field

Calories = Union[int, float]


class Entry(BaseModel):
    id: str = Field(..., min_length=1, description="Opaque unique id (UUID4)")
    name: str = Field(..., min_length=1, description="Food name, trimmed")
    calories: Calories = Field(..., description="Non-negative calorie count")
    timestamp: str = Field(..., description="Creation instant, ISO8601 UTC")


class EntrySnapshot(BaseModel):
    """Whole persisted state: entries keyed by YYYY-MM-DD (UTC)."""

    entries: Dict[str, List[Entry]] = Field(default_factory=dict)


class DailyTotal(BaseModel):
    total: Calories = 0


class ErrorResponse(BaseModel):
    error: str
