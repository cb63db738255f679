# -*- coding: utf-8 -*-
"""Entries — input checks for entry creation and day parameters."""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Dict, Optional, Tuple

from ..errors import (
    EmptyNameError,
    InvalidDateError,
    MissingCaloriesError,
    NegativeCaloriesError,
    NotANumberError,
)
from .models import Calories

_DAY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def validate_name(value: Any) -> str:
    if not isinstance(value, str):
        raise EmptyNameError()
    name = value.strip()
    if not name:
        raise EmptyNameError()
    return name


def validate_calories(value: Any) -> Calories:
    if value is None:
        raise MissingCaloriesError()
    # bool is an int subclass; JSON true/false is not a calorie count.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise NotANumberError()
    if isinstance(value, float) and not math.isfinite(value):
        raise NotANumberError()
    if value < 0:
        raise NegativeCaloriesError()
    return value


def validate_new_entry(payload: Dict[str, Any]) -> Tuple[str, Calories]:
    """Return the trimmed name and calories of a creation payload.

    Name is checked first; the first failure is raised as a ValidationError subclass.
    """
    name = validate_name(payload.get("name"))
    calories = validate_calories(payload.get("calories"))
    return name, calories


def validate_day(value: Optional[str]) -> Optional[str]:
    """Normalize an optional YYYY-MM-DD query value; None or blank means "today"."""
    raw = (value or "").strip()
    if not raw:
        return None
    # fromisoformat also takes week dates (2020-W01-1) on newer interpreters.
    if not _DAY_PATTERN.fullmatch(raw):
        raise InvalidDateError()
    try:
        return date.fromisoformat(raw).isoformat()
    except ValueError as exc:
        raise InvalidDateError() from exc
