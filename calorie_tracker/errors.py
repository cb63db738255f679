# -*- coding: utf-8 -*-
"""Error taxonomy shared by the store, validator and router.

Every error carries the HTTP status it maps to; the application renders
them as ``{"error": message}``.
"""

from __future__ import annotations


class CalorieTrackerError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CalorieTrackerError):
    status_code = 400
    default_message = "Invalid input"


class EmptyNameError(ValidationError):
    default_message = "Name is required"


class MissingCaloriesError(ValidationError):
    default_message = "Calories are required"


class NotANumberError(ValidationError):
    default_message = "Calories must be a number"


class NegativeCaloriesError(ValidationError):
    default_message = "Calories must be zero or greater"


class InvalidDateError(ValidationError):
    default_message = "Invalid date, expected YYYY-MM-DD"


class MalformedBodyError(CalorieTrackerError):
    status_code = 400
    default_message = "Invalid JSON"


class NotFoundError(CalorieTrackerError):
    status_code = 404
    default_message = "Not found"


class EntryNotFoundError(NotFoundError):
    default_message = "Entry not found"


class InternalError(CalorieTrackerError):
    status_code = 500


class StoreCorruptedError(InternalError):
    default_message = "Data file is corrupted"


class StoreWriteError(InternalError):
    default_message = "Failed to save data"
