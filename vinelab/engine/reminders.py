"""Retest reminders based on the age of the latest soil and petiole tests."""

from __future__ import annotations

import datetime as dt

from vinelab.schemas.lab_tests import ReminderStatus

DEFAULT_SOIL_INTERVAL_DAYS = 730
DEFAULT_PETIOLE_INTERVAL_DAYS = 90


def _is_due(age_days: int | None, interval_days: int, label: str) -> bool:
	if age_days is None:
		return True
	if age_days < 0:
		raise ValueError(f"{label} test age cannot be negative: {age_days}")
	return age_days > interval_days


def check_test_reminders(
	soil_age_days: int | None,
	petiole_age_days: int | None,
	*,
	soil_interval: int = DEFAULT_SOIL_INTERVAL_DAYS,
	petiole_interval: int = DEFAULT_PETIOLE_INTERVAL_DAYS,
) -> ReminderStatus:
	"""A test is due when none exists or the latest is strictly older than its interval."""
	return ReminderStatus(
		soil_test_needed=_is_due(soil_age_days, soil_interval, "soil"),
		petiole_test_needed=_is_due(petiole_age_days, petiole_interval, "petiole"),
		soil_test_age=soil_age_days,
		petiole_test_age=petiole_age_days,
	)


def age_in_days(test_date: dt.date | None, today: dt.date) -> int | None:
	"""Whole days between ``test_date`` and ``today``; ``None`` when there was no test."""
	if test_date is None:
		return None
	return (today - test_date).days
