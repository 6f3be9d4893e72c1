"""Timebox: schedules pending tasks into free calendar time."""
