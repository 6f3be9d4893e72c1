"""
Shared constants for the scheduling engine.
"""

WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

WEEKDAYS = set(WEEKDAY_NAMES[:5])
WEEKEND = set(WEEKDAY_NAMES[5:])

# Day selectors accepted on a time block besides the weekday names
DAY_GROUPS = {
    "weekday": WEEKDAYS,
    "weekend": WEEKEND,
    "all": set(WEEKDAY_NAMES),
}

PRIORITY_VALUES = {
    "low": 0.0,
    "medium": 0.5,
    "high": 1.0,
}

# Urgency handed to tasks without a due date
NEUTRAL_URGENCY = 0.5

# Google Calendar colour ids for the two built-in schedule sources
SOURCE_COLORS = {
    "ideal-week": "10",
    "this-week": "9",
}
CALENDAR_COLOR_COUNT = 11

# Pipeline stages of a single schedule() run
RULES_RESOLVED = "RULES_RESOLVED"
AVAILABILITY_COMPUTED = "AVAILABILITY_COMPUTED"
TASKS_RANKED = "TASKS_RANKED"
SLOTS_ALLOCATED = "SLOTS_ALLOCATED"
EVENTS_MATERIALIZED = "EVENTS_MATERIALIZED"
