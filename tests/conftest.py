"""
Shared fixtures. The database URL is pinned to in-memory SQLite before any
timebox module reads its configuration.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import random
from datetime import datetime, timedelta

import pytest
import pytz

from timebox.schemas import Task, TimeBlock, ExistingEvent
from timebox.scheduling import default_rules

UTC = pytz.utc

# 2025-01-06 is a Monday
MONDAY = datetime(2025, 1, 6, tzinfo=UTC)


def at(day_offset: int, hour: int, minute: int = 0) -> datetime:
    """A UTC timestamp ``day_offset`` days after MONDAY."""
    return MONDAY + timedelta(days=day_offset, hours=hour, minutes=minute)


def make_task(task_id: str, duration=30, priority="medium", **kwargs) -> Task:
    return Task(id=task_id, title=kwargs.pop("title", f"Task {task_id}"),
                duration_minutes=duration, priority=priority, **kwargs)


def busy(start: datetime, end: datetime, **kwargs) -> ExistingEvent:
    return ExistingEvent(start=start, end=end, time_zone="UTC", **kwargs)


@pytest.fixture
def rules():
    """Default rules with the jitter switched off."""
    return default_rules().model_copy(update={"randomness_factor": 0.0})


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def weekday_block():
    return TimeBlock(id="work", day="weekday", start_time="09:00", end_time="17:00")
