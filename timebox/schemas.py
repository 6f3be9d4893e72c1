from pydantic import BaseModel, Field, field_validator
import re
from datetime import datetime, date
from typing import Optional, List, Dict, Union, Any
from uuid import uuid4
import pytz

from .models import Priority, Energy, OutcomeStatus


_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _check_time_zone(value: str) -> str:
    try:
        pytz.timezone(value)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown time zone: {value}")
    return value


# ----------------- Task Schemas ---------------------

class Task(BaseModel):
    id: str
    title: str
    duration_minutes: Optional[int] = Field(default=None, gt=0)  # in minutes, None -> rules default
    priority: Priority = Priority.MEDIUM
    energy: Optional[Energy] = None  # advisory only, not used for placement
    due_date: Optional[Union[datetime, date]] = None  # a bare date means end of that day
    source: str = "local"

    class Config:
        frozen = True

    @field_validator("due_date", mode="before")
    @classmethod
    def date_only_due(cls, v: Any) -> Any:
        # "YYYY-MM-DD" would otherwise parse as midnight at the start of the day
        if isinstance(v, str) and _DATE_ONLY.match(v.strip()):
            return date.fromisoformat(v.strip())
        return v


# ----------------- Scheduling Rules Schemas ---------------------

class TimeBlock(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex[:8])
    day: str  # weekday name, "weekday", "weekend" or "all"
    start_time: str  # HH:MM wall clock
    end_time: str
    enabled: bool = True

    class Config:
        from_attributes = True


class SchedulingRules(BaseModel):
    max_task_duration: int = Field(..., gt=0)
    max_long_task_duration: int = Field(..., gt=0)
    long_task_threshold: int = Field(..., gt=0)
    priority_weight: float = Field(..., ge=0.0, le=1.0)
    time_weight: float = Field(..., ge=0.0, le=1.0)
    randomness_factor: float = Field(..., ge=0.0, le=1.0)
    working_days: Dict[str, bool]
    time_blocks: List[TimeBlock]

    class Config:
        from_attributes = True
        validate_assignment = True

    @field_validator("working_days")
    @classmethod
    def lowercase_weekdays(cls, v: Dict[str, bool]) -> Dict[str, bool]:
        return {day.strip().lower(): enabled for day, enabled in v.items()}

    def is_working_day(self, day_name: str) -> bool:
        return self.working_days.get(day_name, False)

    def enabled_blocks(self) -> List[TimeBlock]:
        return [block for block in self.time_blocks if block.enabled]


# ----------------- Calendar Schemas ---------------------

class ExistingEvent(BaseModel):
    start: datetime
    end: datetime
    time_zone: str = "UTC"
    id: Optional[str] = None
    summary: Optional[str] = None

    class Config:
        frozen = True

    @field_validator("time_zone")
    @classmethod
    def known_time_zone(cls, v: str) -> str:
        return _check_time_zone(v)


class ProposedEvent(BaseModel):
    id: str
    summary: str
    description: str
    start: datetime
    end: datetime
    time_zone: str
    color_id: str
    is_temp: bool = True  # persisting/uploading is up to the caller
    task_id: str
    chunk_index: int = 1
    chunk_count: int = 1

    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60


# ----------------- Result Schemas ---------------------

class TaskOutcome(BaseModel):
    task_id: str
    status: OutcomeStatus
    placed_chunks: int
    total_chunks: int


class TimeBlockWarning(BaseModel):
    block_id: str
    reason: str


class ScheduleResult(BaseModel):
    events: List[ProposedEvent] = []
    unscheduled_task_ids: List[str] = []
    outcomes: List[TaskOutcome] = []
    warnings: List[TimeBlockWarning] = []

    @property
    def scheduled_count(self) -> int:
        return len(self.events)

    @property
    def unscheduled_count(self) -> int:
        return len(self.unscheduled_task_ids)


# ----------------- API Schemas ---------------------

class SchedulePreviewRequest(BaseModel):
    schedule_source: str = Field(..., min_length=1)
    start_date: datetime
    end_date: Optional[datetime] = None
    days_ahead: int = Field(default=7, gt=0)
    time_zone: Optional[str] = None  # None -> DEFAULT_TIME_ZONE
    user_id: Optional[str] = None
    tasks: List[Task] = []
    existing_events: List[ExistingEvent] = []
    # Raw on purpose: range checks happen in the engine so they map to InvalidRules
    rules: Optional[Dict[str, Any]] = None
    seed: Optional[int] = None

    @field_validator("time_zone")
    @classmethod
    def known_time_zone(cls, v: Optional[str]) -> Optional[str]:
        return _check_time_zone(v) if v is not None else v


class SchedulePreviewResponse(BaseModel):
    success: bool
    events: List[ProposedEvent]
    count: int
    unscheduled_task_ids: List[str]
    unscheduled_count: int
    outcomes: List[TaskOutcome]
    warnings: List[TimeBlockWarning]
    # Same events shaped for a Google Calendar client
    calendar_events: List[Dict[str, Any]] = []
