from sqlalchemy import String, Integer, Float, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
import enum

from .database import Base

# Enums

class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class Energy(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class OutcomeStatus(str, enum.Enum):
    SCHEDULED = "scheduled"   # Every chunk placed
    PARTIAL = "partial"       # Some chunks placed, the rest ran out of room
    UNSCHEDULED = "unscheduled"


class SchedulingRulesRecord(Base):
    """Stored scheduling rules, one row per user."""
    __tablename__ = "scheduling_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String, unique=True, index=True)

    max_task_duration: Mapped[int] = mapped_column(Integer)
    max_long_task_duration: Mapped[int] = mapped_column(Integer)
    long_task_threshold: Mapped[int] = mapped_column(Integer)
    priority_weight: Mapped[float] = mapped_column(Float)
    time_weight: Mapped[float] = mapped_column(Float)
    randomness_factor: Mapped[float] = mapped_column(Float)

    # weekday name -> bool
    working_days: Mapped[dict] = mapped_column(JSON, default=dict)
    # list of serialized time blocks, in order
    time_blocks: Mapped[list] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
