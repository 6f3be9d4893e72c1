"""
Turning allocated slots into proposed calendar events.
"""

import random
import re
import zlib
from datetime import datetime
from typing import Dict, List, Optional

from ...schemas import ProposedEvent
from ..core.constants import SOURCE_COLORS, CALENDAR_COLOR_COUNT
from ..core.time_slot import AllocatedSlot

_SOURCE_PATTERN = re.compile(r"^Source: (?P<source>.+)$", re.MULTILINE)
_TASK_ID_PATTERN = re.compile(r"^Task ID: (?P<task_id>.+)$", re.MULTILINE)


def derive_color_id(schedule_source: str) -> str:
    """Calendar colour id for a source; unknown sources hash onto 1..11."""
    if schedule_source in SOURCE_COLORS:
        return SOURCE_COLORS[schedule_source]
    return str(zlib.crc32(schedule_source.encode("utf-8")) % CALENDAR_COLOR_COUNT + 1)


def build_summary(slot: AllocatedSlot) -> str:
    title = slot.occupant.title
    if slot.is_chunk:
        return f"{title} ({slot.chunk_index}/{slot.chunk_count})"
    return title


def build_description(slot: AllocatedSlot, schedule_source: str) -> str:
    task = slot.occupant
    lines = [
        f"Task: {task.title}",
        f"Source: {schedule_source}",
        f"Task ID: {task.id}",
    ]
    if slot.is_chunk:
        lines.append(f"Part: {slot.chunk_index}/{slot.chunk_count}")
    return "\n".join(lines)


def parse_source_marker(description: Optional[str]) -> Optional[Dict[str, str]]:
    """
    Recover the source tag and task id written by ``build_description``.

    Returns None when the description carries no source marker, e.g. for
    events that were not produced by the scheduler.
    """
    if not description:
        return None
    source_match = _SOURCE_PATTERN.search(description)
    if not source_match:
        return None
    marker = {"source": source_match.group("source").strip()}
    task_match = _TASK_ID_PATTERN.search(description)
    if task_match:
        marker["task_id"] = task_match.group("task_id").strip()
    return marker


def _normalize(value: datetime, tz) -> datetime:
    value = value.astimezone(tz)
    if hasattr(tz, "normalize"):
        return tz.normalize(value)
    return value


def materialize_events(slots: List[AllocatedSlot], schedule_source: str, tz,
                       rng: Optional[random.Random] = None) -> List[ProposedEvent]:
    """
    Map allocated slots onto proposed events. No side effects; storing or
    uploading the events is the caller's job.
    """
    rng = rng or random.Random()
    color_id = derive_color_id(schedule_source)
    events = []
    for slot in sorted(slots):
        task = slot.occupant
        token = f"{rng.getrandbits(32):08x}"
        events.append(ProposedEvent(
            id=f"scheduled-{task.id}-{slot.chunk_index}-{token}",
            summary=build_summary(slot),
            description=build_description(slot, schedule_source),
            start=_normalize(slot.start, tz),
            end=_normalize(slot.end, tz),
            time_zone=tz.zone if hasattr(tz, "zone") else str(tz),
            color_id=color_id,
            is_temp=True,
            task_id=task.id,
            chunk_index=slot.chunk_index,
            chunk_count=slot.chunk_count,
        ))
    return events


def to_calendar_payload(event: ProposedEvent) -> dict:
    """Google Calendar shaped dict for handing the event to a calendar client."""
    return {
        "id": event.id,
        "summary": event.summary,
        "description": event.description,
        "start": {"dateTime": event.start.isoformat(), "timeZone": event.time_zone},
        "end": {"dateTime": event.end.isoformat(), "timeZone": event.time_zone},
        "colorId": event.color_id,
        "isTemp": event.is_temp,
    }
