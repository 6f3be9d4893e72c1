"""
Scheduling rule defaults and boundary validation.
"""

import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from ...schemas import SchedulingRules, TimeBlock
from ..exceptions import InvalidRules
from .constants import WEEKDAY_NAMES

logger = logging.getLogger(__name__)


def default_rules() -> SchedulingRules:
    """The rules used when a user has not configured any."""
    return SchedulingRules(
        max_task_duration=60,
        max_long_task_duration=120,
        long_task_threshold=120,
        priority_weight=0.7,
        time_weight=0.3,
        randomness_factor=0.2,
        working_days={
            "monday": True,
            "tuesday": True,
            "wednesday": True,
            "thursday": True,
            "friday": True,
            "saturday": False,
            "sunday": False,
        },
        time_blocks=[
            TimeBlock(id="1", day="weekday", start_time="09:00", end_time="17:00", enabled=True),
        ],
    )


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"])
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def resolve_rules(rules: Optional[Union[SchedulingRules, Dict[str, Any]]]) -> SchedulingRules:
    """
    Turn caller input into one validated SchedulingRules.

    None means defaults. A dict is laid over the defaults, so callers may send
    only the fields they changed. ``working_days`` is merged day by day, so
    ``{"saturday": True}`` adds Saturday to the default week; ``time_blocks``
    replaces the default list. Anything out of range raises InvalidRules;
    nothing is clamped.
    """
    if rules is None:
        return default_rules()

    if isinstance(rules, SchedulingRules):
        raw = rules.model_dump()
    elif isinstance(rules, dict):
        raw = default_rules().model_dump()
        overrides = dict(rules)
        working_days = overrides.pop("working_days", None)
        raw.update(overrides)
        if isinstance(working_days, dict):
            raw["working_days"].update(
                (str(day).strip().lower(), enabled) for day, enabled in working_days.items()
            )
        elif working_days is not None:
            # Let validation report the bad type
            raw["working_days"] = working_days
    else:
        raise InvalidRules(f"Unsupported rules type: {type(rules).__name__}")

    try:
        resolved = SchedulingRules.model_validate(raw)
    except ValidationError as e:
        message = _describe_validation_error(e)
        logger.warning(f"Rejected scheduling rules: {message}")
        raise InvalidRules(message) from e

    unknown_days = [day for day in resolved.working_days if day not in WEEKDAY_NAMES]
    if unknown_days:
        raise InvalidRules(f"working_days: unknown weekday(s) {', '.join(sorted(unknown_days))}")

    return resolved
