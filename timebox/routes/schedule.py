"""
Schedule preview API endpoint
"""

import logging
import random
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..schemas import SchedulePreviewRequest, SchedulePreviewResponse
from ..scheduling import TaskScheduler, SchedulingError, ScheduleConflictError
from ..scheduling.utils.event_utils import to_calendar_payload
from ..services.rules_store import RulesStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/preview", response_model=SchedulePreviewResponse)
def preview_schedule(
    request: SchedulePreviewRequest,
    db: Session = Depends(get_db),
):
    """
    Propose events for the given tasks without storing anything.
    Rules come from the request, else the user's stored rules, else defaults.
    """
    end_date = request.end_date or request.start_date + timedelta(days=request.days_ahead)

    rules = request.rules
    if rules is None and request.user_id:
        store = RulesStore(db)
        if store.has_rules(request.user_id):
            rules = store.get(request.user_id)
        else:
            logger.info(f"No stored rules for user {request.user_id}, scheduling with defaults")

    seed = request.seed if request.seed is not None else config.SCHEDULER_SEED
    scheduler = TaskScheduler(
        rng=random.Random(seed),
        time_zone=request.time_zone or config.DEFAULT_TIME_ZONE,
        verify=config.VERIFY_ALLOCATIONS,
    )

    try:
        result = scheduler.run(
            tasks=request.tasks,
            rules=rules,
            range_start=request.start_date,
            range_end=end_date,
            existing_events=request.existing_events,
            schedule_source=request.schedule_source,
        )
    except ScheduleConflictError as e:
        logger.error(f"❌ Conflict check failed for source '{request.schedule_source}': {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except SchedulingError as e:
        logger.warning(f"Rejected schedule request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return SchedulePreviewResponse(
        success=True,
        events=result.events,
        count=result.scheduled_count,
        unscheduled_task_ids=result.unscheduled_task_ids,
        unscheduled_count=result.unscheduled_count,
        outcomes=result.outcomes,
        warnings=result.warnings,
        calendar_events=[to_calendar_payload(event) for event in result.events],
    )
