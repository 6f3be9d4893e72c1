from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas import SchedulingRules
from ..scheduling import InvalidRules, resolve_rules
from ..services.rules_store import RulesStore

router = APIRouter(tags=["scheduling-rules"])


@router.get("/", response_model=SchedulingRules)
def read_rules(user_id: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return RulesStore(db).get(user_id)


@router.put("/", response_model=SchedulingRules)
def update_rules(
    rules: Dict[str, Any],
    user_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    """
    Store rules for a user. Fields left out fall back to the defaults;
    working_days is merged day by day, time_blocks replaces the default list.
    """
    try:
        resolved = resolve_rules(rules)
    except InvalidRules as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RulesStore(db).save(user_id, resolved)


@router.delete("/")
def reset_rules(user_id: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    if not RulesStore(db).delete(user_id):
        raise HTTPException(status_code=404, detail="No scheduling rules stored for user")
    return {"message": "Scheduling rules reset to defaults"}
