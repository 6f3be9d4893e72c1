"""
Stored scheduling rules, one set per user.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models import SchedulingRulesRecord
from ..schemas import SchedulingRules, TimeBlock
from ..scheduling.core.rules import default_rules, resolve_rules

logger = logging.getLogger(__name__)


class RulesStore:
    """Reads and writes SchedulingRules through the session it is given."""

    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: str) -> Optional[SchedulingRulesRecord]:
        return self.db.query(SchedulingRulesRecord).filter(SchedulingRulesRecord.user_id == user_id).first()

    def get(self, user_id: str) -> SchedulingRules:
        """Rules for a user, or the defaults when none are stored."""
        record = self._find(user_id)
        if not record:
            logger.info(f"No scheduling rules for user {user_id}, using defaults")
            return default_rules()
        return SchedulingRules(
            max_task_duration=record.max_task_duration,
            max_long_task_duration=record.max_long_task_duration,
            long_task_threshold=record.long_task_threshold,
            priority_weight=record.priority_weight,
            time_weight=record.time_weight,
            randomness_factor=record.randomness_factor,
            working_days=record.working_days or {},
            time_blocks=[TimeBlock(**block) for block in (record.time_blocks or [])],
        )

    def has_rules(self, user_id: str) -> bool:
        return self._find(user_id) is not None

    def save(self, user_id: str, rules: SchedulingRules) -> SchedulingRules:
        """Validate and store rules, replacing any previous set."""
        rules = resolve_rules(rules)
        record = self._find(user_id)
        if not record:
            record = SchedulingRulesRecord(user_id=user_id)
            self.db.add(record)

        record.max_task_duration = rules.max_task_duration
        record.max_long_task_duration = rules.max_long_task_duration
        record.long_task_threshold = rules.long_task_threshold
        record.priority_weight = rules.priority_weight
        record.time_weight = rules.time_weight
        record.randomness_factor = rules.randomness_factor
        record.working_days = dict(rules.working_days)
        record.time_blocks = [block.model_dump() for block in rules.time_blocks]

        self.db.commit()
        self.db.refresh(record)
        logger.info(f"Saved scheduling rules for user {user_id} ({len(rules.time_blocks)} time blocks)")
        return rules

    def delete(self, user_id: str) -> bool:
        record = self._find(user_id)
        if not record:
            return False
        self.db.delete(record)
        self.db.commit()
        return True
