from typing import List, Optional, Dict, Any
from sqlmodel import Session, select
from src.api.activity.models.activity_log import ActivityLog


class ActivityLogService:
    """Service class for writing and reading the activity trail"""

    def __init__(self, db: Session):
        self.db = db

    def log_activity(
        self,
        action_category: str,
        action_type: str,
        description: str,
        partner_uuid: Optional[str] = None,
        user_id: Optional[str] = None,
        entity_id: Optional[str] = None,
        entity_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> ActivityLog:
        """
        Add an activity entry to the current transaction.

        The entry is flushed but not committed, so it is persisted or
        discarded together with the change it describes.
        """
        entry = ActivityLog(
            partner_uuid=partner_uuid,
            user_id=user_id,
            action_category=action_category,
            action_type=action_type,
            entity_id=entity_id,
            entity_type=entity_type,
            description=description,
            details=details or {}
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def get_entity_activity(self, entity_type: str, entity_id: str) -> List[ActivityLog]:
        """Get the activity of one entity, newest first"""
        return self.db.exec(
            select(ActivityLog)
            .where(
                ActivityLog.entity_type == entity_type,
                ActivityLog.entity_id == entity_id
            )
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        ).all()
