"""Scheduling repository - blocked dates and emergency reschedule records"""

import logging

from sqlalchemy.orm import Session

from ...models import BlockedDateSet, EmergencyReschedule

logger = logging.getLogger(__name__)


class BlockedDateRepository:
    """Append-only store of blocked-date batches"""

    @staticmethod
    def add_blocked_dates(db: Session, dates: list[str], commit: bool = True) -> BlockedDateSet:
        blocked = BlockedDateSet(dates=list(dates))
        db.add(blocked)
        if commit:
            db.commit()
            db.refresh(blocked)
        else:
            db.flush()
        return blocked

    @staticmethod
    def get_blocked_dates(db: Session) -> list[str]:
        """Union of every batch, de-duplicated; empty when the store cannot be read"""
        try:
            all_dates: list[str] = []
            for blocked in db.query(BlockedDateSet).all():
                if isinstance(blocked.dates, list):
                    all_dates.extend(blocked.dates)
            return sorted(set(all_dates))
        except Exception as e:
            logger.error(f"❌ Error getting blocked dates: {str(e)}")
            return []


class EmergencyRescheduleRepository:
    """Append-only audit log of emergency reschedules"""

    @staticmethod
    def add_emergency_reschedule(
        db: Session,
        start_date: str,
        end_date: str,
        affected_appointments: list[int],
        message: str,
        commit: bool = True,
    ) -> EmergencyReschedule:
        if not start_date or not end_date:
            raise ValueError("Invalid date range")
        if not isinstance(affected_appointments, list):
            raise ValueError("Invalid affected appointments")
        if not message:
            raise ValueError("Message is required")

        record = EmergencyReschedule(
            start_date=start_date,
            end_date=end_date,
            affected_appointments=affected_appointments,
            message=message,
        )
        db.add(record)
        if commit:
            db.commit()
            db.refresh(record)
        else:
            db.flush()
        return record

    @staticmethod
    def list_emergency_reschedules(db: Session) -> list[EmergencyReschedule]:
        return db.query(EmergencyReschedule).order_by(EmergencyReschedule.id.desc()).all()
