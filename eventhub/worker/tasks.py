import uuid

from celery.utils.log import get_task_logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from eventhub.db import SessionLocal
from eventhub.models import Event, Profile, VolunteerApplication
from eventhub.notifications.dispatchers import DECISION_TASK_NAME
from eventhub.worker.celery_app import celery_app

logger = get_task_logger(__name__)


def build_decision_message(db: Session, application_id: str, decision: str) -> dict | None:
    row = db.execute(
        select(VolunteerApplication, Event, Profile)
        .join(Event, Event.id == VolunteerApplication.event_id)
        .join(Profile, Profile.id == VolunteerApplication.volunteer_id)
        .where(VolunteerApplication.id == uuid.UUID(application_id))
    ).first()
    if row is None:
        return None

    application, event, volunteer = row
    return {
        "application_id": str(application.id),
        "to": volunteer.email,
        "subject": f"Your application for {event.title} was {decision}",
        "decision": decision,
    }


@celery_app.task(name=DECISION_TASK_NAME)
def notify_application_decision(application_id: str, decision: str) -> dict:
    db: Session = SessionLocal()
    try:
        message = build_decision_message(db, application_id, decision)
        if message is None:
            logger.warning("notify_application_decision skipped, application_id=%s not found", application_id)
            return {"application_id": application_id, "status": "skipped"}

        # Delivery is not wired up; the message is only recorded.
        logger.info(
            "notify_application_decision to=%s subject=%r",
            message["to"],
            message["subject"],
        )
        return {"application_id": application_id, "status": "logged"}
    finally:
        db.close()
