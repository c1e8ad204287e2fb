"""
Entity store reads — fetch the snapshot a scope needs in four queries.
"""
import logging

from sqlalchemy import or_

from nextaction.engine.base import ActionScope
from nextaction.engine.engine import Snapshot
from nextaction.errors import NotFound
from nextaction.models.activity import Activity
from nextaction.models.booking import Booking
from nextaction.models.lead import Lead
from nextaction.models.task import Task

logger = logging.getLogger('services.store')


def load_snapshot(session, scope: ActionScope) -> Snapshot:
    """Leads, their activities and bookings, and open lead tasks for a scope.

    Raises NotFound for a lead scope whose lead does not exist.
    """
    if scope.kind == 'lead':
        lead = session.get(Lead, scope.lead_id)
        if lead is None:
            raise NotFound(f'Lead {scope.lead_id} not found')
        leads = [lead]
        task_filter = Task.related_to_id == scope.lead_id
    else:
        leads = session.query(Lead).filter(
            or_(Lead.owner_id == scope.user_id, Lead.reassigned_owner_id == scope.user_id),
        ).all()
        task_filter = Task.owner_id == scope.user_id

    lead_ids = [lead.id for lead in leads]
    if lead_ids:
        activities = session.query(Activity).filter(Activity.lead_id.in_(lead_ids)).all()
        bookings = session.query(Booking).filter(Booking.lead_id.in_(lead_ids)).all()
    else:
        activities, bookings = [], []

    tasks = session.query(Task).filter(
        task_filter,
        Task.status == 'open',
        Task.related_to_type == 'lead',
    ).all()

    # Manual tasks may point at leads outside the owned set (e.g. reassigned away)
    missing = {t.related_to_id for t in tasks if t.related_to_id is not None} - set(lead_ids)
    if missing:
        leads = leads + session.query(Lead).filter(Lead.id.in_(missing)).all()

    logger.debug(
        "Snapshot for %s scope: %d leads, %d activities, %d bookings, %d tasks",
        scope.kind, len(leads), len(activities), len(bookings), len(tasks),
    )
    return Snapshot(leads=leads, activities=activities, bookings=bookings, tasks=tasks)
