"""
Completion handler — the only place a next best action changes the store.

  task-<id>              → Task open → done
  engage-<lead>-<branch> → append an engagement Activity at local noon today

Everything else (dm/call/check-in actions) is handled by logging a real
activity, not through here. Callers recompute the list afterwards.
"""
import logging
from datetime import timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError

from nextaction.engine.clock import BusinessClock
from nextaction.errors import NotFound, StateConflict, ValidationError
from nextaction.models.activity import Activity
from nextaction.models.lead import Lead
from nextaction.models.task import Task

logger = logging.getLogger('services.completion')


def parse_action_id(action_id: str):
    """Split an action id into (kind, numeric id).

    'task-42' → ('manual', 42); 'engage-7-new' → ('engagement', 7).
    """
    parts = (action_id or '').split('-')
    prefix = parts[0]
    try:
        ref = int(parts[1]) if len(parts) > 1 else None
    except ValueError:
        ref = None

    if prefix == 'task' and ref is not None and len(parts) == 2:
        return 'manual', ref
    if prefix == 'engage' and ref is not None and len(parts) == 3:
        return 'engagement', ref
    raise ValidationError(f"Action '{action_id}' cannot be completed")


def complete_task(session, task_id: int, clock: BusinessClock) -> Task:
    task = session.get(Task, task_id)
    if task is None:
        raise NotFound(f'Task {task_id} not found')
    if task.status == 'done':
        raise StateConflict(f'Task {task_id} is already done')

    task.status = 'done'
    task.completed_at = clock.now().astimezone(timezone.utc)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Failed to complete task %s", task_id, exc_info=True)
        raise
    logger.info("Task %s marked done", task_id, extra={'task_id': task_id})
    return task


def log_engagement(session, lead_id: int, clock: BusinessClock, lead_name: Optional[str] = None,
                   performed_by_id: Optional[str] = None,
                   performed_by_name: Optional[str] = None) -> Activity:
    lead = session.get(Lead, lead_id)
    if lead is None:
        raise NotFound(f'Lead {lead_id} not found')

    today = clock.today()
    activity = Activity(
        lead_id=lead.id,
        lead_name=lead_name or lead.display_name,
        activity_type='engagement',
        outcome='no_response',
        notes='Daily engagement completed',
        performed_by_id=performed_by_id,
        performed_by_name=performed_by_name,
        department='sales',
        activity_at=clock.local_noon(today).astimezone(timezone.utc),
        engagement_day=today,
    )
    session.add(activity)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise StateConflict(f'Engagement already logged for lead {lead_id} on {today.isoformat()}')
    except Exception:
        session.rollback()
        logger.error("Failed to log engagement for lead %s", lead_id, exc_info=True)
        raise
    logger.info("Engagement logged for lead %s on %s", lead_id, today.isoformat(),
                extra={'lead_id': lead_id})
    return activity


def complete_action(session, action_id: str, clock: Optional[BusinessClock] = None,
                    lead_id: Optional[int] = None, lead_name: Optional[str] = None,
                    performed_by_id: Optional[str] = None, performed_by_name: Optional[str] = None):
    """Apply the completion transition for one action id.

    Returns the updated Task or the new Activity.
    """
    clock = clock or BusinessClock()
    kind, ref = parse_action_id(action_id)

    if kind == 'manual':
        return complete_task(session, ref, clock)

    if lead_id is not None and str(lead_id) != str(ref):
        raise ValidationError(f"Action '{action_id}' does not belong to lead {lead_id}")
    return log_engagement(session, ref, clock, lead_name=lead_name,
                          performed_by_id=performed_by_id, performed_by_name=performed_by_name)
