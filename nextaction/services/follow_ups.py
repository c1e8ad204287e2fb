"""
Manual follow-up tasks — create, edit, delete from the lead follow-up panel.

Input is a JSON-ish dict; malformed fields raise ValidationError before the
store is touched.
"""
import logging
import re
from datetime import date
from typing import Any, Dict, Optional

from nextaction.config import URGENCY_ORDER
from nextaction.errors import NotFound, ValidationError
from nextaction.models.lead import Lead
from nextaction.models.task import Task

logger = logging.getLogger('services.follow_ups')

_TIME_RE = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')

EDITABLE_FIELDS = ('title', 'description', 'priority', 'due_date', 'due_time')


def _parse_due_date(value) -> Optional[date]:
    if value in (None, ''):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"Invalid due_date '{value}', expected YYYY-MM-DD")


def _clean(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """Validate and normalize follow-up fields. partial=True for PATCH."""
    cleaned = {}

    if 'title' in data or not partial:
        title = (data.get('title') or '').strip()
        if not title:
            raise ValidationError('Follow-up title is required')
        cleaned['title'] = title

    if 'priority' in data:
        priority = data.get('priority') or None
        if priority is not None and priority not in URGENCY_ORDER:
            raise ValidationError(f"Invalid priority '{priority}', expected one of {', '.join(URGENCY_ORDER)}")
        cleaned['priority'] = priority

    if 'due_date' in data:
        cleaned['due_date'] = _parse_due_date(data.get('due_date'))

    if 'due_time' in data:
        due_time = data.get('due_time') or None
        if due_time is not None and not _TIME_RE.match(due_time):
            raise ValidationError(f"Invalid due_time '{due_time}', expected HH:MM")
        cleaned['due_time'] = due_time

    if 'description' in data:
        cleaned['description'] = data.get('description') or None

    return cleaned


def create_follow_up(session, lead_id: int, data: Dict[str, Any], owner_id: Optional[str] = None) -> Task:
    """Create an open follow-up task attached to a lead."""
    fields = _clean(data)
    lead = session.get(Lead, lead_id)
    if lead is None:
        raise NotFound(f'Lead {lead_id} not found')

    task = Task(
        status='open',
        related_to_type='lead',
        related_to_id=lead.id,
        related_to_name=lead.display_name,
        owner_id=owner_id or lead.reassigned_owner_id or lead.owner_id,
        **fields,
    )
    session.add(task)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Failed to create follow-up for lead %s", lead_id, exc_info=True)
        raise
    logger.info("Follow-up %s created for lead %s", task.id, lead_id,
                extra={'lead_id': lead_id, 'task_id': task.id})
    return task


def update_follow_up(session, task_id: int, data: Dict[str, Any]) -> Task:
    task = session.get(Task, task_id)
    if task is None:
        raise NotFound(f'Task {task_id} not found')

    fields = _clean({k: v for k, v in data.items() if k in EDITABLE_FIELDS}, partial=True)
    for key, value in fields.items():
        setattr(task, key, value)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Failed to update follow-up %s", task_id, exc_info=True)
        raise
    return task


def delete_follow_up(session, task_id: int) -> None:
    task = session.get(Task, task_id)
    if task is None:
        raise NotFound(f'Task {task_id} not found')
    session.delete(task)
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Failed to delete follow-up %s", task_id, exc_info=True)
        raise
    logger.info("Follow-up %s deleted", task_id)
