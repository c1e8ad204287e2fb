"""
Manual task adapter — turns open follow-up tasks into next-best-action rows.
"""
import re
from typing import Dict, Iterable, List, Optional

from nextaction.config import URGENCY_ORDER
from nextaction.engine.base import EvaluationContext, RecommendedAction
from nextaction.engine.clock import days_between

# Auto-generated by the engagement rule; a bare "Daily Engagement" task would duplicate it
_AUTO_ENGAGEMENT_RE = re.compile(r'daily engagement', re.IGNORECASE)


def duplicates_auto_engagement(title: Optional[str]) -> bool:
    """True for "Daily Engagement"-style titles with no parenthetical qualifier."""
    if not title:
        return False
    return bool(_AUTO_ENGAGEMENT_RE.search(title)) and '(' not in title


def task_to_action(task, ctx: EvaluationContext, fallback_urgency: str = 'medium',
                   lead=None) -> Optional[RecommendedAction]:
    if duplicates_auto_engagement(task.title):
        return None

    due = ctx.clock.local_midnight(task.due_date) if task.due_date else ctx.today_start
    if task.priority in URGENCY_ORDER:
        urgency = task.priority
    elif days_between(ctx.now, due) > 0:
        urgency = 'high'
    else:
        urgency = fallback_urgency

    lead_name = task.related_to_name or (lead.display_name if lead is not None else '')
    return RecommendedAction(
        id=f'task-{task.id}',
        lead_id=task.related_to_id,
        lead_name=lead_name,
        label=task.title,
        type='manual',
        urgency=urgency,
        due_date=due,
        social_links=lead.social_links if lead is not None else None,
        task_id=task.id,
    )


def adapt_tasks(tasks: Iterable, ctx: EvaluationContext, leads_by_id: Dict[int, object],
                fallback_urgency: str = 'medium') -> List[RecommendedAction]:
    """Convert already-scoped open tasks; engagement duplicates are dropped."""
    actions = []
    for task in tasks:
        action = task_to_action(task, ctx, fallback_urgency, leads_by_id.get(task.related_to_id))
        if action is not None:
            actions.append(action)
    return actions
