"""
Next best actions — snapshot in, ranked action list out.

Same engine for both views:
  ActionScope.for_user(user_id)  → dashboard, every owned lead, top 10
  ActionScope.for_lead(lead_id)  → follow-up panel for one lead, full list

Pure: no store access, no clock reads beyond the BusinessClock it is given.
Callers recompute after every completion.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from nextaction.engine.base import ActionScope, EvaluationContext, RecommendedAction
from nextaction.engine.clock import BusinessClock
from nextaction.engine.lookup import LeadHistory, group_by_lead
from nextaction.engine.manual_tasks import adapt_tasks
from nextaction.engine.ranking import rank_actions
from nextaction.engine.rules import evaluate_lead

logger = logging.getLogger('engine.engine')


@dataclass
class Snapshot:
    """Everything the engine reads, already fetched from the store."""
    leads: List = field(default_factory=list)
    activities: List = field(default_factory=list)
    bookings: List = field(default_factory=list)
    tasks: List = field(default_factory=list)


def compute_actions(snapshot: Snapshot, scope: ActionScope, clock: Optional[BusinessClock] = None,
                    completion_criteria: Optional[Mapping[str, str]] = None) -> List[RecommendedAction]:
    """Evaluate every in-scope lead, merge manual tasks, rank and trim."""
    clock = clock or BusinessClock()
    ctx = EvaluationContext.build(clock, completion_criteria, scope.booking_suppression)

    leads = [lead for lead in snapshot.leads if scope.includes_lead(lead)]
    activities_by_lead = group_by_lead(snapshot.activities)
    bookings_by_lead = group_by_lead(snapshot.bookings)

    actions: List[RecommendedAction] = []
    for lead in leads:
        history = LeadHistory.build(
            lead.id,
            activities_by_lead.get(lead.id, []),
            bookings_by_lead.get(lead.id, []),
            ctx.today,
            clock.tz,
        )
        actions.extend(evaluate_lead(lead, history, ctx))

    tasks = [task for task in snapshot.tasks if scope.includes_task(task)]
    leads_by_id = {lead.id: lead for lead in snapshot.leads}
    actions.extend(adapt_tasks(tasks, ctx, leads_by_id, scope.manual_fallback_urgency))

    ranked = rank_actions(actions, scope.limit)
    logger.debug(
        "Scope %s: %d leads, %d tasks → %d actions (%d kept)",
        scope.kind, len(leads), len(tasks), len(actions), len(ranked),
    )
    return ranked


def recommend_for_user(snapshot: Snapshot, user_id: str, clock: Optional[BusinessClock] = None,
                       completion_criteria: Optional[Mapping[str, str]] = None,
                       limit: Optional[int] = None) -> List[RecommendedAction]:
    """Dashboard list: the user's top actions across every lead they own."""
    scope = ActionScope.for_user(user_id) if limit is None else ActionScope.for_user(user_id, limit=limit)
    return compute_actions(snapshot, scope, clock, completion_criteria)


def recommend_for_lead(snapshot: Snapshot, lead_id: int, clock: Optional[BusinessClock] = None,
                       completion_criteria: Optional[Mapping[str, str]] = None) -> List[RecommendedAction]:
    """Follow-up panel list: every auto and manual action for one lead."""
    return compute_actions(snapshot, ActionScope.for_lead(lead_id), clock, completion_criteria)
