"""
Engine contracts.

Every rule implements CadenceRule.evaluate() and returns at most one
RecommendedAction. The engine only sees the uniform interface; scope decides
which leads and tasks are evaluated and how the result is trimmed.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from nextaction.config import DASHBOARD_ACTION_LIMIT, URGENCY_ORDER
from nextaction.engine.clock import BusinessClock


@dataclass
class RecommendedAction:
    """One row of the next-best-actions list. Never persisted."""
    id: str
    lead_id: Optional[int]
    lead_name: str
    label: str
    type: str                    # manual / dm / call / engagement
    urgency: str                 # high / medium / low
    due_date: datetime
    social_links: Optional[Dict[str, Optional[str]]] = None
    task_id: Optional[int] = None

    @property
    def urgency_rank(self) -> int:
        return URGENCY_ORDER.get(self.urgency, len(URGENCY_ORDER))

    @property
    def completable(self) -> bool:
        return self.type in ('manual', 'engagement')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'lead_id': self.lead_id,
            'lead_name': self.lead_name,
            'label': self.label,
            'type': self.type,
            'urgency': self.urgency,
            'due_date': self.due_date.isoformat(),
            'social_links': self.social_links,
            'task_id': self.task_id,
            'completable': self.completable,
        }


@dataclass
class ActionScope:
    """Who the list is for.

    kind='user' is the dashboard: every lead the user owns, top-N only.
    kind='lead' is the single-lead follow-up panel: full list.

    The two views historically suppressed booking check-ins differently
    ('outreach' vs 'conversation') and defaulted undated-priority manual tasks
    differently ('low' vs 'medium'); both are kept per scope.
    """
    kind: str
    user_id: Optional[str] = None
    lead_id: Optional[int] = None
    limit: Optional[int] = None
    booking_suppression: str = 'outreach'
    manual_fallback_urgency: str = 'low'

    @classmethod
    def for_user(cls, user_id: str, limit: int = DASHBOARD_ACTION_LIMIT) -> 'ActionScope':
        return cls(kind='user', user_id=user_id, limit=limit,
                   booking_suppression='outreach', manual_fallback_urgency='low')

    @classmethod
    def for_lead(cls, lead_id: int) -> 'ActionScope':
        return cls(kind='lead', lead_id=lead_id, limit=None,
                   booking_suppression='conversation', manual_fallback_urgency='medium')

    def includes_lead(self, lead) -> bool:
        if self.kind == 'lead':
            return lead.id == self.lead_id
        return self.user_id is not None and self.user_id in (lead.owner_id, lead.reassigned_owner_id)

    def includes_task(self, task) -> bool:
        if task.status != 'open' or task.related_to_type != 'lead':
            return False
        if self.kind == 'lead':
            return task.related_to_id == self.lead_id
        return task.owner_id == self.user_id


@dataclass
class EvaluationContext:
    """Per-invocation inputs shared by every rule."""
    clock: BusinessClock
    now: datetime
    today: date
    completion_criteria: Mapping[str, str] = field(default_factory=dict)
    booking_suppression: str = 'outreach'

    @classmethod
    def build(cls, clock: BusinessClock, completion_criteria: Optional[Mapping[str, str]] = None,
              booking_suppression: str = 'outreach') -> 'EvaluationContext':
        now = clock.now()
        return cls(
            clock=clock,
            now=now,
            today=clock.local_date(now),
            completion_criteria=dict(completion_criteria or {}),
            booking_suppression=booking_suppression,
        )

    @property
    def today_start(self) -> datetime:
        return self.clock.local_midnight(self.today)


class CadenceRule(ABC):
    """
    Base class for every cadence policy.

    A rule looks at one lead plus its LeadHistory and either recommends one
    action or stays quiet. Rules never touch the store.
    """
    name: str = ''               # id prefix, e.g. 'engage'
    action_type: str = ''        # manual / dm / call / engagement
    description: str = ''

    @abstractmethod
    def evaluate(self, lead, history, ctx: EvaluationContext) -> Optional[RecommendedAction]:
        ...

    def make_action(self, lead, sub_key: str, label: str, urgency: str,
                    due_date: datetime, social_links=None) -> RecommendedAction:
        return RecommendedAction(
            id=f'{self.name}-{lead.id}-{sub_key}',
            lead_id=lead.id,
            lead_name=lead.display_name,
            label=label,
            type=self.action_type,
            urgency=urgency,
            due_date=due_date,
            social_links=social_links if social_links is not None else lead.social_links,
        )
