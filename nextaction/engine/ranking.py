"""
Aggregation & ranking — one ordered list across every lead in scope.
"""
from typing import Iterable, List, Optional

from nextaction.engine.base import RecommendedAction


def sort_key(action: RecommendedAction):
    # id breaks (urgency, due date) ties so reruns produce the same order
    return (action.urgency_rank, action.due_date, action.id)


def rank_actions(actions: Iterable[RecommendedAction], limit: Optional[int] = None) -> List[RecommendedAction]:
    """Urgency first, then earliest due date, then id; optionally keep the top `limit`."""
    ranked = sorted(actions, key=sort_key)
    if limit is not None:
        return ranked[:limit]
    return ranked
