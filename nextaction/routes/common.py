"""
Helpers shared by the API blueprints.
"""
from datetime import datetime

from flask import request

from nextaction.engine.clock import BusinessClock
from nextaction.errors import ValidationError


def clock_from_request() -> BusinessClock:
    """BusinessClock, pinned when the caller passes ?now=<ISO timestamp> (or "now" in the JSON body)."""
    raw = request.args.get('now')
    if raw is None and request.is_json:
        body = request.get_json(silent=True)
        raw = body.get('now') if isinstance(body, dict) else None
    if raw in (None, ''):
        return BusinessClock()
    if not isinstance(raw, str):
        raise ValidationError(f"Invalid 'now' timestamp {raw!r}, expected an ISO 8601 string")
    try:
        return BusinessClock(now=datetime.fromisoformat(raw.replace('Z', '+00:00')))
    except ValueError:
        raise ValidationError(f"Invalid 'now' timestamp '{raw}'")


def actions_payload(actions, clock: BusinessClock, **extra):
    payload = {
        'today': clock.today().isoformat(),
        'count': len(actions),
        'actions': [action.to_dict() for action in actions],
    }
    payload.update(extra)
    return payload
