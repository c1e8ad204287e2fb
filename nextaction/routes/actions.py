"""
Action routes — complete a next best action (manual task or engagement).
"""
import logging
from flask import Blueprint, jsonify, request

from nextaction.database import get_session
from nextaction.models.activity import Activity
from nextaction.routes.common import clock_from_request
from nextaction.services.completion import complete_action

logger = logging.getLogger('routes.actions')

bp = Blueprint('actions', __name__)


@bp.route('/api/actions/<action_id>/complete', methods=['POST'])
def complete(action_id):
    """
    Body (all optional): lead_id, lead_name, performed_by_id, performed_by_name, now.

    Refetch the action list afterwards; nothing is updated incrementally.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    clock = clock_from_request()

    session = get_session()
    try:
        result = complete_action(
            session,
            action_id,
            clock=clock,
            lead_id=data.get('lead_id'),
            lead_name=data.get('lead_name'),
            performed_by_id=data.get('performed_by_id'),
            performed_by_name=data.get('performed_by_name'),
        )
        if isinstance(result, Activity):
            body = {
                'status': 'completed',
                'action_id': action_id,
                'activity_id': result.id,
                'lead_id': result.lead_id,
                'engagement_day': result.engagement_day.isoformat(),
            }
        else:
            body = {
                'status': 'completed',
                'action_id': action_id,
                'task_id': result.id,
                'task_status': result.status,
            }
    finally:
        session.close()

    return jsonify(body)
