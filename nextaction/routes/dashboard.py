"""
Dashboard routes — health check and the per-user next best actions list.
"""
import logging
from flask import Blueprint, jsonify, request

from nextaction.database import get_session
from nextaction.engine.base import ActionScope
from nextaction.engine.engine import compute_actions
from nextaction.errors import ValidationError
from nextaction.routes.common import actions_payload, clock_from_request
from nextaction.services.rule_config import load_completion_criteria
from nextaction.services.store import load_snapshot

logger = logging.getLogger('routes.dashboard')

bp = Blueprint('dashboard', __name__)


@bp.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy"}), 200


@bp.route('/api/next-best-actions')
def next_best_actions():
    """Top next best actions across every lead the user owns."""
    user_id = request.args.get('user_id')
    if not user_id:
        raise ValidationError('user_id is required')
    clock = clock_from_request()
    scope = ActionScope.for_user(user_id)

    session = get_session()
    try:
        snapshot = load_snapshot(session, scope)
        criteria = load_completion_criteria(session)
        actions = compute_actions(snapshot, scope, clock, criteria)
    finally:
        session.close()

    logger.info("User %s: %d next best actions", user_id, len(actions), extra={'user_id': user_id})
    return jsonify(actions_payload(actions, clock, user_id=user_id))
