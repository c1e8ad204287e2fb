"""
Lead follow-up routes — the single-lead panel: auto + manual actions, follow-up CRUD.
"""
from flask import Blueprint, jsonify, request

from nextaction.database import get_session
from nextaction.engine.base import ActionScope
from nextaction.engine.engine import compute_actions
from nextaction.routes.common import actions_payload, clock_from_request
from nextaction.services.follow_ups import create_follow_up, update_follow_up, delete_follow_up
from nextaction.services.rule_config import load_completion_criteria
from nextaction.services.store import load_snapshot

bp = Blueprint('leads', __name__)


@bp.route('/api/leads/<int:lead_id>/follow-ups')
def lead_follow_ups(lead_id):
    """Every scheduled follow-up for one lead, ranked, untruncated."""
    clock = clock_from_request()
    scope = ActionScope.for_lead(lead_id)

    session = get_session()
    try:
        snapshot = load_snapshot(session, scope)
        criteria = load_completion_criteria(session)
        actions = compute_actions(snapshot, scope, clock, criteria)
        lead_name = snapshot.leads[0].display_name
    finally:
        session.close()

    return jsonify(actions_payload(actions, clock, lead_id=lead_id, lead_name=lead_name))


@bp.route('/api/leads/<int:lead_id>/follow-ups', methods=['POST'])
def add_follow_up(lead_id):
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        task = create_follow_up(session, lead_id, data, owner_id=data.get('owner_id'))
        body = task.to_dict()
    finally:
        session.close()
    return jsonify(body), 201


@bp.route('/api/follow-ups/<int:task_id>', methods=['PATCH'])
def edit_follow_up(task_id):
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        body = update_follow_up(session, task_id, data).to_dict()
    finally:
        session.close()
    return jsonify(body)


@bp.route('/api/follow-ups/<int:task_id>', methods=['DELETE'])
def remove_follow_up(task_id):
    session = get_session()
    try:
        delete_follow_up(session, task_id)
    finally:
        session.close()
    return jsonify({'status': 'deleted', 'id': task_id})
