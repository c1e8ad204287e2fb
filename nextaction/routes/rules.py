"""
Next-best-action rule settings — admin list/add/edit/toggle/reorder/delete.
"""
from flask import Blueprint, jsonify, request

from nextaction.database import get_session
from nextaction.services.rule_settings import (
    list_rule_settings, create_rule_setting, update_rule_setting,
    reorder_rule_settings, delete_rule_setting,
)

bp = Blueprint('rules', __name__)


@bp.route('/api/nba-rules')
def list_rules():
    session = get_session()
    try:
        body = [s.to_dict() for s in list_rule_settings(session)]
    finally:
        session.close()
    return jsonify({'count': len(body), 'rules': body})


@bp.route('/api/nba-rules', methods=['POST'])
def add_rule():
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        body = create_rule_setting(session, data).to_dict()
    finally:
        session.close()
    return jsonify(body), 201


@bp.route('/api/nba-rules/reorder', methods=['POST'])
def reorder_rules():
    """Body: {"ids": [3, 1, 2]} — new display order, first id gets sort_order 0."""
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        body = [s.to_dict() for s in reorder_rule_settings(session, data.get('ids'))]
    finally:
        session.close()
    return jsonify({'count': len(body), 'rules': body})


@bp.route('/api/nba-rules/<int:setting_id>', methods=['PATCH'])
def edit_rule(setting_id):
    data = request.get_json(silent=True) or {}
    session = get_session()
    try:
        body = update_rule_setting(session, setting_id, data).to_dict()
    finally:
        session.close()
    return jsonify(body)


@bp.route('/api/nba-rules/<int:setting_id>', methods=['DELETE'])
def remove_rule(setting_id):
    session = get_session()
    try:
        delete_rule_setting(session, setting_id)
    finally:
        session.close()
    return jsonify({'status': 'deleted', 'id': setting_id})
