"""
Next-best-action rule settings — the admin side of services.rule_config.

Each row is an AppSetting (setting_type='next_best_actions') keyed by the
rule label, e.g. "DM Follow-up (Day 30)", whose config carries the
completion criterion. Rows can be added, edited, switched on/off, reordered
and deleted; the engine reads the active ones on every request.
"""
import logging
import re
from typing import Any, Dict, List

from nextaction.config import COMPLETION_CRITERIA, DEFAULT_COMPLETION_CRITERION, NBA_SETTING_TYPE
from nextaction.errors import NotFound, ValidationError
from nextaction.models.app_setting import AppSetting

logger = logging.getLogger('services.rule_settings')


def make_value(label: str) -> str:
    """'DM Follow-up (Day 30)' → 'dm_follow_up_day_30'."""
    return re.sub(r'[^a-z0-9]+', '_', label.lower()).strip('_')


def _clean_criterion(value) -> str:
    if value not in COMPLETION_CRITERIA:
        raise ValidationError(
            f"Invalid completion_criteria '{value}', expected one of {', '.join(COMPLETION_CRITERIA)}"
        )
    return value


def _clean_label(value) -> str:
    label = (value or '').strip() if isinstance(value, str) else ''
    if not label:
        raise ValidationError('Rule label is required')
    return label


def _commit(session, action, setting_id=None):
    try:
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Failed to %s rule setting %s", action, setting_id, exc_info=True)
        raise


def _get(session, setting_id: int) -> AppSetting:
    setting = session.get(AppSetting, setting_id)
    if setting is None or setting.setting_type != NBA_SETTING_TYPE:
        raise NotFound(f'Rule setting {setting_id} not found')
    return setting


def list_rule_settings(session) -> List[AppSetting]:
    """Every rule setting, active or not, in display order."""
    return session.query(AppSetting).filter(
        AppSetting.setting_type == NBA_SETTING_TYPE,
    ).order_by(AppSetting.sort_order, AppSetting.id).all()


def create_rule_setting(session, data: Dict[str, Any]) -> AppSetting:
    """Append a new active rule setting at the end of the list."""
    label = _clean_label(data.get('label'))
    criterion = _clean_criterion(data.get('completion_criteria') or DEFAULT_COMPLETION_CRITERION)

    config = {'completion_criteria': criterion}
    if data.get('description'):
        config['description'] = data['description']

    count = session.query(AppSetting).filter(AppSetting.setting_type == NBA_SETTING_TYPE).count()
    setting = AppSetting(
        setting_type=NBA_SETTING_TYPE,
        label=label,
        value=make_value(label),
        is_active=True,
        sort_order=count,
        config=config,
    )
    session.add(setting)
    _commit(session, 'create')
    logger.info("Rule setting %s created for '%s' (%s)", setting.id, label, criterion)
    return setting


def update_rule_setting(session, setting_id: int, data: Dict[str, Any]) -> AppSetting:
    """Partial update: label, description, completion_criteria, is_active, sort_order."""
    setting = _get(session, setting_id)
    config = dict(setting.config or {})

    if 'label' in data:
        setting.label = _clean_label(data['label'])
        setting.value = make_value(setting.label)
    if 'completion_criteria' in data:
        config['completion_criteria'] = _clean_criterion(data['completion_criteria'])
    if 'description' in data:
        config['description'] = data['description'] or None
    if 'is_active' in data:
        if not isinstance(data['is_active'], bool):
            raise ValidationError('is_active must be true or false')
        setting.is_active = data['is_active']
    if 'sort_order' in data:
        sort_order = data['sort_order']
        if isinstance(sort_order, bool) or not isinstance(sort_order, int):
            raise ValidationError('sort_order must be an integer')
        setting.sort_order = sort_order

    # reassign so the JSON column is flagged dirty
    setting.config = config
    _commit(session, 'update', setting_id)
    return setting


def reorder_rule_settings(session, ordered_ids: List[int]) -> List[AppSetting]:
    """Set sort_order from the position of each id in `ordered_ids`."""
    if not isinstance(ordered_ids, list):
        raise ValidationError('ids must be a list of rule setting ids')
    settings = {s.id: s for s in list_rule_settings(session)}
    unknown = [i for i in ordered_ids if i not in settings]
    if unknown:
        raise NotFound(f'Rule settings not found: {unknown}')

    for index, setting_id in enumerate(ordered_ids):
        settings[setting_id].sort_order = index
    _commit(session, 'reorder')
    return list_rule_settings(session)


def delete_rule_setting(session, setting_id: int) -> None:
    setting = _get(session, setting_id)
    session.delete(setting)
    _commit(session, 'delete', setting_id)
    logger.info("Rule setting %s deleted", setting_id)
