"""
Rule configuration — DM follow-up completion criteria by rule label.

Defaults come from engine/nba_rules.yaml (cached, with a hardcoded fallback);
active AppSetting rows with setting_type='next_best_actions' override them.
Labels with no entry anywhere fall back to 'any_outreach' inside the rule.
"""
import logging
import os
from typing import Dict

import yaml

from nextaction.config import COMPLETION_CRITERIA, NBA_SETTING_TYPE
from nextaction.models.app_setting import AppSetting

logger = logging.getLogger('services.rule_config')

_rules_config = None


def _default_config():
    """Hardcoded fallback if YAML is missing."""
    return {
        'version': 'default',
        'dm_follow_up': {
            'DM Follow-up (Day 3)': 'any_outreach',
            'DM Follow-up (Day 14)': 'any_outreach',
            'DM Follow-up (Day 30)': 'any_outreach',
        },
    }


def load_rules_config():
    """Load rule defaults from YAML, with in-memory cache and hardcoded fallback."""
    global _rules_config
    if _rules_config is not None:
        return _rules_config

    config_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'engine', 'nba_rules.yaml')
    try:
        with open(config_path, 'r') as f:
            _rules_config = yaml.safe_load(f) or {}
        logger.info("Rule config loaded from YAML (version=%s)", _rules_config.get('version', '?'))
    except Exception as e:
        logger.warning("YAML rule config not found (%s), using defaults", e)
        _rules_config = _default_config()

    return _rules_config


def load_completion_criteria(session) -> Dict[str, str]:
    """Label → completion criterion, YAML defaults overlaid with active AppSetting rows."""
    criteria = dict(load_rules_config().get('dm_follow_up') or {})

    rows = session.query(AppSetting).filter(
        AppSetting.setting_type == NBA_SETTING_TYPE,
        AppSetting.is_active.is_(True),
    ).order_by(AppSetting.sort_order).all()

    for row in rows:
        criterion = (row.config or {}).get('completion_criteria')
        if not criterion:
            continue
        if criterion not in COMPLETION_CRITERIA:
            logger.warning("Rule '%s' has unknown completion criterion '%s'", row.label, criterion)
        criteria[row.label] = criterion

    return criteria
