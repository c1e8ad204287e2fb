"""
Centralized configuration — env vars, business clock, domain vocabularies.
"""
import os


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── PostgreSQL ────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')

# ── Auth ─────────────────────────────────────────────────────────────────────
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')
DASHBOARD_PASSWORD = os.getenv('DASHBOARD_PASSWORD')

# ── Business clock ───────────────────────────────────────────────────────────
BUSINESS_TIMEZONE = os.getenv('BUSINESS_TIMEZONE', 'America/New_York')

# ── Next best actions ────────────────────────────────────────────────────────
DASHBOARD_ACTION_LIMIT = int(os.getenv('DASHBOARD_ACTION_LIMIT', '10'))
NBA_SETTING_TYPE = 'next_best_actions'

# ── Activities ───────────────────────────────────────────────────────────────
# Activity types that count as reaching out to the lead (engagement and note do not)
CONTACT_ACTIVITY_TYPES = ('call', 'text', 'email', 'dm')

# ── Actions ──────────────────────────────────────────────────────────────────
URGENCY_ORDER = {'high': 0, 'medium': 1, 'low': 2}

# DM follow-up completion criteria (per-threshold override point)
COMPLETION_CRITERIA = ['any_outreach', 'engagement', 'conversation', 'booking', 'manual']
DEFAULT_COMPLETION_CRITERION = 'any_outreach'
