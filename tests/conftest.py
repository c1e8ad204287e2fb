"""Shared test fixtures."""
import itertools
from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import patch
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from nextaction.database import init_db
from nextaction.engine.clock import BusinessClock
from nextaction.models.activity import Activity
from nextaction.models.booking import Booking
from nextaction.models.lead import Lead
from nextaction.models.task import Task

# Monday 2026-06-15, 12:00 in New York (EDT, UTC-4)
NOW = datetime(2026, 6, 15, 16, 0, tzinfo=timezone.utc)
TZ_NAME = 'America/New_York'


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine('sqlite:///:memory:')
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """SQLAlchemy session bound to in-memory SQLite. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def patch_get_session(db_session):
    """Route all get_session() calls to the test session.

    We disable close() so that route handlers calling session.close()
    in their finally blocks don't invalidate the shared test session.
    """
    _real_close = db_session.close
    db_session.close = lambda: None
    with patch('nextaction.database.get_session', return_value=db_session), \
         patch('nextaction.routes.dashboard.get_session', return_value=db_session), \
         patch('nextaction.routes.leads.get_session', return_value=db_session), \
         patch('nextaction.routes.actions.get_session', return_value=db_session), \
         patch('nextaction.routes.rules.get_session', return_value=db_session):
        yield db_session
    db_session.close = _real_close


@pytest.fixture
def app():
    """Flask test app."""
    from nextaction import create_app
    app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    """Business clock frozen at NOW."""
    return BusinessClock(TZ_NAME, now=NOW)


@pytest.fixture
def ago():
    """ago(days, hours=0) → UTC instant that long before NOW."""
    def _ago(days=0, hours=0):
        return NOW - timedelta(days=days, hours=hours)
    return _ago


@pytest.fixture
def make_lead():
    """Factory fixture — builds an unsaved Lead with every engine-relevant field set."""
    ids = itertools.count(1)

    def _make(**overrides):
        defaults = dict(
            id=next(ids),
            name='Test Lead',
            phone='555-0100',
            email='',
            status='new',
            lead_source='other',
            instagram_link=None,
            facebook_link=None,
            owner_id='user-1',
            reassigned_owner_id=None,
            created_at=NOW - timedelta(days=30),
        )
        defaults.update(overrides)
        return Lead(**defaults)
    return _make


@pytest.fixture
def make_activity():
    """Factory fixture — Activity for a lead, `days_ago` before NOW."""
    ids = itertools.count(1)

    def _make(lead, activity_type='call', days_ago=0, hours_ago=0, outcome='no_response', **overrides):
        defaults = dict(
            id=next(ids),
            lead_id=lead.id,
            lead_name=lead.name,
            activity_type=activity_type,
            outcome=outcome,
            created_at=NOW - timedelta(days=days_ago, hours=hours_ago),
        )
        defaults.update(overrides)
        return Activity(**defaults)
    return _make


@pytest.fixture
def make_booking():
    """Factory fixture — Booking for a lead, booked and created `days_ago` before NOW."""
    ids = itertools.count(1)

    def _make(lead, days_ago=0, **overrides):
        when = NOW - timedelta(days=days_ago)
        defaults = dict(id=next(ids), lead_id=lead.id, lead_name=lead.name, booked_at=when, created_at=when)
        defaults.update(overrides)
        return Booking(**defaults)
    return _make


@pytest.fixture
def make_task():
    """Factory fixture — open manual follow-up Task for a lead."""
    ids = itertools.count(1)

    def _make(lead, title='Call back about pricing', **overrides):
        defaults = dict(
            id=next(ids),
            title=title,
            status='open',
            priority=None,
            due_date=None,
            related_to_type='lead',
            related_to_id=lead.id,
            related_to_name=lead.name,
            owner_id=lead.owner_id,
        )
        defaults.update(overrides)
        return Task(**defaults)
    return _make


@pytest.fixture
def persist(db_session):
    """persist(*rows) → add and commit factory-built rows to the test database."""
    def _persist(*rows):
        db_session.add_all(rows)
        db_session.commit()
        return rows
    return _persist
