"""
Database engine, session factory and model registry.

SQLite for local dev and tests, Postgres in production. Schema changes go
through Alembic; init_db() is only for the demo seed script.
"""
import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from nextaction.config import DATABASE_URL

# Every module that defines a table; imported before metadata is used
MODEL_MODULES = [
    'nextaction.models.lead',
    'nextaction.models.activity',
    'nextaction.models.booking',
    'nextaction.models.task',
    'nextaction.models.app_setting',
]


class Base(DeclarativeBase):
    pass


# Heroku-style URLs use postgres:// but SQLAlchemy 2.x requires postgresql://
url = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

if url.startswith('sqlite'):
    engine = create_engine(url, connect_args={'check_same_thread': False})
else:
    engine = create_engine(url, pool_pre_ping=True, pool_size=5, max_overflow=10)

SessionLocal = sessionmaker(bind=engine)


def import_models():
    for module in MODEL_MODULES:
        importlib.import_module(module)


def init_db(bind=None):
    """Create any missing tables on `bind` (default: the app engine)."""
    import_models()
    Base.metadata.create_all(bind or engine)


def get_session():
    """Return a new DB session. Callers close it."""
    return SessionLocal()
