import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base
from circdesk.configs import DB_URI, DEBUG

logger = logging.getLogger(__name__)
# Only use client_encoding for PostgreSQL, not SQLite
engine_kwargs = {'echo': DEBUG}
if not DB_URI.startswith('sqlite'):
    engine_kwargs['client_encoding'] = 'utf8'
engine = create_engine(DB_URI, **engine_kwargs)
session = scoped_session(sessionmaker(
    bind=engine, autocommit=False, autoflush=False))

class CircdeskBase:
    @classmethod
    def get_many(cls, db, offset=None, limit=None):
        return db.query(cls).order_by(cls.id).offset(offset).limit(limit).all()

Base = declarative_base(cls=CircdeskBase)

def init(bind=None):
    """Creates all circulation tables; returns the global session."""
    # models must be registered on Base before create_all
    from circdesk.core import models  # noqa: F401
    try:
        Base.metadata.create_all(bind=bind or engine)
        return session
    except Exception as e:
        logger.warning(f"[WARNING] Database initialization failed: {e}")
