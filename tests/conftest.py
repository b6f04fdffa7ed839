import os
import datetime

# must be set before circdesk.configs is imported
os.environ.setdefault("TESTING", "true")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from circdesk.core.db import Base
from circdesk.core.models import LibraryAsset, LibraryCard, Patron, AssetStatus
from circdesk.core.locks import AssetLocks
from circdesk.core.circulation import CirculationService


class FakeClock:

    def __init__(self, start=datetime.datetime(2024, 3, 1, 9, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += datetime.timedelta(**kwargs)
        return self.now


@pytest.fixture
def db_session():
    from circdesk.core import models  # noqa: F401

    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(db_session, clock):
    return CirculationService(db=db_session, clock=clock, locks=AssetLocks())


def add_asset(db, asset_id, status=AssetStatus.AVAILABLE, title=None):
    asset = LibraryAsset(id=asset_id, title=title or f"Asset {asset_id}", status=status.value)
    db.add(asset)
    db.commit()
    return asset


def add_patron(db, card_id, first_name, last_name):
    card = LibraryCard(id=card_id, fees=0)
    patron = Patron(id=card_id, first_name=first_name, last_name=last_name,
                    email=f"{first_name.lower()}@example.org", library_card=card)
    db.add_all([card, patron])
    db.commit()
    return patron


@pytest.fixture
def library(db_session):
    """Three assets and three patrons (cards 1-3)."""
    for asset_id in (1, 2, 3):
        add_asset(db_session, asset_id)
    add_patron(db_session, 1, "Ada", "Lovelace")
    add_patron(db_session, 2, "Grace", "Hopper")
    add_patron(db_session, 3, "Alan", "Turing")
    return db_session
