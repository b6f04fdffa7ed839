#!/usr/bin/env python 

"""
    Circulation Models for circdesk,
    including the asset, card, patron, checkout, checkout history
    and hold tables.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from sqlalchemy import Column, String, Integer, Numeric, DateTime
from sqlalchemy import ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.sql import func
from circdesk.core.db import Base
import enum


class AssetStatus(str, enum.Enum):
    """Display labels for an asset's circulation status."""
    AVAILABLE = "Available"
    CHECKED_OUT = "Checked Out"
    ON_HOLD = "On Hold"
    LOST = "Lost"


class LibraryAsset(Base):
    __tablename__ = 'library_assets'

    id = Column(Integer, primary_key=True)
    title = Column(String(255))
    status = Column(String(20), default=AssetStatus.AVAILABLE.value, nullable=False)

    checkouts = relationship('Checkout', back_populates='asset', cascade='all, delete-orphan')
    holds = relationship('Hold', back_populates='asset', cascade='all, delete-orphan')


class LibraryCard(Base):
    __tablename__ = 'library_cards'

    id = Column(Integer, primary_key=True)
    fees = Column(Numeric(10, 2), default=0, nullable=False)
    created = Column(DateTime(timezone=True), default=func.now())

    patron = relationship('Patron', back_populates='library_card', uselist=False)


class Patron(Base):
    __tablename__ = 'patrons'

    id = Column(Integer, primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255))
    telephone = Column(String(50))
    library_card_id = Column(Integer, ForeignKey('library_cards.id'), unique=True)

    library_card = relationship('LibraryCard', back_populates='patron')

    @hybrid_property
    def full_name(self):
        return self.first_name + " " + self.last_name


class Checkout(Base):
    """An active loan. At most one exists per asset."""
    __tablename__ = 'checkouts'

    id = Column(Integer, primary_key=True)
    asset_id = Column(Integer, ForeignKey('library_assets.id'), unique=True, nullable=False)
    card_id = Column(Integer, ForeignKey('library_cards.id'), nullable=False)
    since = Column(DateTime, nullable=False)
    until = Column(DateTime, nullable=False)

    asset = relationship('LibraryAsset', back_populates='checkouts')
    library_card = relationship('LibraryCard')


class CheckoutHistory(Base):
    """One row per loan episode; `checked_in` is NULL while the episode is open."""
    __tablename__ = 'checkout_histories'

    id = Column(Integer, primary_key=True)
    asset_id = Column(Integer, ForeignKey('library_assets.id'), nullable=False)
    card_id = Column(Integer, ForeignKey('library_cards.id'), nullable=False)
    checked_out = Column(DateTime, nullable=False)
    checked_in = Column(DateTime, nullable=True)

    asset = relationship('LibraryAsset')
    library_card = relationship('LibraryCard')

    @hybrid_property
    def is_open(self):
        return self.checked_in == None  # noqa: E711


class Hold(Base):
    __tablename__ = 'holds'

    id = Column(Integer, primary_key=True)
    asset_id = Column(Integer, ForeignKey('library_assets.id'), nullable=False)
    card_id = Column(Integer, ForeignKey('library_cards.id'), nullable=False)
    hold_placed = Column(DateTime, nullable=False)

    asset = relationship('LibraryAsset', back_populates='holds')
    library_card = relationship('LibraryCard')
