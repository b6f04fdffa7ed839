#!/usr/bin/env python

"""
    Core module for circdesk: persistence, stores and the
    circulation engine

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from circdesk.core.db import Base, engine, session, init
from circdesk.core.circulation import CirculationService, CheckoutResult, CheckinResult

__all__ = [
    "Base", "engine", "session", "init",
    "CirculationService", "CheckoutResult", "CheckinResult",
]
