#!/usr/bin/env python

"""
    Configurations for circdesk

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import os
import logging


# Determine environment
TESTING = os.getenv("TESTING", "false").lower() == "true"

DEBUG = bool(int(os.environ.get('CIRCDESK_DEBUG', 0)))
LOG_LEVEL = os.environ.get('CIRCDESK_LOG_LEVEL', 'info')

# Circulation policy
LOAN_PERIOD_DAYS = int(os.environ.get('CIRCDESK_LOAN_PERIOD_DAYS', 30))

DB_CONFIG = {
    'user': os.environ.get('DB_USER', 'postgres'),
    'password': os.environ.get('DB_PASSWORD'),
    'host': os.environ.get('DB_HOST', 'localhost'),
    'port': int(os.environ.get('DB_PORT', '5432')),
    'dbname': os.environ.get('DB_NAME', 'circdesk'),
}

# Database configuration
DB_URI = os.environ.get('CIRCDESK_DB_URI') or (
    "sqlite:///:memory:" if TESTING else
    'postgresql+psycopg2://{user}:{password}@{host}:{port}/{dbname}'.format(**DB_CONFIG)
)


def configure_logging(level=None):
    """Applies LOG_LEVEL (or `level`) to the circdesk logger tree."""
    level = (level or LOG_LEVEL).upper()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("circdesk").setLevel(level)


__all__ = [
    'TESTING', 'DEBUG', 'LOG_LEVEL', 'LOAN_PERIOD_DAYS',
    'DB_URI', 'DB_CONFIG', 'configure_logging'
]
