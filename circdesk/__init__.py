#!/usr/bin/env python

"""
    circdesk
    ~~~~~~~~
    Circulation desk for physical library assets: checkouts,
    check-ins, holds and lost/found tracking.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

__version__ = '0.1.0'
