"""Timezone utilities for Indian market time (IST)."""

from datetime import date, datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

IST_TZ = pytz.timezone("Asia/Kolkata")


def now_ist() -> datetime:
    """Return current time in Asia/Kolkata timezone."""
    return datetime.now(IST_TZ)


def today_ist() -> date:
    """Return today's calendar date in IST."""
    return now_ist().date()


def parse_listing_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a date as shown on IPO pages ("Fri, Jul 25, 2025", "25 July 2025").

    Returns None for empty or unparseable text.
    """
    if not value:
        return None
    try:
        return date_parser.parse(value, fuzzy=True, dayfirst=False).date()
    except (ValueError, OverflowError):
        return None
