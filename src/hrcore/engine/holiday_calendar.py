"""Company holiday calendar relative to a given day.

A holiday dated today is neither past nor upcoming. The 30-day upcoming
count covers (today, today + 30 days]. Holidays without a parseable date
are left out of every list and count.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from hrcore.models.entities import Holiday
from hrcore.models.views import HolidayCalendar

logger = logging.getLogger(__name__)

UPCOMING_WINDOW_DAYS = 30
NEXT_UPCOMING = 3


def holiday_calendar(holidays: Iterable[Holiday], today: Optional[date] = None) -> HolidayCalendar:
    today = today or date.today()
    dated = []
    for h in holidays:
        if h.date is None:
            logger.debug("Holiday %s has no date, leaving it off the calendar", h.id)
            continue
        dated.append(h)
    dated.sort(key=lambda h: h.date.date())

    calendar = HolidayCalendar(today=today, holidays=dated, total=len(dated))
    window_end = today + timedelta(days=UPCOMING_WINDOW_DAYS)
    for h in dated:
        day = h.date.date()
        if day < today:
            calendar.past.append(h)
        elif day == today:
            calendar.todays_holiday = calendar.todays_holiday or h
        else:
            calendar.upcoming.append(h)
            if day <= window_end:
                calendar.upcoming_count += 1
        if (day.year, day.month) == (today.year, today.month):
            calendar.this_month_count += 1

    calendar.past_count = len(calendar.past)
    calendar.next_upcoming = calendar.upcoming[:NEXT_UPCOMING]
    return calendar
