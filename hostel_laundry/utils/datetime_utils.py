"""
Date and time helpers for pickup scheduling
"""

from datetime import datetime, date, time, timedelta
from typing import Optional, Union
import pytz

from hostel_laundry.config.settings import settings

WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


class DateTimeHelper:
    """Date and time manipulation utilities"""

    @staticmethod
    def utcnow() -> datetime:
        """Current UTC time as a naive datetime, the form stored in the database"""
        return datetime.now(pytz.UTC).replace(tzinfo=None)

    @staticmethod
    def now(timezone: Optional[str] = None) -> datetime:
        """Get current datetime in specified timezone"""
        tz_obj = pytz.timezone(timezone or settings.TIMEZONE)
        return datetime.now(tz_obj)

    @staticmethod
    def today(timezone: Optional[str] = None) -> date:
        """Get current date in the hostel's timezone"""
        return DateTimeHelper.now(timezone).date()

    @staticmethod
    def weekday_name(day: date) -> str:
        return WEEKDAY_NAMES[day.weekday()]

    @staticmethod
    def next_weekday(weekday: str, start: date) -> date:
        """First date on or after ``start`` that falls on ``weekday``"""
        target = WEEKDAY_NAMES.index(weekday.lower())
        return start + timedelta(days=(target - start.weekday()) % 7)

    @staticmethod
    def parse_time(value: Union[str, time]) -> time:
        """Accept HH:MM or HH:MM:SS and return a time with seconds"""
        if isinstance(value, time):
            return value.replace(microsecond=0)
        value = value.strip()
        for fmt in ("%H:%M:%S", "%H:%M"):
            try:
                return datetime.strptime(value, fmt).time()
            except ValueError:
                continue
        raise ValueError(f"Invalid time '{value}', expected HH:MM or HH:MM:SS")


utcnow = DateTimeHelper.utcnow
