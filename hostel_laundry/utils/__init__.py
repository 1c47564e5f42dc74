from hostel_laundry.utils.datetime_utils import DateTimeHelper, WEEKDAY_NAMES, utcnow

__all__ = ["DateTimeHelper", "WEEKDAY_NAMES", "utcnow"]
