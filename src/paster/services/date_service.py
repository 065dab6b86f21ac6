import datetime
from typing import Optional

from paster.config import DateConfig

ONE_DAY = datetime.timedelta(days=1)


def resolve_day(day: str, now: Optional[datetime.datetime] = None) -> datetime.datetime:
    """Map a relative day keyword to a datetime.

    yesterday/today/tomorrow shift UTC now by one day. next-week is the
    Monday of the following week in local time, so a Monday yields the
    Monday seven days later, never the same day.
    """
    if day == "next-week":
        local_now = now if now is not None else datetime.datetime.now().astimezone()
        days_since_monday = local_now.weekday()
        return local_now + datetime.timedelta(days=7 - days_since_monday)

    utc_now = now if now is not None else datetime.datetime.now(datetime.timezone.utc)
    if day == "yesterday":
        return utc_now - ONE_DAY
    if day == "today":
        return utc_now
    if day == "tomorrow":
        return utc_now + ONE_DAY
    raise ValueError(f"unknown day '{day}'")


def format_day(config: DateConfig, now: Optional[datetime.datetime] = None) -> str:
    return resolve_day(config.day, now).strftime(config.fmt)
