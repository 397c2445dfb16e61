from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Dict, Optional, Union

from simple_utilities.utils import datetime_utils
from simple_utilities.utils.datetime_utils import resolve_timezone

TimezoneLike = Optional[Union[str, tzinfo]]

DEFAULT_TRANSLATIONS: Dict[str, str] = {
    "year": "year",
    "years": "years",
    "month": "month",
    "months": "months",
    "day": "day",
    "days": "days",
    "hour": "hour",
    "hours": "hours",
    "minute": "minute",
    "minutes": "minutes",
    "second": "second",
    "seconds": "seconds",
    "just now": "just now",
    "and": " and ",
    "ago": "{} ago",
    "in": "in {}",
}

_RELATIVE_DAYS = {"now": 0, "today": 0, "tomorrow": 1, "yesterday": -1}


def _add_months(value: datetime, months: int) -> datetime:
    """Calendar month shift, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


class Plastic(datetime):
    """
    Timezone-aware datetime with fluent helpers.

        Plastic.parse("2024-01-31").add_months(1).format("%Y-%m-%d")   # 2024-02-29
        Plastic.now().sub_days(3).diff_for_humans()                     # "3 days ago"

    Every modifier returns a new instance. Second/minute/hour arithmetic moves
    absolute time; day/month/year arithmetic moves the wall clock.
    """

    _translations: Optional[Dict[str, str]] = None

    @classmethod
    def _wrap(cls, value: datetime, translations: Optional[Dict[str, str]] = None) -> "Plastic":
        instance = cls(
            value.year, value.month, value.day,
            value.hour, value.minute, value.second, value.microsecond,
            tzinfo=value.tzinfo, fold=value.fold,
        )
        if translations is not None:
            instance._translations = translations
        return instance

    def _derive(self, value: datetime) -> "Plastic":
        return self._wrap(value, self._translations)

    @classmethod
    def now(cls, tz: TimezoneLike = None) -> "Plastic":
        return cls._wrap(datetime_utils.now(tz))

    @classmethod
    def parse(cls, value: Union[str, datetime, date], tz: TimezoneLike = None) -> "Plastic":
        """
        Accepts ISO 8601 strings ("2024-01-01", "2024-01-01 12:34:56"),
        the keywords now/today/tomorrow/yesterday, or a date/datetime.
        Naive values are placed in `tz` (default APP_TIMEZONE).

        Raises:
            ValueError: If the string is not a recognised date.
        """
        zone = resolve_timezone(tz)

        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=zone)
            return cls._wrap(value)

        if isinstance(value, date):
            return cls._wrap(datetime.combine(value, time(), tzinfo=zone))

        keyword = value.strip().lower()
        if keyword in _RELATIVE_DAYS:
            current = datetime_utils.now(zone)
            if keyword != "now":
                current = datetime.combine(current.date() + timedelta(days=_RELATIVE_DAYS[keyword]), time(), tzinfo=zone)
            return cls._wrap(current)

        parsed = datetime.fromisoformat(value.strip())
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=zone)
        return cls._wrap(parsed)

    def copy(self) -> "Plastic":
        return self._derive(self)

    def format(self, fmt: str) -> str:
        return self.strftime(fmt)

    # Absolute time arithmetic
    def _shift_absolute(self, delta: timedelta) -> "Plastic":
        moved = (self.astimezone(timezone.utc) + delta).astimezone(self.tzinfo)
        return self._derive(moved)

    def add_seconds(self, seconds: int) -> "Plastic":
        return self._shift_absolute(timedelta(seconds=seconds))

    def sub_seconds(self, seconds: int) -> "Plastic":
        return self._shift_absolute(timedelta(seconds=-seconds))

    def add_minutes(self, minutes: int) -> "Plastic":
        return self._shift_absolute(timedelta(minutes=minutes))

    def sub_minutes(self, minutes: int) -> "Plastic":
        return self._shift_absolute(timedelta(minutes=-minutes))

    def add_hours(self, hours: int) -> "Plastic":
        return self._shift_absolute(timedelta(hours=hours))

    def sub_hours(self, hours: int) -> "Plastic":
        return self._shift_absolute(timedelta(hours=-hours))

    # Wall clock arithmetic
    def add_days(self, days: int) -> "Plastic":
        return self._derive(datetime.combine(self.date() + timedelta(days=days), self.timetz()))

    def sub_days(self, days: int) -> "Plastic":
        return self.add_days(-days)

    def add_months(self, months: int) -> "Plastic":
        return self._derive(_add_months(self, months))

    def sub_months(self, months: int) -> "Plastic":
        return self.add_months(-months)

    def add_years(self, years: int) -> "Plastic":
        return self.add_months(years * 12)

    def sub_years(self, years: int) -> "Plastic":
        return self.add_months(-years * 12)

    # Differences, `self - other`
    def diff_in_seconds(self, other: datetime, absolute: bool = True) -> int:
        diff = int(self.timestamp() - other.timestamp())
        return abs(diff) if absolute else diff

    def diff_in_minutes(self, other: datetime, absolute: bool = True) -> int:
        return int(self.diff_in_seconds(other, absolute) / 60)

    def diff_in_hours(self, other: datetime, absolute: bool = True) -> int:
        return int(self.diff_in_minutes(other, absolute) / 60)

    def diff_in_days(self, other: datetime, absolute: bool = True) -> int:
        """Whole calendar days on the wall clock of this instance's zone."""
        local_other = other.astimezone(self.tzinfo) if other.tzinfo else other.replace(tzinfo=self.tzinfo)
        delta = self.replace(tzinfo=None) - local_other.replace(tzinfo=None)
        days = int(delta / timedelta(days=1))
        return abs(days) if absolute else days

    # Boundaries
    def start_of_day(self) -> "Plastic":
        return self._derive(self.replace(hour=0, minute=0, second=0, microsecond=0))

    def end_of_day(self) -> "Plastic":
        return self._derive(self.replace(hour=23, minute=59, second=59, microsecond=0))

    def start_of_week(self) -> "Plastic":
        """Weeks run Monday to Sunday."""
        return self.sub_days(self.weekday()).start_of_day()

    def end_of_week(self) -> "Plastic":
        return self.add_days(6 - self.weekday()).end_of_day()

    def start_of_month(self) -> "Plastic":
        return self._derive(self.replace(day=1)).start_of_day()

    def end_of_month(self) -> "Plastic":
        last_day = calendar.monthrange(self.year, self.month)[1]
        return self._derive(self.replace(day=last_day)).end_of_day()

    def start_of_year(self) -> "Plastic":
        return self._derive(self.replace(month=1, day=1)).start_of_day()

    def end_of_year(self) -> "Plastic":
        return self._derive(self.replace(month=12, day=31)).end_of_day()

    # Checks relative to now, in this instance's zone
    def _now(self) -> "Plastic":
        return self.now(self.tzinfo)

    def is_today(self) -> bool:
        return self.date() == self._now().date()

    def is_tomorrow(self) -> bool:
        return self.date() == self._now().add_days(1).date()

    def is_yesterday(self) -> bool:
        return self.date() == self._now().sub_days(1).date()

    def is_this_week(self) -> bool:
        current = self._now()
        return current.start_of_week() <= self <= current.end_of_week()

    def is_this_month(self) -> bool:
        current = self._now()
        return current.start_of_month() <= self <= current.end_of_month()

    def is_this_year(self) -> bool:
        current = self._now()
        return current.start_of_year() <= self <= current.end_of_year()

    def lt(self, other: Optional[datetime] = None) -> bool:
        return self < (other if other is not None else self._now())

    def gt(self, other: Optional[datetime] = None) -> bool:
        return self > (other if other is not None else self._now())

    def is_in_between(self, start: datetime, end: datetime) -> bool:
        """Exclusive on both ends."""
        return self.gt(start) and self.lt(end)

    def diff_for_humans(self, other: Optional[datetime] = None, absolute: bool = False, segments: int = 2) -> str:
        """
        "2 days and 3 hours ago", "in 5 minutes", or "just now".

        Only the `segments` largest non-zero units are shown.
        """
        translations = self.get_translations()
        compare_to = other.astimezone(self.tzinfo) if other is not None else self._now()

        start, end = sorted([self.replace(tzinfo=None), compare_to.replace(tzinfo=None)])
        months = (end.year - start.year) * 12 + end.month - start.month
        if _add_months(start, months) > end:
            months -= 1
        remainder = end - _add_months(start, months)
        years, months = divmod(months, 12)
        hours, rest = divmod(remainder.seconds, 3600)
        minutes, seconds = divmod(rest, 60)

        units = [
            (years, "year"),
            (months, "month"),
            (remainder.days, "day"),
            (hours, "hour"),
            (minutes, "minute"),
            (seconds, "second"),
        ]
        parts = [
            f"{amount} {translations[unit if amount == 1 else unit + 's']}"
            for amount, unit in units
            if amount > 0
        ][:segments]

        if not parts:
            return translations["just now"]

        result = parts[0] if len(parts) == 1 else ", ".join(parts[:-1]) + translations["and"] + parts[-1]
        if absolute:
            return result

        tense = "ago" if self < compare_to else "in"
        return translations[tense].format(result)

    def get_translations(self) -> Dict[str, str]:
        return dict(self._translations or DEFAULT_TRANSLATIONS)

    def set_translations(self, translations: Dict[str, str]) -> "Plastic":
        """Copy of this instance using `translations` on top of the defaults."""
        return self._wrap(self, {**DEFAULT_TRANSLATIONS, **translations})
