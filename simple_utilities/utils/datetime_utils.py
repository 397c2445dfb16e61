from datetime import datetime, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

from simple_utilities import config


def resolve_timezone(tz: Optional[Union[str, tzinfo]] = None) -> tzinfo:
    """Turn a zone name (or None for APP_TIMEZONE) into a tzinfo."""
    if tz is None:
        tz = config.APP_TIMEZONE
    if isinstance(tz, tzinfo):
        return tz
    if tz.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(tz)


def now(tz: Optional[Union[str, tzinfo]] = None) -> datetime:
    return datetime.now(resolve_timezone(tz))
