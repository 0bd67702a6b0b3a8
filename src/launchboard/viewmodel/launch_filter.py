"""Filter/sort modes for the launch list and the pure function that applies them."""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence, Union

from launchboard.models.launch import LaunchRecord
from launchboard.utils.time import utc_now


class LaunchFilter(str, Enum):
    SUCCESSFUL = "successful"
    FAILED = "failed"
    ASCENDING = "ascending"
    DESCENDING = "descending"


DEFAULT_FILTER = LaunchFilter.ASCENDING


def filter_launches(
    launches: Sequence[LaunchRecord],
    mode: Union[LaunchFilter, str],
    now: Optional[datetime] = None,
) -> List[LaunchRecord]:
    """
    Project a launch list through a filter mode.

    SUCCESSFUL and FAILED keep only launches whose success flag is exactly
    True or False; launches with an unknown outcome appear in neither.
    ASCENDING and DESCENDING are stable sorts on date_utc, where a launch
    without a date sorts as if it happened at `now`.

    Args:
        launches: Decoded launch list (left untouched)
        mode: Active filter, as a LaunchFilter or its string value
        now: Stand-in date for undated launches (timezone-aware). Defaults
            to the current UTC time, so undated launches have no stable
            position relative to launches dated near the present.

    Returns:
        New list in display order

    Raises:
        ValueError: If mode is not a filter name or now is naive
    """
    mode = LaunchFilter(mode)
    if now is not None and now.tzinfo is None:
        raise ValueError("Naive datetime not allowed for now")

    if mode is LaunchFilter.SUCCESSFUL:
        return [launch for launch in launches if launch.success is True]
    if mode is LaunchFilter.FAILED:
        return [launch for launch in launches if launch.success is False]

    reference = now or utc_now()
    return sorted(
        launches,
        key=lambda launch: launch.date_utc or reference,
        reverse=mode is LaunchFilter.DESCENDING,
    )
