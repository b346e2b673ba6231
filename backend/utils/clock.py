"""Time source for the fixed reporting zone."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo


class Clock:
    """Reports "now" in the zone all period boundaries are computed in.

    Services take a Clock instead of calling ``datetime.now`` so tests can
    pin the current instant (see ``tests.fixtures.FixedClock``).
    """

    def __init__(self, zone: ZoneInfo | str):
        self.zone = ZoneInfo(zone) if isinstance(zone, str) else zone

    def now(self) -> datetime:
        """Current instant as an aware datetime in :attr:`zone`."""
        return datetime.now(timezone.utc).astimezone(self.zone)
