"""
Clock Service - Time source and timestamp formatting
Handles nanosecond wall-clock reads and timezone-aware formatting
"""
import time
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .logging_service import get_logger


NS_PER_SECOND = 1_000_000_000
NS_PER_SUBSECOND_DIGIT = 100_000  # four sub-second digits

TIME_FMT = '%Y-%m-%d %H:%M:%S'


class ClockService:
    """
    Wall-clock time service with optional timezone.
    """

    def __init__(self, timezone: Optional[str] = None):
        """
        Initialize clock service with timezone.

        Args:
            timezone: IANA timezone string (e.g., 'Europe/Berlin'),
                None for the local timezone
        """
        self._timezone = timezone
        self._tz_obj: Optional[tzinfo] = None
        self._load_timezone()

    def _load_timezone(self) -> None:
        """Load timezone object, fallback to local time on error"""
        if not self._timezone:
            self._tz_obj = None
            return
        try:
            self._tz_obj = ZoneInfo(self._timezone)
        except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
            get_logger().warning(f"Invalid timezone '{self._timezone}', using local time: {e}")
            self._timezone = None
            self._tz_obj = None

    def now_ns(self) -> int:
        """Current wall-clock time in nanoseconds since the epoch"""
        return time.time_ns()

    def to_datetime(self, now_ns: int) -> datetime:
        """
        Convert epoch nanoseconds to a datetime in the configured timezone.

        Sub-microsecond precision is dropped; use format_timestamp for display.
        """
        seconds, ns = divmod(now_ns, NS_PER_SECOND)
        dt = datetime.fromtimestamp(seconds, self._tz_obj)
        return dt.replace(microsecond=ns // 1000)

    def format_timestamp(self, now_ns: int) -> str:
        """
        Format epoch nanoseconds as 'YYYY-MM-DD HH:MM:SS.ffff'.

        The four sub-second digits are truncated, never rounded up.
        """
        seconds, ns = divmod(now_ns, NS_PER_SECOND)
        dt = datetime.fromtimestamp(seconds, self._tz_obj)
        return f"{dt.strftime(TIME_FMT)}.{ns // NS_PER_SUBSECOND_DIGIT:04d}"

    @property
    def timezone(self) -> Optional[str]:
        """Get current timezone string, None when local"""
        return self._timezone
