"""
Status Bar - Renders one frame of the time phase display
"""
from typing import Dict, Optional

from ..core.clock_service import ClockService, NS_PER_SECOND
from .theme import Theme


TEN_MS = 10_000_000


def _draw_cursor(template: str, idx: int) -> str:
    """Copy of template with the glyph at idx replaced by the block"""
    if not 0 <= idx < len(template):
        raise IndexError(f"cursor {idx} outside ruler of {len(template)} ticks")
    return template[:idx] + Theme.BLOCK + template[idx + 1:]


def make_ruler(idx: int) -> str:
    """100-tick ruler with the cursor at idx"""
    return _draw_cursor(Theme.RULER_100, idx)


def make_ruler60(idx: int) -> str:
    """60-tick ruler with the cursor at idx"""
    return _draw_cursor(Theme.RULER_60, idx)


def cursor_positions(now_ns: int) -> Dict[str, int]:
    """
    Ruler positions for a timestamp.

    Returns:
        Dictionary with 'idx' (hundredths of the current second),
        'sec' (second of the minute) and 'i' (100-ruler cursor)
    """
    seconds, just_ns = divmod(now_ns, NS_PER_SECOND)
    idx = just_ns // TEN_MS
    sec = seconds % 60

    i = idx % Theme.RULER_LEN
    if i < 0:
        i = 0
    return {'idx': idx, 'sec': sec, 'i': i}


def flash_for(i: int) -> str:
    """Highlight during the first ticks of each second, blank otherwise"""
    return Theme.FLASH if i <= Theme.FLASH_LEN else Theme.BLANK


def make_statbar(now_ns: int, clock: Optional[ClockService] = None) -> str:
    """
    Render the status bar for a timestamp.

    The frame starts and ends with a carriage return and has no newline,
    so printing it overwrites the previous frame in place.

    Args:
        now_ns: Epoch time in nanoseconds
        clock: Clock service used to format the timestamp (local time if None)

    Returns:
        Status line
    """
    clock = clock or ClockService()
    pos = cursor_positions(now_ns)
    flash = flash_for(pos['i'])
    stamp = clock.format_timestamp(now_ns)

    return (
        f"\r {flash} {pos['idx']:{Theme.TICK_WIDTH}d} {stamp:>{Theme.TIME_WIDTH}} "
        f"{make_ruler60(pos['sec'])} {make_ruler(pos['i'])} {flash}\r"
    )


class StatusBar:
    """
    Renders frames for a fixed clock.
    """

    def __init__(self, clock: ClockService):
        self._clock = clock

    def render(self, now_ns: Optional[int] = None) -> str:
        """Frame for now_ns, or for the current time"""
        if now_ns is None:
            now_ns = self._clock.now_ns()
        return make_statbar(now_ns, self._clock)

    @staticmethod
    def clear_line(width: int = Theme.CLEAR_WIDTH) -> str:
        """Blank line used to erase the bar on exit"""
        return f"\r{' ' * width}\r"
