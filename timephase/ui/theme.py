"""
Theme - Glyphs, widths and ruler templates for the status bar
"""


class Theme:
    """
    Box-drawing theme for the terminal status bar.
    """

    # Cursor glyph drawn over a ruler tick
    BLOCK = '█'

    # Flash shown during the first ticks of every second
    FLASH_LEN = 5
    FLASH = BLOCK * 10
    BLANK = ' ' * 10

    # Ruler templates; heavy ticks every tenth (100) or fifth (60) position
    RULER_100 = (
        '├┴┬┴┬┴┬┴┬┸┬┴┬┴┬┴┬┴┬┸┬┴┬┴┬┴┬┴┬┸┬┴┬┴┬┴┬┴┬┸┬┴┬┴┬┴┬┴┬┸'
        '┬┴┬┴┬┴┬┴┬┸┬┴┬┴┬┴┬┴┬┸┬┴┬┴┬┴┬┴┬┸┬┴┬┴┬┴┬┴┬┸┬┴┬┴┬┴┬┴┬┤'
    )
    RULER_60 = '├┴┬┴┬┸┬┴┬┴┰┴┬┴┬┸┬┴┬┴┰┴┬┴┬┸┬┴┬┴┰┴┬┴┬┸┬┴┬┴┰┴┬┴┬┸┬┴┬┴┰┴┬┴┬┸┬┴┬┤'
    RULER_LEN = 100

    # Column widths of the numeric fields
    TICK_WIDTH = 6
    TIME_WIDTH = 25

    # Columns blanked when the bar is cleared
    CLEAR_WIDTH = 208
