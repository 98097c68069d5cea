"""
Terminal Display - Background render loop with in-place line updates
"""
import sys
from threading import Thread, Event
from typing import Optional, TextIO

from ..core.scheduler import EdgeScheduler
from ..core.logging_service import LoggingService
from .statbar import StatusBar
from .theme import Theme


class TerminalDisplay:
    """
    Draws the status bar on a terminal line until stopped.
    """

    def __init__(
        self,
        status_bar: StatusBar,
        scheduler: EdgeScheduler,
        logger: LoggingService,
        stop_event: Optional[Event] = None,
        stream: Optional[TextIO] = None,
        clear_width: int = Theme.CLEAR_WIDTH,
    ):
        """
        Initialize the display.

        Args:
            status_bar: Frame renderer
            scheduler: Edge scheduler pacing the frames; its sleep should
                be stop_event.wait so a shutdown interrupts the wait
            logger: Logging service
            stop_event: Cancellation event shared with the application
            stream: Output stream, stdout by default
            clear_width: Columns blanked on cleanup
        """
        self._status_bar = status_bar
        self._scheduler = scheduler
        self._logger = logger
        self._stop_event = stop_event or Event()
        self._stream = stream
        self._clear_width = clear_width

        self._thread: Optional[Thread] = None
        self._frames = 0
        self._failed = False

    @property
    def failed(self) -> bool:
        """True if the render loop stopped on an error"""
        return self._failed

    @property
    def frames(self) -> int:
        """Number of frames drawn so far"""
        return self._frames

    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _render_loop(self) -> None:
        """Wait for the next edge, draw, repeat"""
        self._logger.debug(f"Render loop started: {self._scheduler!r}")
        try:
            while not self._stop_event.is_set():
                self._scheduler.wait()
                if self._stop_event.is_set():
                    break
                out = self._out()
                out.write(self._status_bar.render())
                out.flush()
                self._frames += 1
        except BrokenPipeError:
            self._logger.debug("Output closed, stopping render loop")
            self._stop_event.set()
        except Exception as e:
            self._logger.exception(f"Render loop error: {e}")
            self._failed = True
            self._stop_event.set()
        self._logger.debug(f"Render loop stopped after {self._frames} frames")

    def start(self) -> None:
        """Start the render thread"""
        if self.is_running():
            return

        self._thread = Thread(target=self._render_loop, name='timephase-render', daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        """
        Stop the render thread and clear the line.

        The line is cleared only after the thread has been joined so no
        frame lands on top of the blanked line.
        """
        self._stop_event.set()

        if self._thread:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                self._logger.warning("Render thread did not stop in time")
            self._thread = None

        self.clear()

    def clear(self) -> None:
        """Blank the status line"""
        try:
            out = self._out()
            out.write(StatusBar.clear_line(self._clear_width))
            out.flush()
        except (BrokenPipeError, ValueError) as e:
            self._logger.debug(f"Could not clear status line: {e}")

    def is_running(self) -> bool:
        """Check if the render thread is alive"""
        return self._thread is not None and self._thread.is_alive()
