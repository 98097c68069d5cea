"""
Main entry point for timephase
"""
import sys
import signal
from threading import Event
from typing import List, Optional, TextIO

from . import __version__
from .core.config_service import config
from .core.clock_service import ClockService
from .core.logging_service import get_logger
from .core.scheduler import EdgeScheduler, parse_duration, format_duration
from .ui.statbar import StatusBar
from .ui.terminal_display import TerminalDisplay
from .ui.theme import Theme


EXIT_USAGE = 2


class ShutdownRequested(Exception):
    """Raised in the main thread by the SIGINT/SIGTERM handler"""


class Application:
    """
    Main application orchestrator.
    """

    def __init__(self, interval: Optional[str] = None, stream: Optional[TextIO] = None):
        """
        Initialize application.

        Args:
            interval: Duration string from the command line, overrides config
            stream: Output for the status bar, stdout by default
        """
        self._stream = stream
        # Load configuration
        config.reload()
        if interval is not None:
            config.set('display.interval', interval)

        # Initialize logging
        self._logger = get_logger('timephase')
        self._logger.set_level(config.get('logging.level', 'WARNING'))

        self._stop_event = Event()
        self._stopping = False
        self._clock: Optional[ClockService] = None
        self._scheduler: Optional[EdgeScheduler] = None
        self._display: Optional[TerminalDisplay] = None

    def _resolve_timing(self) -> EdgeScheduler:
        """
        Parse the configured durations into a scheduler.

        Raises:
            ValueError: If a duration is invalid or the interval is not positive
        """
        raw_interval = config.get('display.interval', '10ms')
        granularity = parse_duration(str(raw_interval))
        if granularity <= 0:
            raise ValueError(f"interval must be positive, got {raw_interval!r}")

        threshold = parse_duration(str(config.get('display.threshold', '0.1ms')))
        offset = parse_duration(str(config.get('display.offset', '-123us')))

        return EdgeScheduler(
            granularity,
            threshold,
            offset,
            sleep=self._stop_event.wait,
        )

    def _resolve_clear_width(self) -> int:
        """
        Columns blanked on exit.

        Raises:
            ValueError: If the setting is not a positive integer
        """
        raw = config.get('display.clear_width', Theme.CLEAR_WIDTH)
        try:
            width = int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"clear_width must be a positive integer, got {raw!r}") from None
        if width <= 0:
            raise ValueError(f"clear_width must be a positive integer, got {raw!r}")
        return width

    def _initialize(self) -> None:
        """Initialize clock, scheduler and display"""
        self._scheduler = self._resolve_timing()
        clear_width = self._resolve_clear_width()
        self._clock = ClockService(config.get('timezone'))

        self._logger.log_startup(__version__, {
            'timezone': self._clock.timezone,
            'interval': format_duration(self._scheduler.granularity),
            'threshold': format_duration(self._scheduler.threshold),
            'offset': format_duration(self._scheduler.offset),
        })

        self._display = TerminalDisplay(
            status_bar=StatusBar(self._clock),
            scheduler=self._scheduler,
            logger=self._logger,
            stop_event=self._stop_event,
            stream=self._stream,
            clear_width=clear_width,
        )

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown"""
        def signal_handler(signum, frame):
            # Never touch the event here, the main thread may hold its lock
            if self._stopping:
                return
            self._stopping = True
            self._logger.info(f"Received signal {signum}, shutting down")
            raise ShutdownRequested(signum)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def request_stop(self) -> None:
        """Ask the render loop to stop"""
        self._stopping = True
        self._stop_event.set()

    def run(self) -> int:
        """
        Run until a signal arrives.

        Returns:
            Process exit status
        """
        try:
            self._initialize()
        except ValueError as e:
            self._logger.error(f"Invalid setting: {e}")
            return EXIT_USAGE

        self._setup_signal_handlers()
        try:
            self._display.start()
            self._logger.info("Render loop running")
            self._stop_event.wait()
        except ShutdownRequested:
            pass
        except KeyboardInterrupt:
            self._logger.info("Keyboard interrupt received")
        finally:
            self.shutdown()
        return 1 if self._display.failed else 0

    def shutdown(self) -> None:
        """Stop the render loop, then clear the line"""
        self._stopping = True
        self._stop_event.set()
        if self._display:
            self._display.stop()
        self._logger.log_shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = sys.argv[1:] if argv is None else argv
    interval = args[0] if args else None
    if len(args) > 1:
        get_logger().warning(f"Ignoring extra arguments: {' '.join(args[1:])}")

    app = Application(interval)
    return app.run()


if __name__ == '__main__':
    sys.exit(main())
