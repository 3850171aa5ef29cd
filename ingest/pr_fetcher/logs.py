import logging
import threading
from contextlib import contextmanager
from typing import Iterator

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

SEARCH_DEPRECATION_NOTE = (
    "Note: GitHub Search API is deprecated and will be removed in September 2025."
)


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr in the same format for every command."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


class OneTimeNotice(logging.Filter):
    """
    Collapse a noisy, repeated warning into a single short notice.

    Records whose message contains every one of ``needles`` and that were
    logged from the thread which created the filter are matched. The first
    match is rewritten to ``notice``; later matches are dropped. Other records,
    including those from concurrent calls on other threads, pass through
    untouched.
    """

    def __init__(self, *needles: str, notice: str):
        super().__init__()
        self.needles = needles
        self.notice = notice
        self.shown = False
        self.thread = threading.get_ident()

    def filter(self, record: logging.LogRecord) -> bool:
        if record.thread != self.thread:
            return True
        message = record.getMessage()
        if not all(n in message for n in self.needles):
            return True
        if self.shown:
            return False
        self.shown = True
        record.msg = self.notice
        record.args = ()
        return True


def search_deprecation_filter() -> OneTimeNotice:
    return OneTimeNotice("deprecated", "search/issues", notice=SEARCH_DEPRECATION_NOTE)


@contextmanager
def filtered(logger: logging.Logger, flt: logging.Filter) -> Iterator[logging.Filter]:
    """Attach ``flt`` to ``logger`` for the duration of the block only."""
    logger.addFilter(flt)
    try:
        yield flt
    finally:
        logger.removeFilter(flt)
