"""Logging setup for command line runs."""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
HANDLER_NAME = "issue_feed"


def setup_logging(level: int | str = logging.INFO) -> None:
    """Send log records to stderr with a timestamp and level prefix.

    A handler installed by an earlier call is replaced, so repeated runs in
    one process log once, to the current stderr.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
