import sys
from logging import DEBUG, WARNING, Formatter, StreamHandler, getLogger

PACKAGE_LOGGER = "git_internals"


def configure_logging(*, debug: bool = False) -> None:
    """Send this package's log records to stderr.

    Safe to call more than once; the previous handler is replaced.
    """
    logger = getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = StreamHandler(sys.stderr)
    handler.setFormatter(Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(DEBUG if debug else WARNING)
