import sys
from logging import getLogger
from typing import Sequence

from .cli import parse_args, run
from .config import settings_from_environ
from .log_config import configure_logging

LOG = getLogger(__name__)


def main(args: Sequence[str] | None = None) -> None:
    is_tty = sys.stdout.isatty()
    configure_logging()
    try:
        config = parse_args(args, is_tty=is_tty, settings=settings_from_environ())
        if config.debug:
            configure_logging(debug=True)

        output = run(config)
    except Exception as e:
        LOG.fatal(str(e))
        sys.exit(1)

    for chunk in output:
        print(chunk)
