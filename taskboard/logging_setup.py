import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    Give the root logger a stderr handler unless something already configured it.

    Handlers installed by the hosting server (or a test runner) are left alone;
    only the ``taskboard`` logger level follows ``level`` in that case.
    """
    logging.getLogger("taskboard").setLevel(getattr(logging, level.upper(), logging.INFO))

    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    # SQL echo is governed by DEBUG, not by the app log level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
