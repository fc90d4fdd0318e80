import logging
import sys

LOGGER_NAME = "stockledger"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stdout handler to the package logger.

    Safe to call more than once (app startup, CLI tools, tests); only the level
    is updated after the first call.
    """
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        log.addHandler(h)
    return log
