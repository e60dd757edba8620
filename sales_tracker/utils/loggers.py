import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name="sales_tracker", level="INFO"):
    """
    Configure and return the package logger. Module loggers created with
    logging.getLogger(__name__) under sales_tracker.* propagate to it.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return logger
