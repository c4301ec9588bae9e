"""
Logging for Custom Glasses Maker.

Two package loggers share one set of handlers: ``glasses_maker`` for the
Streamlit layer and ``glasses_core`` for the Streamlit-free core, whose
modules log through ``logging.getLogger(__name__)``.
"""

import logging
import sys
import time
from functools import wraps

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

logger = logging.getLogger('glasses_maker')
core_logger = logging.getLogger('glasses_core')


def _make_handlers(level, log_file):
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level=logging.INFO, log_file=None):
    """
    (Re)configure both package loggers.

    Args:
        level: Logging level for loggers and handlers
        log_file: Optional path that receives a copy of the console output

    Returns:
        The ``glasses_maker`` logger
    """
    handlers = _make_handlers(level, log_file)
    for target in (logger, core_logger):
        # Streamlit re-imports on rerun; never stack handlers
        target.handlers = list(handlers)
        target.setLevel(level)
        target.propagate = False
    return logger


def get_logger(name):
    """Child of the app logger, e.g. ``get_logger("canvas")`` -> ``glasses_maker.canvas``."""
    return logger.getChild(name)


def log_exceptions(func):
    """Log any exception escaping ``func`` (with traceback) on its module's logger, then re-raise."""
    func_logger = get_logger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception:
            func_logger.exception(f"{func.__qualname__} raised")
            raise
    return wrapper


def log_performance(func):
    """Debug-log how long ``func`` took, whether it returned or raised."""
    func_logger = get_logger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            func_logger.debug(f"{func.__qualname__} failed after {time.perf_counter() - start:.3f}s")
            raise
        func_logger.debug(f"{func.__qualname__} completed in {time.perf_counter() - start:.3f}s")
        return result
    return wrapper


setup_logging(level=logging.INFO)
