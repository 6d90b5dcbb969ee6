import logging
import sys

from pythonjsonlogger import jsonlogger

PACKAGE_LOGGER = 'scratch_game'
TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
JSON_FORMAT = '%(asctime)s %(levelname)s %(name)s %(module)s %(funcName)s %(lineno)d %(message)s'


def configure_logging(level='WARNING', fmt='text', stream=None):
    """
    Installs a single stream handler on the package logger.

    Args:
        level (str): Log level name.
        fmt (str): ``'json'`` for python-json-logger output, anything else for plain text.
        stream: Output stream, stderr by default so results on stdout stay clean.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = logging.StreamHandler(stream or sys.stderr)
    if fmt == 'json':
        formatter = jsonlogger.JsonFormatter(JSON_FORMAT)
    else:
        formatter = logging.Formatter(TEXT_FORMAT)
    handler.setFormatter(formatter)
    if logger.hasHandlers():
        logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, str(level).upper(), logging.WARNING))
    logger.propagate = False
    return logger
