import logging
from logging import Logger


"""
Logger setup for MagicDB.
this can be used to log messages to the console, from any part of the program.

author: Cole McGregor
date: 2025-09-20
version: 0.1.0
"""

# LOGGER_NAME is used to identify the logger.
LOGGER_NAME = "magicdb"

# message used for every statement sent to the database
DATABASE_QUERY_LOG_MSG = "Database query: %s"

#now we create the logger from the LOGGER_NAME
logger: Logger = logging.getLogger(LOGGER_NAME)  # import this anywhere


def get_logger(name: str) -> Logger:
    """
    Child logger (magicdb.<name>) that shares the package handler.
    """
    return logger.getChild(name)


def setup(level: str = "INFO") -> None:
    """
    Setup the logger.
    """
    if logger.handlers:
        return  # already configured
    # set the level of the logger
    logger.setLevel(level.upper())

    # create a formatter
    fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    # create a stream handler
    h = logging.StreamHandler()
    # set the formatter
    h.setFormatter(logging.Formatter(fmt))
    # add the handler to the logger
    logger.addHandler(h)

    # Child loggers (magicdb.*) propagate up to this handler, but not past it
    logger.propagate = False
