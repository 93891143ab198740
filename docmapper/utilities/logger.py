"""
The "docmapper" logger.

Saves and queries log their traffic at DEBUG, one line per store round-trip, prefixed with the
<database>.<collection> namespace. Nothing below WARNING is emitted unless the level is lowered.
"""

import logging

logger: logging.Logger = logging.getLogger('docmapper')
logger.setLevel(logging.WARNING)

def set_logger(custom_logger: logging.Logger) -> None:
    """ Route docmapper's traces to another logger, e.g. an application's own. """
    global logger
    logger = custom_logger

def set_log_level(level: int) -> None:
    """ Set the level of the docmapper logger. Use logging.DEBUG to see every save and query. """
    logger.setLevel(level)
