import logging

logger = logging.getLogger("utf8str")
