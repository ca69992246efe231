import logging

logger = logging.getLogger("credstrategy")
