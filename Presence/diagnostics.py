# 19.10.26

import logging
from collections import deque


logger = logging.getLogger(__name__)


class DiagnosticsClient:
    """Collects exceptions raised at the persistence and light boundaries"""
    def __init__(self, log=None, keep=100):
        self.log = log or logger
        self.exceptions = deque(maxlen=keep)

    def track_exception(self, exc: BaseException):
        self.exceptions.append(exc)
        self.log.error("Tracked exception: %s", exc, exc_info=(type(exc), exc, exc.__traceback__))
