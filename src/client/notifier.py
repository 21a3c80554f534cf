"""Default Notifier: user feedback goes to the log."""

import logging

logger = logging.getLogger(__name__)

_LEVELS = {
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class LoggingNotifier:
    def notify(self, kind: str, message: str) -> None:
        logger.log(_LEVELS.get(kind, logging.INFO), message, extra={"kind": kind})
