import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class NotificationSink(ABC):
    """
    Surfaces connection and transfer outcomes to the user.
    """

    @abstractmethod
    def notify_success(self, message: str, detail: str = "") -> None:
        pass

    @abstractmethod
    def notify_failure(self, message: str, detail: str = "") -> None:
        pass


class LoggingNotificationSink(NotificationSink):
    """Writes notifications to the log. Used when no UI is attached."""

    def notify_success(self, message: str, detail: str = "") -> None:
        logger.info(f"{message}: {detail}" if detail else message)

    def notify_failure(self, message: str, detail: str = "") -> None:
        logger.warning(f"{message}: {detail}" if detail else message)


def safe_notify(sink: NotificationSink, success: bool, message: str, detail: str = "") -> None:
    """
    Deliver a notification, logging any error raised by the sink instead of
    propagating it.
    """
    try:
        if success:
            sink.notify_success(message, detail)
        else:
            sink.notify_failure(message, detail)
    except Exception as e:
        logger.error(f"Notification sink failed for '{message}': {e}")
