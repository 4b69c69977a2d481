"""
Connection Manager: mediates connection attempts to external wallet providers.
At most one attempt is in flight per pending slot; further connect requests
made while an attempt is pending are ignored.
"""
import enum
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from .notifications import LoggingNotificationSink, NotificationSink, safe_notify
from .wallets.base_wallet import BaseWalletConnector

logger = logging.getLogger(__name__)


class ConnectionStatus(enum.Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ConnectionAttempt:
    provider: str
    status: ConnectionStatus = ConnectionStatus.PENDING


class PendingSlot:
    """
    Single-slot holder for the in-flight connection attempt.

    Managers sharing one slot are mutually exclusive. The check-and-set in
    try_acquire is atomic so the slot also holds when driven from threads.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._attempt: Optional[ConnectionAttempt] = None

    def try_acquire(self, provider: str) -> bool:
        with self._lock:
            if self._attempt is not None:
                return False
            self._attempt = ConnectionAttempt(provider=provider)
            return True

    def release(self) -> None:
        with self._lock:
            self._attempt = None

    @property
    def attempt(self) -> Optional[ConnectionAttempt]:
        return self._attempt

    @property
    def current(self) -> Optional[str]:
        attempt = self._attempt
        return attempt.provider if attempt else None


class ConnectionManager:
    """
    Connects to wallet providers through a BaseWalletConnector.

    Outcomes are reported to the NotificationSink; connector errors are
    converted to a failed attempt and never propagate to the caller.
    """

    def __init__(
        self,
        connector: BaseWalletConnector,
        notifier: Optional[NotificationSink] = None,
        slot: Optional[PendingSlot] = None,
        on_success: Optional[Callable[[str], None]] = None,
    ):
        self.connector = connector
        self.notifier = notifier or LoggingNotificationSink()
        self.slot = slot if slot is not None else PendingSlot()
        self.on_success = on_success

    def currently_connecting(self) -> Optional[str]:
        """Provider of the pending attempt, or None when idle."""
        return self.slot.current

    def current_attempt(self) -> Optional[ConnectionAttempt]:
        return self.slot.attempt

    def is_connecting(self, provider: str) -> bool:
        return self.slot.current == provider

    async def connect(self, provider: str) -> bool:
        """
        Connect to `provider`.

        Returns True on success. Returns False on failure, and also when
        another attempt is already pending, in which case nothing happens.
        """
        # Guard runs before the first await.
        if not self.slot.try_acquire(provider):
            logger.info(
                f"Ignoring connect request for {provider}: "
                f"{self.slot.current} connection already pending"
            )
            return False

        attempt = self.slot.attempt
        connected = False
        logger.info(f"Connecting to {provider}...")
        try:
            connected = bool(await self.connector.connect_provider(provider))
        except Exception as e:
            logger.error(f"Error connecting to {provider}: {e}")
        finally:
            attempt.status = ConnectionStatus.SUCCEEDED if connected else ConnectionStatus.FAILED
            self.slot.release()

        if connected:
            logger.info(f"Connected to {provider}")
            safe_notify(self.notifier, True, f"Connected to {provider}", "Wallet connected successfully")
            if self.on_success:
                try:
                    self.on_success(provider)
                except Exception as e:
                    logger.error(f"Success callback failed for {provider}: {e}")
            return True

        logger.warning(f"Connection to {provider} failed")
        safe_notify(self.notifier, False, f"Failed to connect to {provider}", "Please try again")
        return False
