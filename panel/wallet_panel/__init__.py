# Wallet Panel
"""Wallet session and transfer-validation core."""
from .connection_manager import ConnectionAttempt, ConnectionManager, ConnectionStatus, PendingSlot
from .display import AddressDisplay, mask_address
from .notifications import LoggingNotificationSink, NotificationSink
from .send_form import SendTokenForm
from .session import WalletSession, WalletSnapshot
from .transfer_validator import TransferRequest, ValidationReason, ValidationResult, validate

__all__ = [
    "AddressDisplay",
    "ConnectionAttempt",
    "ConnectionManager",
    "ConnectionStatus",
    "LoggingNotificationSink",
    "NotificationSink",
    "PendingSlot",
    "SendTokenForm",
    "TransferRequest",
    "ValidationReason",
    "ValidationResult",
    "WalletSession",
    "WalletSnapshot",
    "mask_address",
    "validate",
]
