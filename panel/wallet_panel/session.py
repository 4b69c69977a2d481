"""
Wallet Session: the containing view of the wallet panel.

Composes the connection manager, the send form and the wallet service the
way the wallet page does: connect a provider, show the (masked) address and
balance, and send tokens through the validated form.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .connection_manager import ConnectionManager, PendingSlot
from .display import AddressDisplay, mask_address
from .notifications import LoggingNotificationSink, NotificationSink, safe_notify
from .send_form import SendTokenForm
from .transfer_validator import ValidationResult
from .wallets.base_wallet import BaseWalletConnector, BaseWalletService, TransferReceipt

logger = logging.getLogger(__name__)


@dataclass
class WalletSnapshot:
    provider: Optional[str]
    address: str
    balance: str
    token_symbol: str


class WalletSession:
    def __init__(
        self,
        connector: BaseWalletConnector,
        wallet: BaseWalletService,
        notifier: Optional[NotificationSink] = None,
        token_symbol: str = "NETX",
        slot: Optional[PendingSlot] = None,
        mask_addresses: bool = True,
    ):
        self.wallet = wallet
        self.notifier = notifier or LoggingNotificationSink()
        self.token_symbol = token_symbol
        self.manager = ConnectionManager(connector, self.notifier, slot=slot, on_success=self._on_connected)
        self.form = SendTokenForm("0", self._on_send, token_symbol=token_symbol)
        self.address = AddressDisplay(masked=mask_addresses)
        self.connected_provider: Optional[str] = None
        self.balance = "0"
        self.last_receipt: Optional[TransferReceipt] = None
        self._outgoing: Optional[Tuple[str, str]] = None

    def _on_connected(self, provider: str):
        self.connected_provider = provider

    def _on_send(self, recipient_address: str, amount: str):
        self._outgoing = (recipient_address, amount)

    @property
    def is_connected(self) -> bool:
        return self.connected_provider is not None

    async def connect(self, provider: str) -> bool:
        """
        Connect through the connection manager, then load the wallet.
        A failed wallet load is reported but the connection still counts.
        """
        connected = await self.manager.connect(provider)
        if connected:
            await self._safe_refresh("Could not load wallet")
        return connected

    async def _safe_refresh(self, failure_message: str) -> bool:
        try:
            await self.refresh()
            return True
        except Exception as e:
            logger.error(f"Wallet refresh failed: {e}")
            safe_notify(self.notifier, False, failure_message, str(e))
            return False

    async def refresh(self) -> WalletSnapshot:
        """Re-read address and balance from the wallet service."""
        self.address.address = await self.wallet.get_address()
        self.balance = await self.wallet.get_balance()
        self.form.available_balance = self.balance
        return self.snapshot()

    def snapshot(self) -> WalletSnapshot:
        return WalletSnapshot(
            provider=self.connected_provider,
            address=self.address.address,
            balance=self.balance,
            token_symbol=self.token_symbol,
        )

    def receive_address(self) -> str:
        """Full address, for the receive view."""
        return self.address.address

    async def send(self, recipient_address: str, amount: str) -> ValidationResult:
        """
        Validate and dispatch a transfer.

        An invalid transfer leaves its inputs in the form and returns the
        failing result. A dispatch error after a valid submission is reported
        through the notifier; the result is still valid since the form
        accepted it.
        """
        self.form.open()
        self.form.recipient_address = recipient_address
        self.form.amount = amount
        result = self.form.submit()
        if not result.valid:
            return result

        recipient_address, amount = self._outgoing
        self._outgoing = None
        safe_notify(
            self.notifier, True, "Transaction Initiated",
            f"Sending {amount} {self.token_symbol} to {recipient_address[:8]}...",
        )
        self.last_receipt = None
        try:
            self.last_receipt = await self.wallet.send_transaction(recipient_address, amount)
        except Exception as e:
            logger.error(f"Transfer to {mask_address(recipient_address)} failed: {e}")
            safe_notify(self.notifier, False, "Transaction failed", str(e))
            return result

        logger.info(f"Transfer to {mask_address(recipient_address)} dispatched: {self.last_receipt.tx_hash}")
        # The transfer went through; a failed refresh only leaves the balance stale.
        await self._safe_refresh("Balance may be out of date")
        return result
