"""
Mock wallet back-end.
Connects to any provider instantly (or after a configurable delay) and keeps
an in-memory balance, so the panel can run without a wallet bridge.
"""
import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from ..errors import ProviderConnectionError, WalletServiceError
from .base_wallet import BaseWalletConnector, BaseWalletService, TransferReceipt

logger = logging.getLogger(__name__)

MOCK_ADDRESS = "0x7a3B9c2D4e5F60718293aBcDeF0123456789AbCd"
MOCK_BALANCE = "2500.00"


class MockWallet(BaseWalletConnector, BaseWalletService):
    """
    In-memory connector and wallet service.

    Providers listed in `failing_providers` raise ProviderConnectionError;
    providers listed in `declining_providers` resolve to False.
    """

    def __init__(
        self,
        address: str = MOCK_ADDRESS,
        balance: str = MOCK_BALANCE,
        failing_providers: Optional[Iterable[str]] = None,
        declining_providers: Optional[Iterable[str]] = None,
        latency: float = 0.0,
    ):
        self.address = address
        self._balance = Decimal(balance)
        self.failing_providers = set(failing_providers or [])
        self.declining_providers = set(declining_providers or [])
        self.latency = latency
        self.connected_provider: Optional[str] = None
        self.sent = []
        logger.info(f"MockWallet running in MOCK MODE. Balance: {balance}")

    async def connect_provider(self, provider_id: str) -> bool:
        if self.latency:
            await asyncio.sleep(self.latency)
        if provider_id in self.failing_providers:
            raise ProviderConnectionError(provider_id, "mock provider unavailable")
        if provider_id in self.declining_providers:
            logger.info(f"[MOCK] {provider_id} declined the connection")
            return False
        self.connected_provider = provider_id
        logger.info(f"[MOCK] Connected to {provider_id}")
        return True

    async def get_address(self) -> str:
        return self.address

    async def get_balance(self) -> str:
        return str(self._balance)

    async def send_transaction(self, recipient_address: str, amount: str) -> TransferReceipt:
        try:
            value = Decimal(amount)
        except InvalidOperation:
            raise WalletServiceError("send", f"invalid amount {amount!r}")
        if value > self._balance:
            raise WalletServiceError("send", "insufficient funds")

        self._balance -= value
        tx_hash = f"MockTx_{len(self.sent) + 1}_{recipient_address[:8]}"
        receipt = TransferReceipt(recipient_address=recipient_address, amount=amount, tx_hash=tx_hash)
        self.sent.append(receipt)
        logger.info(f"[MOCK] Sent {amount} to {recipient_address}. TxHash: {tx_hash}")
        return receipt
