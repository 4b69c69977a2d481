from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class TransferReceipt:
    recipient_address: str
    amount: str
    tx_hash: str


class BaseWalletConnector(ABC):
    """
    Abstract base class for external wallet provider connectors.
    """

    @abstractmethod
    async def connect_provider(self, provider_id: str) -> bool:
        """
        Connect to the given provider.
        Returns True when connected, False when the provider declined.
        May raise on transport or provider errors.
        """
        pass


class BaseWalletService(ABC):
    """
    Abstract base class for the wallet behind a connected provider.
    """

    @abstractmethod
    async def get_address(self) -> str:
        """Get the wallet's public address."""
        pass

    @abstractmethod
    async def get_balance(self) -> str:
        """Fetch the current balance as a decimal string."""
        pass

    @abstractmethod
    async def send_transaction(self, recipient_address: str, amount: str) -> TransferReceipt:
        """
        Dispatch a transfer.
        Returns a receipt carrying the transaction hash.
        """
        pass

    async def close(self):
        """Release any resources held by the service."""
        pass
