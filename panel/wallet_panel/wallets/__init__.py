import os
import logging
from typing import Optional

from .base_wallet import BaseWalletConnector, BaseWalletService, TransferReceipt
from .http_wallet import HttpWallet
from .mock_wallet import MockWallet

logger = logging.getLogger(__name__)

__all__ = [
    "BaseWalletConnector",
    "BaseWalletService",
    "TransferReceipt",
    "HttpWallet",
    "MockWallet",
    "get_wallet_backend",
]


def get_wallet_backend(service_url: Optional[str] = None, use_mock: Optional[bool] = None):
    """
    Factory for the wallet back-end.

    Mock mode is on unless WALLET_PANEL_USE_MOCK=false; the bridge URL comes
    from `service_url` or WALLET_PANEL_SERVICE_URL.
    """
    if use_mock is None:
        use_mock = os.getenv("WALLET_PANEL_USE_MOCK", "true").lower() == "true"
    if use_mock:
        return MockWallet()

    url = service_url or os.getenv("WALLET_PANEL_SERVICE_URL", "http://localhost:8080")
    logger.info(f"Using wallet bridge at {url}")
    return HttpWallet(base_url=url)
