"""
HTTP wallet back-end.
Talks to a wallet bridge service that fronts the browser/extension wallets.

Endpoints:
  POST /providers/{provider}/connect -> {"connected": bool}
  GET  /wallet                       -> {"address": str, "balance": str}
  POST /transfers                    -> {"tx_hash": str}
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ..errors import ProviderConnectionError, WalletServiceError
from .base_wallet import BaseWalletConnector, BaseWalletService, TransferReceipt

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_URL = "http://localhost:8080"


class HttpWallet(BaseWalletConnector, BaseWalletService):
    def __init__(self, base_url: str = DEFAULT_SERVICE_URL, timeout: float = 30.0,
                 client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def connect_provider(self, provider_id: str) -> bool:
        url = f"{self.base_url}/providers/{quote(provider_id, safe='')}/connect"
        try:
            resp = await self.client.post(url, json={})
            resp.raise_for_status()
            return bool(resp.json().get("connected", False))
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderConnectionError(provider_id, str(e)) from e

    async def _get_wallet(self) -> Dict[str, Any]:
        try:
            resp = await self.client.get(f"{self.base_url}/wallet")
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise WalletServiceError("wallet lookup", str(e)) from e

    async def get_address(self) -> str:
        data = await self._get_wallet()
        return str(data.get("address", ""))

    async def get_balance(self) -> str:
        data = await self._get_wallet()
        return str(data.get("balance", "0"))

    async def send_transaction(self, recipient_address: str, amount: str) -> TransferReceipt:
        payload = {"recipient_address": recipient_address, "amount": amount}
        try:
            resp = await self.client.post(f"{self.base_url}/transfers", json=payload)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise WalletServiceError("send", str(e)) from e

        tx_hash = data.get("tx_hash")
        if not tx_hash:
            raise WalletServiceError("send", "response did not include a transaction hash")
        logger.info(f"Transfer of {amount} to {recipient_address} submitted. TxHash: {tx_hash}")
        return TransferReceipt(recipient_address=recipient_address, amount=amount, tx_hash=tx_hash)

    async def close(self):
        await self.client.aclose()
