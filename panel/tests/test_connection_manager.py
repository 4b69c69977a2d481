import asyncio
import unittest
from unittest.mock import MagicMock, AsyncMock

from wallet_panel.connection_manager import ConnectionManager, ConnectionStatus, PendingSlot
from wallet_panel.errors import ProviderConnectionError
from wallet_panel.wallets.base_wallet import BaseWalletConnector


class GatedConnector(BaseWalletConnector):
    """Connector whose calls stay pending until the test resolves them."""

    def __init__(self):
        self.calls = []
        self.gates = {}

    async def connect_provider(self, provider_id: str) -> bool:
        self.calls.append(provider_id)
        gate = asyncio.get_running_loop().create_future()
        self.gates[provider_id] = gate
        return await gate


class TestConnectionManager(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.connector = MagicMock()
        self.connector.connect_provider = AsyncMock(return_value=True)
        self.notifier = MagicMock()
        self.on_success = MagicMock()
        self.manager = ConnectionManager(self.connector, self.notifier, on_success=self.on_success)

    async def test_connect_success(self):
        """Successful connection notifies, calls back and clears the slot."""
        result = await self.manager.connect("Phantom")

        self.assertTrue(result)
        self.connector.connect_provider.assert_awaited_once_with("Phantom")
        self.notifier.notify_success.assert_called_once_with("Connected to Phantom", "Wallet connected successfully")
        self.notifier.notify_failure.assert_not_called()
        self.on_success.assert_called_once_with("Phantom")
        self.assertIsNone(self.manager.currently_connecting())

    async def test_connect_declined(self):
        """A connector returning False is reported as a failure."""
        self.connector.connect_provider.return_value = False

        result = await self.manager.connect("MetaMask")

        self.assertFalse(result)
        self.notifier.notify_failure.assert_called_once_with("Failed to connect to MetaMask", "Please try again")
        self.on_success.assert_not_called()
        self.assertIsNone(self.manager.currently_connecting())

    async def test_connect_error_is_not_propagated(self):
        """Errors raised by the connector become a failed attempt."""
        self.connector.connect_provider.side_effect = ProviderConnectionError("MetaMask", "user rejected")

        result = await self.manager.connect("MetaMask")

        self.assertFalse(result)
        message, _ = self.notifier.notify_failure.call_args[0]
        self.assertIn("MetaMask", message)
        self.assertIsNone(self.manager.currently_connecting())

    async def test_unexpected_error_is_not_propagated(self):
        self.connector.connect_provider.side_effect = RuntimeError("extension crashed")

        self.assertFalse(await self.manager.connect("Trust Wallet"))
        self.assertIsNone(self.manager.currently_connecting())

    async def test_notifier_failure_does_not_change_outcome(self):
        self.notifier.notify_success.side_effect = RuntimeError("toast failed")

        self.assertTrue(await self.manager.connect("Phantom"))
        self.on_success.assert_called_once_with("Phantom")
        self.assertIsNone(self.manager.currently_connecting())

    async def test_success_callback_failure_does_not_change_outcome(self):
        self.on_success.side_effect = RuntimeError("view gone")

        self.assertTrue(await self.manager.connect("Phantom"))
        self.assertIsNone(self.manager.currently_connecting())

    async def test_no_automatic_retry(self):
        self.connector.connect_provider.return_value = False

        await self.manager.connect("Phantom")

        self.assertEqual(self.connector.connect_provider.await_count, 1)


class TestSingleAttemptInFlight(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.connector = GatedConnector()
        self.notifier = MagicMock()
        self.manager = ConnectionManager(self.connector, self.notifier)

    async def test_connect_while_pending_is_ignored(self):
        """Phantom click while MetaMask is pending is ignored; after MetaMask fails, Phantom can start."""
        metamask = asyncio.create_task(self.manager.connect("MetaMask"))
        await asyncio.sleep(0)

        self.assertEqual(self.manager.currently_connecting(), "MetaMask")
        self.assertTrue(self.manager.is_connecting("MetaMask"))
        self.assertEqual(self.manager.current_attempt().status, ConnectionStatus.PENDING)

        ignored = await self.manager.connect("Phantom")
        self.assertFalse(ignored)
        self.assertEqual(self.connector.calls, ["MetaMask"])
        self.assertEqual(self.manager.currently_connecting(), "MetaMask")
        self.assertFalse(self.manager.is_connecting("Phantom"))
        self.notifier.notify_failure.assert_not_called()

        self.connector.gates["MetaMask"].set_exception(ProviderConnectionError("MetaMask", "rejected"))
        self.assertFalse(await metamask)
        self.assertIsNone(self.manager.currently_connecting())

        phantom = asyncio.create_task(self.manager.connect("Phantom"))
        await asyncio.sleep(0)
        self.assertEqual(self.manager.currently_connecting(), "Phantom")

        self.connector.gates["Phantom"].set_result(True)
        self.assertTrue(await phantom)
        self.assertEqual(self.connector.calls, ["MetaMask", "Phantom"])
        self.assertIsNone(self.manager.currently_connecting())

    async def test_ignored_request_does_not_affect_pending_outcome(self):
        pending = asyncio.create_task(self.manager.connect("MetaMask"))
        await asyncio.sleep(0)

        await self.manager.connect("MetaMask")
        await self.manager.connect("Trust Wallet")

        self.connector.gates["MetaMask"].set_result(True)
        self.assertTrue(await pending)
        self.notifier.notify_success.assert_called_once_with("Connected to MetaMask", "Wallet connected successfully")
        self.assertEqual(self.connector.calls, ["MetaMask"])

    async def test_shared_slot_excludes_other_managers(self):
        slot = PendingSlot()
        first = ConnectionManager(self.connector, self.notifier, slot=slot)
        second = ConnectionManager(self.connector, self.notifier, slot=slot)

        pending = asyncio.create_task(first.connect("Phantom"))
        await asyncio.sleep(0)

        self.assertFalse(await second.connect("MetaMask"))
        self.assertEqual(second.currently_connecting(), "Phantom")

        self.connector.gates["Phantom"].set_result(False)
        self.assertFalse(await pending)
        self.assertIsNone(slot.current)

    async def test_independent_managers_do_not_interfere(self):
        other = ConnectionManager(GatedConnector(), MagicMock())

        pending = asyncio.create_task(self.manager.connect("Phantom"))
        await asyncio.sleep(0)
        other_pending = asyncio.create_task(other.connect("MetaMask"))
        await asyncio.sleep(0)

        self.assertEqual(self.manager.currently_connecting(), "Phantom")
        self.assertEqual(other.currently_connecting(), "MetaMask")

        self.connector.gates["Phantom"].set_result(True)
        other.connector.gates["MetaMask"].set_result(True)
        self.assertTrue(await pending)
        self.assertTrue(await other_pending)


class TestPendingSlot(unittest.TestCase):
    def test_try_acquire_is_exclusive(self):
        slot = PendingSlot()
        self.assertTrue(slot.try_acquire("Phantom"))
        self.assertFalse(slot.try_acquire("MetaMask"))
        self.assertEqual(slot.current, "Phantom")

        slot.release()
        self.assertIsNone(slot.current)
        self.assertTrue(slot.try_acquire("MetaMask"))


if __name__ == '__main__':
    unittest.main()
