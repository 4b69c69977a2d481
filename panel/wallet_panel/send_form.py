import logging
from typing import Callable, Optional

from .transfer_validator import ValidationResult, validate

logger = logging.getLogger(__name__)

SendCallback = Callable[[str, str], None]


class SendTokenForm:
    """
    State of the send-token form.

    The inputs survive a failed submission so the user can correct them, and
    are cleared once a valid transfer has been handed to the send callback.
    """

    def __init__(self, available_balance: str, on_send: SendCallback, token_symbol: str = "NETX"):
        self.available_balance = available_balance
        self.on_send = on_send
        self.token_symbol = token_symbol
        self.recipient_address = ""
        self.amount = ""
        self.error: Optional[str] = None
        self.is_open = False

    def open(self):
        self.is_open = True

    def fill_max(self):
        """Set the amount to the whole available balance."""
        self.amount = self.available_balance.replace(",", "")

    def submit(self) -> ValidationResult:
        result = validate(self.recipient_address, self.amount, self.available_balance)
        if not result.valid:
            self.error = result.message
            logger.info(f"Send rejected: {result.reason.value}")
            return result

        self.on_send(self.recipient_address, self.amount)
        self.reset()
        self.is_open = False
        return result

    def cancel(self):
        self.reset()
        self.is_open = False

    def reset(self):
        self.recipient_address = ""
        self.amount = ""
        self.error = None
