"""
Display helpers for the wallet card: address masking, balance formatting and
the estimated fiat value shown under the balance.
"""
from typing import Optional

from .transfer_validator import parse_amount

MASK_PREFIX = 6
MASK_SUFFIX = 4
DEFAULT_FIAT_RATE = 0.0845


def mask_address(address: str, masked: bool = True) -> str:
    """
    Shorten an address to its first 6 and last 4 characters.
    Applied to any non-empty address, so short ones overlap.
    """
    if not masked or not address:
        return address
    return f"{address[:MASK_PREFIX]}...{address[-MASK_SUFFIX:]}"


def format_balance(value, decimals: int = 2) -> str:
    """Format a balance with thousands separators ("2500" -> "2,500.00")."""
    parsed = parse_amount(str(value), allow_grouping=True)
    if parsed is None:
        return str(value)
    return f"{parsed:,.{decimals}f}"


def estimate_fiat_value(balance: str, rate: float = DEFAULT_FIAT_RATE, currency: str = "USD") -> Optional[str]:
    parsed = parse_amount(balance, allow_grouping=True)
    if parsed is None:
        return None
    return f"${parsed * rate:,.2f} {currency}"


class AddressDisplay:
    """Wallet address with a show/hide toggle. Masked by default."""

    def __init__(self, address: str = "", masked: bool = True):
        self.address = address
        self.masked = masked

    def toggle(self) -> bool:
        self.masked = not self.masked
        return self.masked

    @property
    def text(self) -> str:
        return mask_address(self.address, self.masked)

    def __str__(self):
        return self.text
