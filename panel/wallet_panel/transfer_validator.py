"""
Transfer Validator: checks a proposed outbound transfer before it is dispatched.

Rules run in a fixed order and the first failing rule wins:
1. the recipient address must be non-empty,
2. the amount must be a number greater than zero,
3. the amount must not exceed the available balance.
"""
import enum
import math
from dataclasses import dataclass
from typing import Optional


class ValidationReason(enum.Enum):
    MISSING_RECIPIENT = "missing_recipient"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_BALANCE = "insufficient_balance"


MESSAGES = {
    ValidationReason.MISSING_RECIPIENT: "Recipient address is required",
    ValidationReason.INVALID_AMOUNT: "Please enter a valid amount",
    ValidationReason.INSUFFICIENT_BALANCE: "Insufficient balance",
}


@dataclass(frozen=True)
class ValidationResult:
    reason: Optional[ValidationReason] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def invalid(cls, reason: ValidationReason) -> "ValidationResult":
        return cls(reason=reason)

    @property
    def valid(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> Optional[str]:
        """Inline message shown next to the form, None when valid."""
        return MESSAGES[self.reason] if self.reason else None

    def __bool__(self) -> bool:
        return self.valid


@dataclass
class TransferRequest:
    recipient_address: str
    amount: str
    available_balance: str


def parse_amount(text: Optional[str], allow_grouping: bool = False) -> Optional[float]:
    """
    Parse a decimal string into a float. Returns None for empty, malformed,
    or non-finite input. With allow_grouping, "," thousands separators are
    stripped first ("2,500.00" -> 2500.0).
    """
    if text is None:
        return None
    text = str(text).strip()
    if allow_grouping:
        text = text.replace(",", "")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def validate(recipient_address: Optional[str], amount: Optional[str], available_balance: Optional[str]) -> ValidationResult:
    """Validate a transfer. Never raises and never dispatches anything."""
    if not (recipient_address or "").strip():
        return ValidationResult.invalid(ValidationReason.MISSING_RECIPIENT)

    parsed_amount = parse_amount(amount)
    if parsed_amount is None or parsed_amount <= 0:
        return ValidationResult.invalid(ValidationReason.INVALID_AMOUNT)

    # An unreadable balance cannot cover any amount.
    parsed_balance = parse_amount(available_balance, allow_grouping=True)
    if parsed_balance is None or parsed_amount > parsed_balance:
        return ValidationResult.invalid(ValidationReason.INSUFFICIENT_BALANCE)

    return ValidationResult.ok()


def validate_request(request: TransferRequest) -> ValidationResult:
    return validate(request.recipient_address, request.amount, request.available_balance)
