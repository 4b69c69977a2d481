import pytest

from wallet_panel.transfer_validator import (
    TransferRequest,
    ValidationReason,
    ValidationResult,
    parse_amount,
    validate,
    validate_request,
)


class TestValidate:
    def test_missing_recipient(self):
        assert validate("", "5", "10").reason == ValidationReason.MISSING_RECIPIENT

    def test_blank_recipient(self):
        assert validate("   ", "5", "10").reason == ValidationReason.MISSING_RECIPIENT

    def test_none_recipient(self):
        assert validate(None, "5", "10").reason == ValidationReason.MISSING_RECIPIENT

    @pytest.mark.parametrize("amount", ["0", "-3", "", "abc", None, "nan", "inf", "0.000"])
    def test_invalid_amount(self, amount):
        assert validate("addr1", amount, "10").reason == ValidationReason.INVALID_AMOUNT

    def test_insufficient_balance(self):
        assert validate("addr1", "15", "10").reason == ValidationReason.INSUFFICIENT_BALANCE

    def test_amount_equal_to_balance_is_valid(self):
        result = validate("addr1", "10", "10")
        assert result.valid
        assert result.reason is None
        assert result.message is None

    def test_fractional_boundary(self):
        assert validate("0xAB...", "2.5", "2.5").valid

    def test_first_failing_rule_wins(self):
        """Missing recipient is reported even when the amount is also bad."""
        assert validate("", "-1", "0").reason == ValidationReason.MISSING_RECIPIENT
        assert validate("addr1", "0", "0").reason == ValidationReason.INVALID_AMOUNT

    def test_grouped_balance(self):
        assert validate("addr1", "2500", "2,500.00").valid
        assert validate("addr1", "2500.01", "2,500.00").reason == ValidationReason.INSUFFICIENT_BALANCE

    def test_unreadable_balance_is_insufficient(self):
        assert validate("addr1", "1", "n/a").reason == ValidationReason.INSUFFICIENT_BALANCE

    def test_messages(self):
        assert validate("", "1", "1").message == "Recipient address is required"
        assert validate("a", "0", "1").message == "Please enter a valid amount"
        assert validate("a", "2", "1").message == "Insufficient balance"

    def test_validate_request(self):
        request = TransferRequest(recipient_address="addr1", amount="1", available_balance="10")
        assert validate_request(request).valid


class TestValidationResult:
    def test_truthiness(self):
        assert ValidationResult.ok()
        assert not ValidationResult.invalid(ValidationReason.INVALID_AMOUNT)


class TestParseAmount:
    def test_parses_decimal_strings(self):
        assert parse_amount("2.5") == 2.5
        assert parse_amount(" 10 ") == 10.0
        assert parse_amount("1e3") == 1000.0

    def test_grouping_only_when_allowed(self):
        assert parse_amount("2,500.00") is None
        assert parse_amount("2,500.00", allow_grouping=True) == 2500.0

    def test_rejects_garbage(self):
        assert parse_amount("2.5abc") is None
        assert parse_amount("") is None
        assert parse_amount(None) is None
        assert parse_amount("-inf") is None
