class WalletPanelError(Exception):
    """Base class for wallet panel errors."""


class ProviderConnectionError(WalletPanelError):
    """
    Raised by a connector when a wallet provider rejects or fails a connection.
    """
    def __init__(self, provider: str, message: str = ""):
        self.provider = provider
        self.message = message
        super().__init__(f"Failed to connect to {provider}. Reason: {message or 'unknown'}")


class WalletServiceError(WalletPanelError):
    """
    Raised when the wallet service cannot read the wallet or dispatch a transfer.
    """
    def __init__(self, operation: str, message: str = ""):
        self.operation = operation
        self.message = message
        super().__init__(f"Wallet service {operation} failed: {message or 'unknown error'}")


class ProviderConfigError(WalletPanelError):
    """Raised when a provider configuration file cannot be used."""
    def __init__(self, path: str, message: str = ""):
        self.path = path
        self.message = message
        super().__init__(f"Invalid provider config {path}: {message}")
