from .openrouter_client import OpenRouterApiError, OpenRouterClient
from .wallet_client import SmartWalletClient, WalletBackend, WalletError, configure_with_wallet

__all__ = [
  "OpenRouterApiError",
  "OpenRouterClient",
  "SmartWalletClient",
  "WalletBackend",
  "WalletError",
  "configure_with_wallet",
]
