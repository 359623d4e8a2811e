from .store import SessionStore, WalletSession, key_fingerprint

__all__ = ["SessionStore", "WalletSession", "key_fingerprint"]
