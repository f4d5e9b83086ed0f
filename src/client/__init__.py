from .auth_client import AuthApiClient, AuthApiError, TokenStore

__all__ = ["AuthApiClient", "AuthApiError", "TokenStore"]
