"""Google service account authentication utilities."""

from timewise.google.exceptions import (
    CredentialsNotFoundError,
    GoogleAuthError,
    InvalidPrivateKeyError,
)
from timewise.google.service_account import GoogleServiceAccount, normalize_private_key

__all__ = [
    "GoogleServiceAccount",
    "normalize_private_key",
    "GoogleAuthError",
    "CredentialsNotFoundError",
    "InvalidPrivateKeyError",
]
