"""Google authentication exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class CredentialsNotFoundError(GoogleAuthError):
    """Raised when service account credentials are not configured."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Service account credentials not configured: {', '.join(missing)}. "
            "Set GOOGLE_SERVICE_ACCOUNT_EMAIL and GOOGLE_PRIVATE_KEY."
        )


class InvalidPrivateKeyError(GoogleAuthError):
    """Raised when the private key is not a usable PEM key."""

    pass
