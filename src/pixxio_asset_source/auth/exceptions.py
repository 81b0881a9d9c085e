"""Exceptions raised while resolving credentials and authenticating a pixx.io client.

Both exceptions are recoverable: a failed resolution leaves the asset source
without a cached client, so the next call to ``get_client()`` starts over.

Example:
    ```python
    from pixxio_asset_source.auth.exceptions import MissingClientSecretError

    try:
        client = asset_source.get_client()
    except MissingClientSecretError as e:
        print(f"Set up pixx.io credentials for {e.principal_identifier}")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    Catch this to handle both a missing secret and a rejected refresh token.
    """

    pass


class MissingClientSecretError(CredentialError):
    """Raised when no usable refresh token exists for the active principal.

    The shared refresh token fallback has already been applied when this is raised.

    Attributes:
        principal_identifier: The principal that was looked up ("shared" when anonymous).
    """

    def __init__(self, message: str, principal_identifier: str):
        super().__init__(message)
        self.principal_identifier = principal_identifier


class AuthenticationFailedError(CredentialError):
    """Raised when pixx.io rejects the exchange of a refresh token for a session."""

    def __init__(self, message: str, principal_identifier: str | None = None):
        super().__init__(message)
        self.principal_identifier = principal_identifier
