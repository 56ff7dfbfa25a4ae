"""
Credential providers for the Google Docs API.
"""

from typing import Optional, Protocol

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.service_account import Credentials

from notes_app.config import config
from notes_app.utils.errors import AuthError
from notes_app.utils.logger import logging


class CredentialProvider(Protocol):
    """Supplies a bearer token for document API calls."""

    def get_auth_token(self) -> str:
        ...


class StaticTokenProvider:
    """Use an OAuth access token obtained elsewhere."""

    def __init__(self, token: Optional[str]):
        self.token = token

    def get_auth_token(self) -> str:
        if not self.token:
            raise AuthError("No Google Docs access token is configured.")
        return self.token


class ServiceAccountTokenProvider:
    """Mint access tokens from a service account key file."""

    def __init__(self, credential_path: str, scopes: Optional[list] = None):
        self.credential_path = credential_path
        self.scopes = scopes or [config.DOCS_SCOPE]
        self._credentials = None

    def get_auth_token(self) -> str:
        try:
            if self._credentials is None:
                self._credentials = Credentials.from_service_account_file(
                    self.credential_path,
                    scopes=self.scopes,
                )
            if not self._credentials.valid:
                self._credentials.refresh(Request())
        except (GoogleAuthError, OSError, ValueError) as e:
            logging.error(f"Service account authentication failed: {e}")
            raise AuthError(f"Authentication failed: {e}") from e

        return self._credentials.token


def default_credential_provider() -> CredentialProvider:
    """Pick a credential provider from the environment configuration."""
    if config.GOOGLE_SERVICE_ACCOUNT_FILE:
        return ServiceAccountTokenProvider(config.GOOGLE_SERVICE_ACCOUNT_FILE)
    return StaticTokenProvider(config.GOOGLE_DOCS_TOKEN)
