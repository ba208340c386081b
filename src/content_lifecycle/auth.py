"""Credential resolution for the Confluence content store.

Values passed explicitly to the Authenticator win; anything left unset falls
back to environment variables, which python-dotenv may populate from a .env
file. A setting that is still empty after both is a configuration error.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

ENV_BASE_URL = 'CONFLUENCE_BASE_URL'
ENV_USERNAME = 'CONFLUENCE_USERNAME'
ENV_API_KEY = 'CONFLUENCE_API_KEY'


class Credentials(NamedTuple):
    """Endpoint and credentials for the content store."""
    base_url: str
    username: str
    api_key: str


class Authenticator:
    """Resolves the (base URL, username, API key) triple.

    Credentials are resolved on demand and never logged.

    Environment variables:
        CONFLUENCE_BASE_URL: Site URL (e.g., https://yourinstance.atlassian.net)
        CONFLUENCE_USERNAME: Account email address
        CONFLUENCE_API_KEY: Atlassian API token

    Example:
        >>> auth = Authenticator(base_url="https://example.atlassian.net")
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.base_url}")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        username: Optional[str] = None,
        api_key: Optional[str] = None,
    ):
        """Record explicit values and load the .env file, if any.

        Args:
            base_url: Explicit site URL, overrides CONFLUENCE_BASE_URL
            username: Explicit username, overrides CONFLUENCE_USERNAME
            api_key: Explicit API key, overrides CONFLUENCE_API_KEY
        """
        self._base_url = base_url
        self._username = username
        self._api_key = api_key
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Resolve credentials from explicit values and the environment.

        Returns:
            Credentials: The resolved triple

        Raises:
            InvalidCredentialsError: If any setting is empty after resolution
        """
        base_url = self._base_url if self._base_url is not None else os.getenv(ENV_BASE_URL)
        username = self._username if self._username is not None else os.getenv(ENV_USERNAME)
        api_key = self._api_key if self._api_key is not None else os.getenv(ENV_API_KEY)

        missing = []
        if not base_url:
            missing.append(ENV_BASE_URL)
        if not username:
            missing.append(ENV_USERNAME)
        if not api_key:
            missing.append(ENV_API_KEY)

        if missing:
            raise InvalidCredentialsError(missing, user=username, endpoint=base_url)

        return Credentials(
            base_url=base_url.rstrip('/'),  # type: ignore[union-attr]
            username=username,  # type: ignore[arg-type]
            api_key=api_key,  # type: ignore[arg-type]
        )
