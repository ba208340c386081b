"""Unit tests for API timeout configuration in APIWrapper."""

import pytest
from unittest.mock import Mock, patch
from requests.exceptions import ConnectTimeout, ReadTimeout, Timeout

from src.content_lifecycle.api_wrapper import REQUEST_TIMEOUT, APIWrapper
from src.content_lifecycle.auth import Authenticator, Credentials
from src.content_lifecycle.errors import TransportError


class TestAPITimeout:
    """Test cases for API timeout configuration."""

    @pytest.fixture
    def mock_authenticator(self):
        """Create a mock authenticator with valid credentials."""
        auth = Mock(spec=Authenticator)
        auth.get_credentials.return_value = Credentials(
            base_url="https://test.atlassian.net",
            username="test@example.com",
            api_key="fake-token",
        )
        return auth

    @pytest.fixture
    def api_wrapper(self, mock_authenticator):
        """Create an APIWrapper instance with mocked authenticator."""
        return APIWrapper(mock_authenticator)

    def test_confluence_client_initialized_with_timeout(self, api_wrapper):
        """Verify Confluence client is initialized with 30s timeout."""
        with patch('src.content_lifecycle.api_wrapper.Confluence') as MockConfluence:
            # Access client to trigger initialization
            api_wrapper._get_client()

            MockConfluence.assert_called_once()
            call_kwargs = MockConfluence.call_args.kwargs
            assert call_kwargs['timeout'] == 30
            assert REQUEST_TIMEOUT == 30

    @pytest.mark.parametrize("error", [
        Timeout("Request timed out after 30s"),
        ConnectTimeout("Connection timed out"),
        ReadTimeout("Read timed out"),
    ])
    def test_timeouts_raise_transport_error(self, api_wrapper, error):
        """A timed out request is reported once and not retried."""
        with patch('src.content_lifecycle.api_wrapper.Confluence') as MockConfluence:
            mock_client = Mock()
            mock_client.get.side_effect = error
            MockConfluence.return_value = mock_client

            with pytest.raises(TransportError) as exc_info:
                api_wrapper.get_page("123456")

            assert "timed out" in str(exc_info.value)
            assert mock_client.get.call_count == 1

    def test_timeout_on_version_delete(self, api_wrapper):
        with patch('src.content_lifecycle.api_wrapper.Confluence') as MockConfluence:
            mock_client = Mock()
            mock_client.delete.side_effect = ReadTimeout("Read timed out")
            MockConfluence.return_value = mock_client

            with pytest.raises(TransportError):
                api_wrapper.delete_oldest_version(123456)
