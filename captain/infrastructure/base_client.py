"""Base class for HTTP clients talking to an archive mirror."""

import logging
from typing import Optional

import httpx

from ..application.exceptions import ConfigurationError


class BaseClient:
    """A base client that handles an HTTP client and timeout configuration."""

    def __init__(self, client: httpx.Client, timeout: Optional[float]):
        """
        Initializes the base client.

        Args:
            client: An instance of httpx.Client.
            timeout: Per-request timeout in seconds, or None to leave the
                     client's own timeout in effect.

        Raises:
            ConfigurationError: If a timeout is given and is not positive.
        """

        if timeout is not None and timeout <= 0:
            raise ConfigurationError(
                f"Timeout for {self.__class__.__name__} must be positive, "
                f"got {timeout!r}. Please check your config files."
            )

        self.client = client
        self.timeout = timeout
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def request_timeout(self):
        """The timeout to pass per request; the client default when unset."""
        if self.timeout is None:
            return httpx.USE_CLIENT_DEFAULT
        return self.timeout
