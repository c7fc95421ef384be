"""
API relay module for Sysmon Core.

Sends a caller-supplied payload to a caller-supplied endpoint in a single
synchronous POST. Retrying is left to the caller.
"""

from __future__ import annotations

import logging
import time
from http import HTTPStatus

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def _default_user_agent() -> str:
    from sysmon_core import __version__

    return f"sysmon-core/{__version__}"


def canonical_reason(status_code: int) -> str:
    """Return the standard reason phrase for an HTTP status code."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown"


class ApiRelay:
    """
    Relays payloads to a remote HTTP endpoint.

    The session carries the fixed headers; the bearer token is added per
    request, only when one is supplied.
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT, user_agent: str | None = None):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": user_agent or _default_user_agent(),
                "Content-Type": "application/json",
            }
        )

    def build_headers(self, token: str | None = None) -> dict[str, str]:
        """Per-request headers; Authorization only for a non-empty token."""
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
            logger.debug("Authorization token added to request")
        return headers

    def send(self, endpoint: str, payload: str, token: str | None = None) -> str:
        """
        POST a payload and return the response body.

        Args:
            endpoint: Target URL.
            payload: Request body, sent verbatim.
            token: Optional bearer token.

        Returns:
            Response body text, unchanged.

        Raises:
            TransportError: If the request could not be completed.
            HttpStatusError: If the server answered with a non-success status.
            ResponseReadError: If the response body could not be read.
        """
        logger.info(f"Sending data to API: {endpoint}")
        start_time = time.perf_counter()

        try:
            response = self.session.post(
                endpoint,
                data=payload.encode("utf-8"),
                headers=self.build_headers(token),
                timeout=self.timeout,
                stream=True,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Request to {endpoint} timed out")
            raise TransportError(f"Request timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"HTTP request failed: {e}")
            raise TransportError(f"Request error: {e}") from e

        duration = (time.perf_counter() - start_time) * 1000
        logger.debug(f"HTTP response {response.status_code} in {duration:.0f}ms")

        try:
            if not 200 <= response.status_code < 300:
                error = HttpStatusError(response.status_code)
                logger.error(f"HTTP error: {error}")
                raise error

            try:
                body = response.text
            except requests.exceptions.RequestException as e:
                logger.error(f"Error reading response: {e}")
                raise ResponseReadError(f"Error reading response: {e}") from e
        finally:
            response.close()

        logger.info("Data sent to API successfully")
        return body


class RelayError(Exception):
    """Base class for relay failures."""

    pass


class TransportError(RelayError):
    """Raised when the request never produced an HTTP response."""

    pass


class HttpStatusError(RelayError):
    """Raised when the server answers with a non-success status."""

    def __init__(self, status_code: int, reason: str | None = None):
        self.status_code = status_code
        self.reason = reason or canonical_reason(status_code)
        super().__init__(f"HTTP {status_code}: {self.reason}")


class ResponseReadError(RelayError):
    """Raised when a successful response body cannot be read."""

    pass
