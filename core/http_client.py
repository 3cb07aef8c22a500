"""
HTTP client for the HlaPrint print-job service.

Wraps httpx with the conventions every HlaPrint endpoint shares:

    - JSON request bodies, Content-Type: application/json by default
    - Body read as text first, then JSON-decoded; undecodable bodies fall
      back to the raw text (never an error on its own)
    - Non-2xx responses raise HttpError with status, proxy diagnostic header
      and the first 400 characters of the body
    - Every call bounded by a timeout; no retries, no caching

Logging:
    Method, host and path only. Authorization headers and request bodies
    (which carry passwords on login) are never logged.

Usage:
    client = HlaPrintClient("https://print.example.com", timeout_seconds=30)

    payload = client.post_json("/api/login", {"email": e, "password": p})

    client.close()
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

import httpx

from .exceptions import HttpError, RequestTimeoutError, ServiceUnavailableError


# Raw body characters kept in HttpError.body_excerpt
MAX_BODY_EXCERPT_LENGTH = 400

DEFAULT_PROXY_ERROR_HEADER = "X-Upstream-Error"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Decoded JSON value, or the raw text when the body is not JSON
ParsedResponse = Union[Dict[str, Any], list, str, int, float, bool, None]


class HlaPrintClient:
    """
    Thin synchronous client for the HlaPrint REST API.

    One instance is shared by the application; httpx.Client is thread-safe,
    and the client itself keeps no per-request state.

    Attributes:
        base_url: Root URL of the print service
        timeout_seconds: Upper bound for every request
        proxy_error_header: Response header carrying proxy diagnostics
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        proxy_error_header: str = DEFAULT_PROXY_ERROR_HEADER,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Root URL of the print service (e.g. https://print.example.com)
            timeout_seconds: Request timeout in seconds
            proxy_error_header: Name of the proxy diagnostic header
            logger: Logger instance (creates default if not provided)
            transport: Optional httpx transport (tests inject a mock here)

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            raise ValueError("base_url is required - set HLAPRINT_BASE_URL")

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.proxy_error_header = proxy_error_header
        self._logger = logger or logging.getLogger("hlaprint_bridge.core.http_client")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    def request(
        self,
        path: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[Any] = None,
    ) -> ParsedResponse:
        """
        Send a request and return the decoded payload.

        Args:
            path: Endpoint path relative to base_url (e.g. "/api/login")
            method: HTTP method
            headers: Extra headers, merged over the JSON default
            body: JSON-serializable body (omitted when None)

        Returns:
            Decoded JSON value, or the raw body text if it is not JSON

        Raises:
            HttpError: On non-2xx status
            RequestTimeoutError: If the request timed out
            ServiceUnavailableError: On any other transport failure
        """
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        content = None
        if body is not None:
            content = json.dumps(body, ensure_ascii=False).encode("utf-8")

        url = f"{self.base_url}/{path.lstrip('/')}"
        parsed = urlparse(url)
        self._logger.debug(f"{method} {parsed.scheme}://{parsed.netloc}{parsed.path}")

        try:
            response = self._client.request(
                method,
                url,
                headers=request_headers,
                content=content,
            )
        except httpx.TimeoutException as e:
            self._logger.error(f"{method} {parsed.path} timed out: {e}")
            raise RequestTimeoutError(self.timeout_seconds, url=parsed.path)
        except httpx.RequestError as e:
            self._logger.error(f"{method} {parsed.path} failed: {e.__class__.__name__}: {e}")
            raise ServiceUnavailableError(
                f"Could not reach HlaPrint: {e.__class__.__name__}", url=parsed.path
            )

        text = response.text
        payload = self._decode(text)

        if not response.is_success:
            proxy_error = response.headers.get(self.proxy_error_header)
            error = HttpError(
                status=response.status_code,
                proxy_error=proxy_error,
                body_excerpt=text[:MAX_BODY_EXCERPT_LENGTH],
            )
            self._logger.warning(f"{method} {parsed.path} -> {error}")
            raise error

        self._logger.debug(f"{method} {parsed.path} -> {response.status_code}")
        return payload

    def post_json(
        self,
        path: str,
        body: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> ParsedResponse:
        """POST a JSON body and return the decoded payload."""
        return self.request(path, method="POST", headers=headers, body=body)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    @staticmethod
    def _decode(text: str) -> ParsedResponse:
        """Decode JSON if possible, otherwise return the raw text."""
        try:
            return json.loads(text)
        except ValueError:
            return text
