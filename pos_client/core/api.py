"""
Shared request helper for the point-of-sale backend.

Every resource client (products, sales, categories, reports) goes through
ApiClient.request, which:
- prefixes the configured base URL
- sends bodies as JSON with a JSON content type
- turns non-2xx responses into ApiHTTPError with the server's message
- turns connection problems into ApiTransportError

There are no retries, no caching and no de-duplication of identical
in-flight requests: one call, one HTTP request.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from pos_client import settings

from .exceptions import ApiError, ApiHTTPError, ApiTransportError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Request failed"


class ApiClient:
    """
    Thin JSON-over-HTTP client bound to one backend base URL.

    The client trusts the server's response shape; typed parsing happens in
    the resource clients.

    Page loads share one session across fetch_concurrently worker threads.
    requests does not document Session as thread-safe; concurrent requests
    only read its configuration and the urllib3 pool is locked, so do not
    mutate session headers, cookies or adapters while a load is running.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: Backend root URL (default: settings.API_BASE_URL)
            timeout: Per-request timeout in seconds (default: settings.API_TIMEOUT)
            session: Optional pre-configured requests session
        """
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT
        self.session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.session.close()

    def build_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def request(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform one request and return the decoded JSON response.

        Args:
            path: Path below the base URL, starting with "/"
            method: HTTP verb (default: GET)
            body: JSON-serializable request body
            params: Query string parameters, sent in insertion order

        Returns:
            Decoded JSON, or None for an empty response body

        Raises:
            ApiTransportError: If no response was received
            ApiHTTPError: If the response status is not 2xx
            ApiError: If a 2xx response body is not valid JSON
        """
        url = self.build_url(path)
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        data = json.dumps(body) if body is not None else None

        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                data=data,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.warning(f"{method} {url} timed out after {self.timeout} seconds")
            raise ApiTransportError(f"Request to {path} timed out") from e
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiTransportError(f"Request to {path} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            error = self._http_error(response)
            logger.warning(f"{method} {url} returned {response.status_code}: {error.message}")
            raise error

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{method} {url} returned a body that is not JSON")
            raise ApiError(f"Invalid JSON response from {path}") from e

    @staticmethod
    def _http_error(response: requests.Response) -> ApiHTTPError:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        message = None
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("error")
            # Validation pipes on the backend report a list of messages
            if isinstance(message, list):
                message = ", ".join(str(m) for m in message)

        return ApiHTTPError(
            message=str(message or response.reason or GENERIC_ERROR_MESSAGE),
            status_code=response.status_code,
            payload=payload,
        )
