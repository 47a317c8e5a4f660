"""
Signed GraphQL Client

Thin HTTP client for the tenant data API (AppSync). Every call is signed
with the function's own credentials; there is no caller identity involved.
"""

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import httpx

from core.clients.credentials import BotoCredentialProvider, CredentialProvider
from core.clients.signing import DEFAULT_SERVICE, sign_request
from core.config import DataApiSettings
from core.errors.exceptions import DataApiError, UpstreamError

logger = logging.getLogger(__name__)


class SignedGraphQLClient:
    """HTTP client executing signed GraphQL operations."""

    def __init__(
        self,
        settings: Optional[DataApiSettings] = None,
        credential_provider: Optional[CredentialProvider] = None,
        *,
        service: str = DEFAULT_SERVICE,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Endpoint, region and timeout. Defaults to
                DataApiSettings.from_env().
            credential_provider: Source of signing credentials. Defaults to
                the botocore provider chain.
            service: Signing service name
            transport: Optional httpx transport (used by tests)
            clock: Optional callable returning the signing time

        Raises:
            ConfigurationError: If settings are not given and the environment
                lacks the endpoint or region
        """
        self.settings = settings or DataApiSettings.from_env()
        self.credential_provider = credential_provider or BotoCredentialProvider()
        self.service = service
        self._clock = clock
        # Create a single httpx client instance for reuse
        self._client = httpx.Client(timeout=self.settings.timeout, transport=transport)

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a query or mutation and return its ``data`` object.

        Args:
            query: GraphQL document
            variables: JSON-serializable variables

        Returns:
            The response ``data`` mapping (empty dict when absent)

        Raises:
            CredentialsError: If no credentials are available
            UpstreamError: On network failures, HTTP errors or malformed JSON
            DataApiError: If the response carries GraphQL errors
        """
        credentials = self.credential_provider.get_credentials()

        # Serialized once: these bytes are both hashed and sent
        body = json.dumps({"query": query, "variables": variables or {}}).encode("utf-8")
        now = self._clock() if self._clock else None
        headers = sign_request(
            credentials,
            "POST",
            self.settings.endpoint,
            body,
            self.settings.region,
            service=self.service,
            now=now,
        )

        try:
            response = self._client.post(self.settings.endpoint, content=body, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            error_text = e.response.text[:500] if e.response.text else ""
            raise UpstreamError(
                f"API returned error {status_code}: {error_text}"
            ) from e
        except httpx.RequestError as e:
            raise UpstreamError(
                f"API request failed: {type(e).__name__}: {str(e)}"
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"API returned malformed JSON (status {response.status_code})"
            ) from e

        if not isinstance(payload, dict):
            raise UpstreamError(
                f"API returned unexpected payload type {type(payload).__name__}"
            )

        errors = payload.get("errors")
        if errors:
            logger.error("Data API returned %d error(s)", len(errors))
            raise DataApiError(f"GraphQL errors: {json.dumps(errors)}", errors=errors)

        return payload.get("data") or {}

    def close(self) -> None:
        self._client.close()

    def __del__(self):
        """Close httpx client on cleanup."""
        if hasattr(self, "_client"):
            try:
                self._client.close()
            except Exception:
                pass
